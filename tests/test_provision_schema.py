"""Tests for the provision_schema management command."""

from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError, connection

from core.management.commands.provision_schema import rls_statements


class FakeCursor:
    """Records schema SQL; fails the CREATE statements containing `fail_on`."""

    def __init__(self, executed, fail_on):
        self.executed = executed
        self.fail_on = fail_on

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql):
        if self.fail_on and self.fail_on in sql and sql.startswith("CREATE"):
            raise DatabaseError("permission denied")
        if sql.startswith(("ALTER", "DROP", "CREATE")):
            self.executed.append(sql)


class TestStatements:
    """Tests for the generated SQL."""

    def test_every_policy_is_dropped_first(self):
        """Test each CREATE POLICY follows a DROP POLICY IF EXISTS for the same name."""
        sqls = [sql for _, sql in rls_statements()]
        for index, sql in enumerate(sqls):
            if sql.startswith("CREATE POLICY"):
                name = sql.split()[2]
                assert sqls[index - 1].startswith(f"DROP POLICY IF EXISTS {name} ")

    def test_owned_tables_are_scoped_to_user(self):
        """Test applications and bookings are readable by their owner only."""
        sqls = [sql for _, sql in rls_statements()]
        for table in ("visas_application", "tours_booking"):
            assert f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY" in sqls
            select = next(s for s in sqls if s.startswith(f"CREATE POLICY {table}_select_own"))
            assert "user_id = " in select


@pytest.mark.django_db
class TestCommand:
    """Tests for running the command."""

    def test_skips_rls_on_sqlite(self):
        """Test non-PostgreSQL databases skip the policies."""
        out = StringIO()
        call_command("provision_schema", "--skip-migrate", stdout=out)
        assert "SKIPPED row-level security" in out.getvalue()

    def test_runs_migrate(self):
        """Test tables are created through migrate."""
        out = StringIO()
        with patch("core.management.commands.provision_schema.call_command") as migrate:
            call_command("provision_schema", stdout=out)

        migrate.assert_called_once_with("migrate", interactive=False, verbosity=0)
        assert "OK      migrate" in out.getvalue()

    def test_reports_each_statement(self, monkeypatch):
        """Test one failing statement is reported and the rest still run."""
        executed = []
        monkeypatch.setattr(connection, "vendor", "postgresql")
        monkeypatch.setattr(
            connection, "cursor", lambda: FakeCursor(executed, "tours_booking_update_own"))
        out = StringIO()

        with pytest.raises(CommandError):
            call_command("provision_schema", "--skip-migrate", stdout=out)

        output = out.getvalue()
        assert "FAILED  policy tours_booking_update_own" in output
        assert "OK      enable RLS on visas_application" in output
        assert len(executed) == len(rls_statements()) - 1
