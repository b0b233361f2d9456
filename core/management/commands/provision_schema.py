"""
Provision the backing schema: tables (via migrations) and, on PostgreSQL,
row-level security policies. Safe to run repeatedly.

    python manage.py provision_schema
"""

import logging

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connection, transaction

logger = logging.getLogger(__name__)

# Tables whose rows belong to one user.
OWNED_TABLES = {
    'visas_application': 'user_id',
    'tours_booking': 'user_id',
}

# Catalog tables readable by everyone when active.
PUBLIC_TABLES = {
    'visas_country': 'is_active = TRUE',
    'visas_visa_type': 'is_active = TRUE',
    'visas_requirement': 'TRUE',
    'tours_package': 'is_active = TRUE',
}

# The app sets `app.current_user_id` per connection when RLS is enforced.
CURRENT_USER = "NULLIF(current_setting('app.current_user_id', TRUE), '')::bigint"


def rls_statements():
    """(description, sql) pairs, each one idempotent."""
    statements = []

    for table in list(OWNED_TABLES) + list(PUBLIC_TABLES) + ['visas_application_file']:
        statements.append((
            f"enable RLS on {table}",
            f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY",
        ))

    for table, condition in PUBLIC_TABLES.items():
        policy = f"{table}_select_public"
        statements.append((f"policy {policy}", f"DROP POLICY IF EXISTS {policy} ON {table}"))
        statements.append((
            f"policy {policy}",
            f"CREATE POLICY {policy} ON {table} FOR SELECT USING ({condition})",
        ))

    for table, column in OWNED_TABLES.items():
        for action, clause in (('select', 'USING'), ('insert', 'WITH CHECK'), ('update', 'USING')):
            policy = f"{table}_{action}_own"
            statements.append((f"policy {policy}", f"DROP POLICY IF EXISTS {policy} ON {table}"))
            statements.append((
                f"policy {policy}",
                f"CREATE POLICY {policy} ON {table} FOR {action.upper()} "
                f"{clause} ({column} = {CURRENT_USER})",
            ))

    owner_check = (
        "EXISTS (SELECT 1 FROM visas_application a "
        "WHERE a.id = visas_application_file.application_id "
        f"AND a.user_id = {CURRENT_USER})"
    )
    for action, clause in (('select', 'USING'), ('insert', 'WITH CHECK')):
        policy = f"visas_application_file_{action}_own"
        statements.append((f"policy {policy}",
                           f"DROP POLICY IF EXISTS {policy} ON visas_application_file"))
        statements.append((
            f"policy {policy}",
            f"CREATE POLICY {policy} ON visas_application_file FOR {action.upper()} "
            f"{clause} ({owner_check})",
        ))

    return statements


class Command(BaseCommand):
    help = "Create/update tables and row-level security policies, reporting each statement."

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-migrate', action='store_true',
            help="Only apply the row-level security statements.")

    def handle(self, *args, **options):
        # 1. TABLES
        if not options['skip_migrate']:
            self.stdout.write("Applying migrations...")
            try:
                call_command('migrate', interactive=False, verbosity=0)
            except Exception as e:
                logger.error(f"Migration failed: {e}")
                raise CommandError(f"Migration failed: {e}") from e
            self.stdout.write(self.style.SUCCESS("OK      migrate"))

        # 2. ROW-LEVEL SECURITY (PostgreSQL only)
        if connection.vendor != 'postgresql':
            self.stdout.write(self.style.WARNING(
                f"SKIPPED row-level security (not supported on {connection.vendor})"))
            return

        failures = 0
        for description, sql in rls_statements():
            try:
                with transaction.atomic():
                    with connection.cursor() as cursor:
                        cursor.execute(sql)
            except DatabaseError as e:
                failures += 1
                logger.error(f"Statement failed ({description}): {e}")
                self.stdout.write(self.style.ERROR(f"FAILED  {description}: {e}"))
            else:
                self.stdout.write(self.style.SUCCESS(f"OK      {description}"))

        if failures:
            raise CommandError(f"{failures} statement(s) failed.")
        self.stdout.write(self.style.SUCCESS("Schema provisioned."))
