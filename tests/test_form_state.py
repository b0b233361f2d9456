"""Tests for the immutable FormState model."""

import pytest

from visas.form_state import FileRef, FilesValue, FormState, TextValue


def _file(name, size=10):
    return FileRef(name=name, size=size, content_type="application/pdf")


class TestFormStateApply:
    """Tests for FormState.apply."""

    def test_apply_returns_new_state(self):
        """Test apply leaves the original state untouched."""
        empty = FormState()
        filled = empty.apply("mother_name", TextValue("Fatima"))

        assert len(empty) == 0
        assert "mother_name" not in empty
        assert filled.text("mother_name") == "Fatima"

    def test_apply_replaces_only_one_field(self):
        """Test every other field keeps its value."""
        state = (
            FormState()
            .apply("mother_name", TextValue("Fatima"))
            .apply("father_name", TextValue("Rahim"))
            .apply("passport_scan", FilesValue((_file("a.pdf"),)))
        )

        updated = state.apply("mother_name", TextValue("Fatema"))

        assert updated.text("mother_name") == "Fatema"
        assert updated.text("father_name") == "Rahim"
        assert updated.files("passport_scan") == (_file("a.pdf"),)
        assert len(updated) == 3

    def test_apply_rejects_raw_values(self):
        """Test only TextValue / FilesValue can be stored."""
        with pytest.raises(TypeError):
            FormState().apply("mother_name", "Fatima")

    def test_reselecting_files_replaces_selection(self):
        """Test a second file selection replaces the first one."""
        state = FormState().apply("passport_scan", FilesValue((_file("a.pdf"), _file("b.pdf"))))
        state = state.apply("passport_scan", FilesValue((_file("c.pdf"),)))

        assert [f.name for f in state.files("passport_scan")] == ["c.pdf"]


class TestFormStateQueries:
    """Tests for the read helpers."""

    def test_is_filled(self):
        """Test blank text and empty file lists count as not filled."""
        state = (
            FormState()
            .apply("blank", TextValue("   "))
            .apply("name", TextValue("Amina"))
            .apply("no_files", FilesValue())
            .apply("files", FilesValue((_file("a.pdf"),)))
        )

        assert not state.is_filled("blank")
        assert state.is_filled("name")
        assert not state.is_filled("no_files")
        assert state.is_filled("files")
        assert not state.is_filled("missing")

    def test_text_and_file_values_are_split(self):
        """Test text answers and file selections are reported separately."""
        state = (
            FormState()
            .apply("mother_name", TextValue("Fatima"))
            .apply("passport_scan", FilesValue((_file("a.pdf"),)))
        )

        assert state.text_values() == {"mother_name": "Fatima"}
        assert state.file_values() == [("passport_scan", (_file("a.pdf"),))]

    def test_typed_accessors_ignore_other_kind(self):
        """Test text() on a file field and files() on a text field are empty."""
        state = (
            FormState()
            .apply("mother_name", TextValue("Fatima"))
            .apply("passport_scan", FilesValue((_file("a.pdf"),)))
        )

        assert state.text("passport_scan") == ""
        assert state.files("mother_name") == ()

    def test_file_ref_equality_ignores_content(self):
        """Test two refs to the same file compare equal regardless of the upload object."""
        assert FileRef("a.pdf", 10, "application/pdf", content=object()) == _file("a.pdf")
