"""
In-memory answers of one application form.

A FormState maps field name -> FormValue. It is never mutated in place:
`apply` returns a new state with exactly one entry replaced.
"""

from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class FileRef:
    name: str
    size: int
    content_type: str
    # The uploaded file object (UploadedFile / File). Not part of equality.
    content: object = field(default=None, compare=False, repr=False)

    @classmethod
    def from_upload(cls, upload):
        return cls(
            name=upload.name,
            size=upload.size,
            content_type=getattr(upload, 'content_type', None) or 'application/octet-stream',
            content=upload,
        )


@dataclass(frozen=True)
class TextValue:
    text: str

    def is_empty(self):
        return not self.text.strip()


@dataclass(frozen=True)
class FilesValue:
    files: tuple = ()

    def is_empty(self):
        return len(self.files) == 0


class FormState:
    """Immutable mapping of field name to TextValue / FilesValue."""

    __slots__ = ('_values',)

    def __init__(self, values=None):
        self._values = MappingProxyType(dict(values or {}))

    def apply(self, name, value):
        if not isinstance(value, (TextValue, FilesValue)):
            raise TypeError(f"Unsupported form value for '{name}': {value!r}")
        values = dict(self._values)
        values[name] = value
        return FormState(values)

    def get(self, name, default=None):
        return self._values.get(name, default)

    def text(self, name):
        value = self._values.get(name)
        if isinstance(value, TextValue):
            return value.text
        return ''

    def files(self, name):
        value = self._values.get(name)
        if isinstance(value, FilesValue):
            return value.files
        return ()

    def is_filled(self, name):
        value = self._values.get(name)
        return value is not None and not value.is_empty()

    def text_values(self):
        """JSON-safe dict of every text answer."""
        return {
            name: value.text
            for name, value in self._values.items()
            if isinstance(value, TextValue)
        }

    def file_values(self):
        """(field_name, tuple of FileRef) pairs in insertion order."""
        return [
            (name, value.files)
            for name, value in self._values.items()
            if isinstance(value, FilesValue)
        ]

    def __contains__(self, name):
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, FormState):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    def __repr__(self):
        return f"FormState({dict(self._values)!r})"
