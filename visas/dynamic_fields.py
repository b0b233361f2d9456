"""
Dynamic Field Renderer.

Turns a FieldDescriptor (one VisaRequirement row) into a Django form field,
and renders that field's widget with the current FormState value.
"""

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from .form_state import FileRef, FilesValue, TextValue

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    TEXT = 'text'
    EMAIL = 'email'
    PHONE = 'phone'
    DATE = 'date'
    FILE = 'file'
    TEXTAREA = 'textarea'
    DROPDOWN = 'dropdown'


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: FieldKind
    label: str
    required: bool = True
    options: tuple = ()
    placeholder: str = ''
    order: int = 0

    @property
    def is_file(self):
        return self.kind is FieldKind.FILE

    @classmethod
    def from_requirement(cls, requirement):
        kind = FieldKind(requirement.field_type)
        return cls(
            name=requirement.field_name,
            kind=kind,
            label=requirement.field_label,
            required=requirement.is_required,
            options=parse_options(requirement.options) if kind is FieldKind.DROPDOWN else (),
            placeholder=requirement.placeholder or '',
            order=requirement.order_index,
        )


def parse_options(raw):
    """
    Dropdown options are stored as a JSON list of strings.
    Anything that is not a list degrades to "no options".
    """
    if not raw:
        return ()
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Dropdown options are not valid JSON: {raw!r}")
        return ()
    if not isinstance(parsed, list):
        logger.warning(f"Dropdown options are not a list: {raw!r}")
        return ()
    return tuple(str(option) for option in parsed)


# ==========================================
# MULTI-FILE INPUT
# ==========================================

class MultipleFileInput(forms.FileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    """
    Accepts one or more files under a single name and returns them as a list.
    Size and extension limits follow VISA_UPLOAD_MAX_MB / VISA_UPLOAD_EXTENSIONS.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput())
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        if not data:
            if self.required:
                raise ValidationError(self.error_messages['required'], code='required')
            return []
        if not isinstance(data, (list, tuple)):
            data = [data]
        single_file_clean = super().clean
        cleaned = [single_file_clean(item, initial) for item in data]
        for uploaded_file in cleaned:
            validate_upload(uploaded_file)
        return cleaned


def validate_upload(uploaded_file):
    # 1. Size Validation
    limit_mb = settings.VISA_UPLOAD_MAX_MB
    if uploaded_file.size > limit_mb * 1024 * 1024:
        raise ValidationError(
            f"{uploaded_file.name}: file too large. Size should not exceed {limit_mb} MB.")

    # 2. Extension Validation
    ext = os.path.splitext(uploaded_file.name)[1].lower()
    valid_extensions = settings.VISA_UPLOAD_EXTENSIONS
    if ext not in valid_extensions:
        raise ValidationError(
            f"{uploaded_file.name}: unsupported file extension. "
            f"Allowed: {', '.join(valid_extensions)}.")


# ==========================================
# FIELD BUILDERS (one per kind)
# ==========================================

def _text_attrs(descriptor):
    return {'placeholder': descriptor.placeholder} if descriptor.placeholder else {}


def _common(descriptor):
    return {'label': descriptor.label, 'required': descriptor.required}


def _build_text(descriptor):
    return forms.CharField(
        widget=forms.TextInput(attrs=_text_attrs(descriptor)), **_common(descriptor))


def _build_email(descriptor):
    return forms.EmailField(
        widget=forms.EmailInput(attrs=_text_attrs(descriptor)), **_common(descriptor))


def _build_phone(descriptor):
    attrs = _text_attrs(descriptor)
    attrs['type'] = 'tel'
    return forms.CharField(
        max_length=30, widget=forms.TextInput(attrs=attrs), **_common(descriptor))


def _build_date(descriptor):
    return forms.DateField(
        widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'),
        **_common(descriptor))


def _build_file(descriptor):
    return MultipleFileField(**_common(descriptor))


def _build_textarea(descriptor):
    return forms.CharField(
        widget=forms.Textarea(attrs=_text_attrs(descriptor)), **_common(descriptor))


def _build_dropdown(descriptor):
    # Malformed options were already reduced to () by parse_options.
    choices = [('', 'Select an option')]
    choices += [(option, option) for option in descriptor.options]
    return forms.ChoiceField(choices=choices, **_common(descriptor))


FIELD_BUILDERS = {
    FieldKind.TEXT: _build_text,
    FieldKind.EMAIL: _build_email,
    FieldKind.PHONE: _build_phone,
    FieldKind.DATE: _build_date,
    FieldKind.FILE: _build_file,
    FieldKind.TEXTAREA: _build_textarea,
    FieldKind.DROPDOWN: _build_dropdown,
}

_missing_kinds = set(FieldKind) - set(FIELD_BUILDERS)
if _missing_kinds:
    raise ImportError(
        f"No form field builder for kinds: {sorted(kind.value for kind in _missing_kinds)}")


def build_form_field(descriptor):
    return FIELD_BUILDERS[descriptor.kind](descriptor)


# ==========================================
# STATE <-> FIELD VALUE
# ==========================================

def initial_value(descriptor, state):
    """The value the rendered control shows for the current FormState."""
    if descriptor.is_file:
        return None
    return state.text(descriptor.name) or None


def to_form_value(descriptor, cleaned):
    """Wraps a cleaned field value into the FormValue its kind expects."""
    if descriptor.is_file:
        return FilesValue(tuple(FileRef.from_upload(upload) for upload in cleaned or []))
    if cleaned is None:
        return TextValue('')
    if descriptor.kind is FieldKind.DATE:
        return TextValue(cleaned.isoformat())
    return TextValue(str(cleaned).strip())


def apply_value(state, descriptor, cleaned):
    """apply(fieldName, newValue) -> FormState' for one cleaned field value."""
    return state.apply(descriptor.name, to_form_value(descriptor, cleaned))


def render_field(descriptor, state):
    """HTML for one control, showing the value held in the FormState."""
    field = build_form_field(descriptor)
    attrs = {'id': f"id_{descriptor.name}"}
    if descriptor.required:
        attrs['required'] = True
    return field.widget.render(
        descriptor.name, initial_value(descriptor, state), attrs=attrs)
