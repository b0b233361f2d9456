import json

from django import forms
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .dynamic_fields import (
    FieldDescriptor,
    FieldKind,
    MultipleFileField,
    apply_value,
    build_form_field,
    initial_value,
)
from .form_state import FormState
from .models import VisaApplication, VisaType, VisaRequirement
from .services.wizard import (
    PROFESSION_CHOICES,
    RELATIONSHIP_CHOICES,
    SPONSORSHIP_CHOICES,
    WizardController,
)

# ==========================================
# 1. CONFIGURATION FORMS (Admin Setup)
# ==========================================


class VisaTypeForm(forms.ModelForm):

    class Meta:
        model = VisaType
        fields = '__all__'

    def clean_visa_fee(self):
        fee = self.cleaned_data.get('visa_fee')
        if fee is not None and fee < 0:
            raise ValidationError(_("Visa fee cannot be negative."))
        return fee

    def clean_requirements(self):
        requirements = self.cleaned_data.get('requirements') or {}
        if not isinstance(requirements, dict):
            raise ValidationError(
                _("Requirements must map a profession to a list of documents."))
        for profession, documents in requirements.items():
            if not isinstance(documents, list):
                raise ValidationError(
                    _("Documents for '%(p)s' must be a list.") % {'p': profession})
        return requirements


class VisaRequirementForm(forms.ModelForm):
    class Meta:
        model = VisaRequirement
        fields = '__all__'

    def clean(self):
        """
        Logic Validation: If field_type is 'dropdown', 'options' MUST be a JSON list.
        The field_name must not shadow a key the wizard stores on the application.
        """
        cleaned_data = super().clean()
        if cleaned_data.get('field_name') in VisaApplication.RESERVED_DATA_KEYS:
            raise ValidationError({
                'field_name': _("'%(n)s' is reserved. Choose another field name.") % {
                    'n': cleaned_data['field_name']},
            })
        f_type = cleaned_data.get('field_type')
        options = cleaned_data.get('options')

        if f_type == FieldKind.DROPDOWN.value:
            if not options:
                raise ValidationError({
                    'options': _("Options are required when Field Type is 'Dropdown Select'.")
                })
            try:
                parsed = json.loads(options)
            except ValueError:
                parsed = None
            if not isinstance(parsed, list):
                raise ValidationError({
                    'options': _('Options must be a JSON list, e.g. ["Single", "Married"].')
                })
        return cleaned_data


# ==========================================
# 2. DYNAMIC FORMS (Client Input)
# ==========================================

class DynamicApplicationForm(forms.Form):
    """
    A form whose fields come from FieldDescriptors, in descriptor order.
    Initial values are read from a FormState, and `to_state` writes the
    cleaned values back into one.
    """

    def __init__(self, descriptors, *args, state=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.descriptors = list(descriptors)
        self.state = state or FormState()
        for descriptor in self.descriptors:
            self.fields[descriptor.name] = build_form_field(descriptor)
            value = initial_value(descriptor, self.state)
            if value is not None:
                self.initial.setdefault(descriptor.name, value)

    def to_state(self, state=None):
        state = state if state is not None else self.state
        for descriptor in self.descriptors:
            state = apply_value(state, descriptor, self.cleaned_data.get(descriptor.name))
        return state


class TripBasicsForm(DynamicApplicationForm):
    """Step 1: number of travelers, travel date and the country's text questions."""
    traveler_count = forms.IntegerField(
        min_value=1, max_value=20, initial=1, label=_("Number of Travelers"))
    travel_date = forms.DateField(
        label=_("Travel Date"),
        widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'))

    def __init__(self, descriptors, *args, min_date=None, **kwargs):
        super().__init__(descriptors, *args, **kwargs)
        self.min_date = min_date
        if min_date is not None:
            self.fields['travel_date'].widget.attrs['min'] = min_date.isoformat()

    def clean_travel_date(self):
        travel_date = self.cleaned_data.get('travel_date')
        if travel_date and self.min_date and travel_date < self.min_date:
            raise ValidationError(
                _("Earliest possible travel date is %(d)s.") % {'d': self.min_date.isoformat()})
        return travel_date


class TravelerForm(forms.Form):
    """Step 2: one traveler. Conditional fields follow the wizard's predicates."""
    first_name = forms.CharField(max_length=100)
    last_name = forms.CharField(max_length=100)
    profession = forms.ChoiceField(choices=PROFESSION_CHOICES)

    def __init__(self, *args, index=0, traveler_count=1, **kwargs):
        kwargs.setdefault('prefix', f"traveler-{index}")
        super().__init__(*args, **kwargs)
        self.index = index

        if WizardController.shows_relationship(index):
            self.fields['relationship'] = forms.ChoiceField(
                choices=[('', 'Select relationship')] + list(RELATIONSHIP_CHOICES),
                label=_("Relationship to main applicant"))
        if WizardController.shows_sponsorship(index, traveler_count):
            self.fields['is_sponsoring'] = forms.ChoiceField(
                choices=SPONSORSHIP_CHOICES,
                label=_("Are you sponsoring the other travelers?"))

    @classmethod
    def for_traveler(cls, traveler, index, traveler_count, data=None):
        initial = {
            'first_name': traveler.first_name,
            'last_name': traveler.last_name,
            'profession': traveler.profession.value,
            'relationship': traveler.relationship,
            'is_sponsoring': traveler.is_sponsoring.value,
        }
        return cls(data, index=index, traveler_count=traveler_count, initial=initial)


class DocumentsForm(DynamicApplicationForm):
    """Step 3: checklist uploads per traveler plus the country's file fields."""

    def __init__(self, descriptors, checklist_fields, *args, **kwargs):
        super().__init__(descriptors, *args, **kwargs)
        self.checklist_names = []
        for name, traveler, document in checklist_fields:
            label = traveler.full_name or f"Traveler {traveler.id}"
            self.fields[name] = MultipleFileField(label=f"{label}: {document.label}")
            self.checklist_names.append(name)

    def to_state(self, state=None):
        state = super().to_state(state)
        for name in self.checklist_names:
            descriptor = FieldDescriptor(name=name, kind=FieldKind.FILE, label=name)
            state = apply_value(state, descriptor, self.cleaned_data.get(name))
        return state
