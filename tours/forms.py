from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator


class TourBookingForm(forms.Form):
    start_date = forms.DateField(
        widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'))
    end_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'type': 'date'}, format='%Y-%m-%d'))
    number_of_people = forms.IntegerField(min_value=1, initial=1)
    special_requests = forms.CharField(widget=forms.Textarea, required=False)

    def __init__(self, *args, package=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.package = package
        if package is not None and package.max_people:
            self.fields['number_of_people'].validators.append(
                MaxValueValidator(package.max_people))
            self.fields['number_of_people'].widget.attrs['max'] = package.max_people

    def clean(self):
        cleaned_data = super().clean()
        start = cleaned_data.get('start_date')
        end = cleaned_data.get('end_date')

        if start and end and end < start:
            raise ValidationError({'end_date': "End date cannot be before the start date."})
        return cleaned_data
