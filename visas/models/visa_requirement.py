from django.db import models
from .country import Country


class VisaRequirement(models.Model):
    """
    One dynamic input of a country's application form.
    """
    FIELD_TYPES = (
        ('text', 'Text Input'),
        ('email', 'Email Input'),
        ('phone', 'Phone Input'),
        ('date', 'Date Picker'),
        ('file', 'File Upload'),
        ('textarea', 'Long Text'),
        ('dropdown', 'Dropdown Select'),
    )

    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        related_name='requirements'
    )

    field_name = models.CharField(
        max_length=50, help_text="Unique key for code e.g. 'mother_name'")
    field_type = models.CharField(
        max_length=20, choices=FIELD_TYPES, default='text')
    field_label = models.CharField(
        max_length=255, help_text="Question text e.g. 'Mother's Name'")

    is_required = models.BooleanField(default=True)

    # If type is 'dropdown', options are stored as a JSON list: ["Single", "Married"]
    options = models.TextField(
        blank=True, null=True, help_text="JSON list of options for dropdowns")
    placeholder = models.CharField(max_length=255, blank=True, null=True)

    order_index = models.IntegerField(
        default=0, help_text="Order to display in the form")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'visas_requirement'
        ordering = ['order_index']
        constraints = [
            models.UniqueConstraint(
                fields=['country', 'field_name'], name='unique_field_per_country'),
        ]

    def __str__(self):
        return f"{self.field_label} ({self.field_type})"
