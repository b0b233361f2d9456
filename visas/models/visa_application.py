from django.conf import settings
from django.db import models
from .country import Country
from .visa_type import VisaType


class VisaApplication(models.Model):
    # application_data keys written by the wizard, not by country fields
    WIZARD_DATA_KEY = 'wizard'
    RESERVED_DATA_KEYS = (WIZARD_DATA_KEY,)

    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('under_review', 'Under Review'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='visa_applications'
    )

    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        related_name='applications'
    )

    visa_type = models.ForeignKey(
        VisaType,
        on_delete=models.SET_NULL,
        related_name='applications',
        null=True,
        blank=True
    )

    # Status moves only from the back office (Django admin).
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default='pending')

    # The flattened form answers + wizard summary (travelers, travel date, fee)
    application_data = models.JSONField(default=dict, blank=True)

    submitted_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'visas_application'
        ordering = ['-submitted_at']

    def __str__(self):
        return f"#{self.pk} - {self.country.name} ({self.status})"
