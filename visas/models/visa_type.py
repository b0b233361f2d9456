from django.db import models
from .country import Country


class VisaType(models.Model):
    """
    The visa product sold for a country. e.g. "Thailand - Tourist (60 days)".
    Fee and processing time drive the application wizard.
    """
    country = models.ForeignKey(
        Country,
        on_delete=models.CASCADE,
        related_name='visa_types'
    )

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    visa_category = models.CharField(
        max_length=100, help_text="e.g. Tourist, Business")
    validity = models.CharField(max_length=50, blank=True, help_text="e.g. 3 Months")
    max_stay = models.CharField(max_length=50, blank=True, help_text="e.g. 30 Days")

    # Pricing & timing
    visa_fee = models.DecimalField(max_digits=10, decimal_places=2)
    visa_processing_days = models.PositiveIntegerField(
        default=0, help_text="Earliest travel date = today + this many days")

    # Detail page content
    country_overview = models.TextField(blank=True)
    # {"job_holder": ["NOC letter", ...], "businessman": [...], "student": [...]}
    requirements = models.JSONField(default=dict, blank=True)
    # [{"question": "...", "answer": "..."}]
    faqs = models.JSONField(default=list, blank=True)
    status_badge = models.CharField(max_length=50, blank=True, null=True)

    cover_image = models.ImageField(
        upload_to='visa_types/', null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'visas_visa_type'

    def __str__(self):
        return f"{self.country.name} - {self.name}"
