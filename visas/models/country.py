from django.db import models


class Country(models.Model):
    """
    A destination country, e.g. "Thailand", "Japan".
    Owns the dynamic application fields (VisaRequirement) and the visa types.
    """
    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=3, unique=True, help_text="ISO code e.g. 'TH'")
    priority = models.IntegerField(
        default=0, help_text="Higher shows first in search results")
    description = models.TextField(blank=True)
    flag_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'visas_country'
        ordering = ['-priority', 'name']
        verbose_name_plural = 'countries'

    def __str__(self):
        return self.name
