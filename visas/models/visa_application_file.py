from django.db import models
from .visa_application import VisaApplication


class VisaApplicationFile(models.Model):
    """
    One stored upload. Multi-file fields produce several rows
    with the same field_name.
    """
    application = models.ForeignKey(
        VisaApplication,
        on_delete=models.CASCADE,
        related_name='files'
    )

    field_name = models.CharField(max_length=100)
    file_path = models.CharField(max_length=500)
    file_name = models.CharField(max_length=255)
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    file_type = models.CharField(max_length=100, blank=True)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'visas_application_file'
        ordering = ['id']

    def __str__(self):
        return f"{self.field_name}: {self.file_name}"
