from django.db import models


class TourPackage(models.Model):
    """
    A bookable tour in a destination country. e.g. "Bali Highlights - 5 Days".
    """
    country = models.ForeignKey(
        'visas.Country',
        on_delete=models.CASCADE,
        related_name='tour_packages'
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    duration_days = models.PositiveIntegerField(null=True, blank=True)

    # Pricing: 'price' is charged per traveler.
    price = models.DecimalField(max_digits=10, decimal_places=2)
    price_per_person = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True)
    max_people = models.PositiveIntegerField(null=True, blank=True)

    # ["Temple visit", "Sunset cruise"]
    highlights = models.JSONField(default=list, blank=True)
    # [{"day": 1, "title": "...", "description": "..."}]
    itinerary = models.JSONField(default=list, blank=True)

    image_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tours_package'
        ordering = ['title']

    def __str__(self):
        return self.title
