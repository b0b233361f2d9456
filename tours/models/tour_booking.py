from django.conf import settings
from django.db import models
from .tour_package import TourPackage


class TourBooking(models.Model):
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('cancelled', 'Cancelled'),
        ('completed', 'Completed'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tour_bookings'
    )

    # PROTECT: a package can't be deleted while people have booked it.
    package = models.ForeignKey(
        TourPackage,
        on_delete=models.PROTECT,
        related_name='bookings'
    )

    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    number_of_people = models.PositiveIntegerField(default=1)

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default='pending')
    special_requests = models.TextField(blank=True, null=True)

    # Stored to keep the price at time of booking
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    booking_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tours_booking'
        ordering = ['-booking_date']

    def __str__(self):
        return f"#{self.pk} {self.package} x{self.number_of_people}"
