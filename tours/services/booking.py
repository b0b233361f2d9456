import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from ..models import TourBooking

logger = logging.getLogger(__name__)


class TourBookingError(Exception):
    """The booking record could not be created."""


class TourBookingService:
    @staticmethod
    def calculate_total_price(package, number_of_people):
        """Total = package price x travelers."""
        return Decimal(package.price) * int(number_of_people)

    @staticmethod
    def validate(package, start_date, end_date, number_of_people):
        if number_of_people < 1:
            raise ValidationError("At least one person is required.")
        if package.max_people and number_of_people > package.max_people:
            raise ValidationError(
                f"This package allows at most {package.max_people} people.")
        if end_date and end_date < start_date:
            raise ValidationError("End date cannot be before the start date.")

    @staticmethod
    def create_tour_booking(session, package, start_date, end_date, number_of_people,
                            special_requests=None):
        """
        Creates one 'pending' booking for the session user.
        Raises ValidationError on bad input, TourBookingError if the insert fails.
        """
        TourBookingService.validate(package, start_date, end_date, number_of_people)

        try:
            booking = TourBooking.objects.create(
                user_id=session.user_id,
                package=package,
                start_date=start_date,
                end_date=end_date,
                number_of_people=number_of_people,
                special_requests=special_requests or None,
                total_price=TourBookingService.calculate_total_price(
                    package, number_of_people),
                status='pending',
            )
        except DatabaseError as e:
            logger.error(f"Error booking tour {package.pk} for user {session.user_id}: {e}")
            raise TourBookingError("Failed to book tour. Please try again.") from e

        logger.info(f"Tour booking {booking.pk} created for user {session.user_id}")
        return booking
