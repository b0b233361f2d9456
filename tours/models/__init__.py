from .tour_package import TourPackage
from .tour_booking import TourBooking
