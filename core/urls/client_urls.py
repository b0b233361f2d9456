from django.urls import path
from core.views import (
    applications_view, bookings_view, api_my_applications, api_my_bookings
)
from users.views import profile_view


urlpatterns = [
    path("applications/", applications_view, name="dashboard_applications"),
    path("applications/api/", api_my_applications, name="api_my_applications"),

    path("bookings/", bookings_view, name="dashboard_bookings"),
    path("bookings/api/", api_my_bookings, name="api_my_bookings"),

    path("profile/", profile_view, name="dashboard_profile"),
]
