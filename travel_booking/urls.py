"""
URL configuration for travel_booking project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from core.views import home_view

# ======================
# URL Patterns
# ======================


urlpatterns = [
    # Django admin (back office: application status, catalog setup)
    path("admin/", admin.site.urls),
    path("", home_view, name="home"),
]

client_urls = [
    path("auth/", include('users.urls.client_urls')),
    path("dashboard/", include('core.urls.client_urls')),
    path("visas/", include('visas.urls.client_urls')),
    path("tours/", include('tours.urls.client_urls')),
]
urlpatterns += client_urls

# ======================
# Static & Media
# ======================

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL,
                          document_root=settings.STATIC_ROOT)
    urlpatterns += static(settings.MEDIA_URL,
                          document_root=settings.MEDIA_ROOT)
