from django.contrib import admin
from .models import TourPackage, TourBooking


@admin.register(TourPackage)
class TourPackageAdmin(admin.ModelAdmin):
    list_display = ('title', 'country', 'duration_days', 'price', 'max_people', 'is_active')
    list_filter = ('is_active', 'country')
    search_fields = ('title', 'country__name')


@admin.register(TourBooking)
class TourBookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'package', 'start_date',
                    'number_of_people', 'total_price', 'status')
    list_filter = ('status',)
    search_fields = ('user__email', 'package__title')
