import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from users.session import session_required

from .forms import TourBookingForm
from .models import TourPackage
from .services.booking import TourBookingError, TourBookingService

logger = logging.getLogger(__name__)


# ========================================================
# 1. SEARCH & DETAIL
# ========================================================

@require_GET
def tour_search_api(request):
    """
    API: Active tour packages.
    Filters: ?country=<id> or ?q=<country name / title>.
    """
    packages = TourPackage.objects.filter(
        is_active=True, country__is_active=True).select_related('country')

    country_id = request.GET.get('country', '').strip()
    if country_id:
        packages = packages.filter(country_id=country_id)

    search = request.GET.get('q', '').strip()
    if search:
        packages = packages.filter(
            Q(country__name__icontains=search) | Q(title__icontains=search))

    data = []
    for package in packages:
        data.append({
            'id': package.id,
            'title': package.title,
            'description': package.description,
            'duration_days': package.duration_days,
            'price': float(package.price),
            'max_people': package.max_people,
            'image_url': package.image_url or None,
            'country_id': package.country_id,
            'country': package.country.name,
        })

    return JsonResponse({'status': 'success', 'packages': data})


@require_GET
def tour_detail_view(request, pk):
    package = get_object_or_404(
        TourPackage.objects.select_related('country'), pk=pk, is_active=True)
    return render(request, 'client/tour_detail.html', {'package': package})


# ========================================================
# 2. BOOKING
# ========================================================

@session_required
@require_http_methods(["GET", "POST"])
def tour_book_view(request, pk, session):
    """
    Booking form. Total price = package price x number of people.
    """
    package = get_object_or_404(TourPackage, pk=pk, is_active=True)

    if request.method == 'POST':
        form = TourBookingForm(request.POST, package=package)
        if form.is_valid():
            data = form.cleaned_data
            try:
                TourBookingService.create_tour_booking(
                    session,
                    package,
                    start_date=data['start_date'],
                    end_date=data.get('end_date'),
                    number_of_people=data['number_of_people'],
                    special_requests=data.get('special_requests'),
                )
            except ValidationError as ve:
                msg = ve.message if hasattr(ve, 'message') else str(ve)
                messages.error(request, msg)
            except TourBookingError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, "Booking confirmed! Check your dashboard for details.")
                return redirect('dashboard_bookings')
        number_of_people = form.cleaned_data.get('number_of_people') or 1
    else:
        form = TourBookingForm(package=package)
        number_of_people = 1

    return render(request, 'client/tour_book.html', {
        'package': package,
        'form': form,
        'total_price': TourBookingService.calculate_total_price(package, number_of_people),
    })
