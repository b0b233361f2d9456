from django.core.paginator import Paginator
from django.shortcuts import render
from django.views.decorators.http import require_GET
from django.http import JsonResponse

from tours.models import TourBooking, TourPackage
from users.session import session_required
from visas.models import Country, VisaApplication

from .services import ClientDashboardService

# -------------------------------------------------------
# ------------------- Public pages ----------------------
# -------------------------------------------------------


@require_GET
def home_view(request):
    """
    Landing page: the visa and tour search boxes.
    Results are loaded from the search APIs by the page.
    """
    countries = Country.objects.filter(is_active=True).order_by('-priority', 'name')
    featured_tours = TourPackage.objects.filter(is_active=True).select_related('country')[:6]
    return render(request, 'client/home.html', {
        'countries': countries,
        'featured_tours': featured_tours,
    })


# -------------------------------------------------------
# ------------------- Dashboard -------------------------
# -------------------------------------------------------

@session_required
@require_GET
def applications_view(request, session):
    applications = ClientDashboardService.get_applications(session)
    return render(request, 'dashboard/applications.html', {
        'applications': applications,
    })


@session_required
@require_GET
def bookings_view(request, session):
    bookings = ClientDashboardService.get_bookings(session)
    return render(request, 'dashboard/bookings.html', {
        'bookings': bookings,
    })


@session_required
@require_GET
def api_my_applications(request, session):
    """
    AJAX API: The user's visa applications, newest first.
    Filters: ?status=, pagination: ?page=
    """
    base_qs = ClientDashboardService.get_applications(session)
    qs = ClientDashboardService.get_applications(session, request.GET.get('status'))

    # Pagination
    paginator = Paginator(qs, 10)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    data = []
    for app in page_obj:
        data.append({
            'id': app.id,
            'country_id': app.country_id,
            'country': app.country.name,
            'visa_type': app.visa_type.name if app.visa_type else None,
            'status': app.status,
            'status_label': app.get_status_display(),
            'submitted_at': app.submitted_at.strftime('%b %d, %Y'),
        })

    return JsonResponse({
        'status': 'success',
        'stats': ClientDashboardService.status_counts(
            base_qs, VisaApplication.STATUS_CHOICES),
        'data': data,
        'pagination': {
            'current_page': page_obj.number,
            'total_pages': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }
    })


@session_required
@require_GET
def api_my_bookings(request, session):
    """
    AJAX API: The user's tour bookings, newest first.
    """
    base_qs = ClientDashboardService.get_bookings(session)
    qs = ClientDashboardService.get_bookings(session, request.GET.get('status'))

    paginator = Paginator(qs, 10)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    data = []
    for booking in page_obj:
        data.append({
            'id': booking.id,
            'package_id': booking.package_id,
            'package': booking.package.title,
            'start_date': booking.start_date.isoformat(),
            'end_date': booking.end_date.isoformat() if booking.end_date else None,
            'number_of_people': booking.number_of_people,
            'total_price': float(booking.total_price),
            'status': booking.status,
            'status_label': booking.get_status_display(),
            'booking_date': booking.booking_date.strftime('%b %d, %Y'),
        })

    return JsonResponse({
        'status': 'success',
        'stats': ClientDashboardService.status_counts(
            base_qs, TourBooking.STATUS_CHOICES),
        'data': data,
        'pagination': {
            'current_page': page_obj.number,
            'total_pages': paginator.num_pages,
            'has_next': page_obj.has_next(),
            'has_previous': page_obj.has_previous(),
        }
    })
