from django.db.models import Count

from tours.models import TourBooking
from visas.models import VisaApplication

# -----------------------------------------------------------
# --------------------- Client dashboard --------------------
# -----------------------------------------------------------


class ClientDashboardService:
    """
    Everything here is scoped to one user: a user only ever sees their own rows.
    """

    @staticmethod
    def get_applications(session, status=None):
        qs = VisaApplication.objects.filter(user_id=session.user_id).select_related(
            'country', 'visa_type').order_by('-submitted_at')
        if status and status != 'all':
            qs = qs.filter(status=status)
        return qs

    @staticmethod
    def get_bookings(session, status=None):
        qs = TourBooking.objects.filter(user_id=session.user_id).select_related(
            'package').order_by('-booking_date')
        if status and status != 'all':
            qs = qs.filter(status=status)
        return qs

    @staticmethod
    def status_counts(queryset, choices):
        """{status: count} for every status in `choices`, zeros included."""
        counts = {key: 0 for key, _ in choices}
        for row in queryset.order_by().values('status').annotate(total=Count('id')):
            counts[row['status']] = row['total']
        return counts
