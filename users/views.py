import logging

from django.contrib import messages
from django.shortcuts import redirect, render, get_object_or_404
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods, require_GET

from .form import SignUpForm, ProfileForm
from .models import CustomUser
from .session import session_required

logger = logging.getLogger(__name__)


# ========================================================
# AUTH PAGES
# ========================================================

@require_http_methods(["GET", "POST"])
def sign_up_view(request):
    """
    Registration page. On success the user is sent to the confirmation page
    and logs in from there.
    """
    if request.user.is_authenticated:
        return redirect('dashboard_applications')

    if request.method == 'POST':
        form = SignUpForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info(f"New account registered: {user.email}")
            return redirect('sign_up_success')
    else:
        form = SignUpForm()

    return render(request, 'registration/sign_up.html', {'form': form})


def sign_up_success_view(request):
    return render(request, 'registration/sign_up_success.html')


# ========================================================
# PROFILE (Dashboard)
# ========================================================

@session_required
@require_http_methods(["GET", "POST"])
def profile_view(request, session):
    """
    Shows the profile and saves edits to first name, last name and phone.
    Email is the login and stays read-only here.
    """
    user = get_object_or_404(CustomUser, pk=session.user_id)

    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=user)
        if form.is_valid():
            form.save()
            messages.success(request, "Profile updated successfully.")
            return redirect('dashboard_profile')
        messages.error(request, "Failed to update profile.")
    else:
        form = ProfileForm(instance=user)

    return render(request, 'dashboard/profile.html', {
        'form': form,
        'profile': user,
    })


@session_required
@require_GET
def api_get_my_info(request, session):
    """
    API: The logged-in user's profile as JSON.
    """
    user = get_object_or_404(CustomUser, pk=session.user_id)
    return JsonResponse({
        'status': 'success',
        'user': {
            'id': user.id,
            'email': user.email,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'phone': user.phone,
            'created_at': user.date_joined.strftime('%Y-%m-%d'),
        }
    })
