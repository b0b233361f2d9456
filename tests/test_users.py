"""Tests for registration, login and the profile."""

import pytest
from django.urls import reverse

from users.models import CustomUser
from users.session import SessionContext, resolve_session

from .conftest import TEST_PASSWORD

pytestmark = pytest.mark.django_db


class TestSignUp:
    """Tests for the sign-up page."""

    def test_sign_up(self, client):
        """Test a new account uses its lowercased email as username."""
        response = client.post(reverse("sign_up"), {
            "email": "New.Traveler@Example.com",
            "first_name": "New",
            "last_name": "Traveler",
            "phone": "",
            "password1": TEST_PASSWORD,
            "password2": TEST_PASSWORD,
        })

        assert response.status_code == 302
        assert response.url == reverse("sign_up_success")
        user = CustomUser.objects.get(email="new.traveler@example.com")
        assert user.username == "new.traveler@example.com"
        assert user.check_password(TEST_PASSWORD)

    def test_duplicate_email(self, client, user):
        """Test an email can only register once, case-insensitively."""
        response = client.post(reverse("sign_up"), {
            "email": "AMINA@example.com",
            "first_name": "A",
            "last_name": "R",
            "password1": TEST_PASSWORD,
            "password2": TEST_PASSWORD,
        })

        assert response.status_code == 200
        assert "email" in response.context["form"].errors

    def test_login_with_email(self, client, user):
        """Test logging in with email and password."""
        response = client.post(reverse("login"), {
            "username": user.email, "password": TEST_PASSWORD})

        assert response.status_code == 302
        assert response.url == reverse("dashboard_applications")


class TestSession:
    """Tests for resolving the session context."""

    def test_resolve(self, rf, user):
        """Test an authenticated request yields its user's context."""
        request = rf.get("/")
        request.user = user
        assert resolve_session(request) == SessionContext(user_id=user.pk, email=user.email)

    def test_anonymous(self, rf):
        """Test anonymous requests have no session context."""
        from django.contrib.auth.models import AnonymousUser

        request = rf.get("/")
        request.user = AnonymousUser()
        assert resolve_session(request) is None


class TestProfile:
    """Tests for the profile page and API."""

    def test_update(self, auth_client, user):
        """Test name and phone can be changed."""
        response = auth_client.post(reverse("dashboard_profile"), {
            "first_name": "Amina", "last_name": "Chowdhury", "phone": "+8801800000000"})

        assert response.status_code == 302
        user.refresh_from_db()
        assert user.last_name == "Chowdhury"
        assert user.phone == "+8801800000000"

    def test_api_me(self, auth_client, user):
        """Test the user info endpoint."""
        data = auth_client.get(reverse("api_user_info")).json()

        assert data["user"]["email"] == "amina@example.com"
        assert data["user"]["first_name"] == "Amina"
