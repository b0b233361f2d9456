"""Pytest configuration and common fixtures."""

import datetime
import json
from decimal import Decimal

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from tours.models import TourPackage
from users.models import CustomUser
from users.session import SessionContext
from visas.models import Country, VisaRequirement, VisaType

TEST_PASSWORD = "Trip-Planner-2024"


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep every stored upload inside the test's tmp dir."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return settings.MEDIA_ROOT


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def user(db):
    """A registered client."""
    return CustomUser.objects.create_user(
        username="amina@example.com",
        email="amina@example.com",
        password=TEST_PASSWORD,
        first_name="Amina",
        last_name="Rahman",
        phone="+8801700000000",
    )


@pytest.fixture
def other_user(db):
    return CustomUser.objects.create_user(
        username="karim@example.com",
        email="karim@example.com",
        password=TEST_PASSWORD,
    )


@pytest.fixture
def session(user):
    return SessionContext(user_id=user.pk, email=user.email)


@pytest.fixture
def auth_client(client, user):
    """Django test client logged in as `user`."""
    client.force_login(user)
    return client


@pytest.fixture
def country(db):
    return Country.objects.create(name="Thailand", code="TH", priority=10)


@pytest.fixture
def visa_type(country):
    return VisaType.objects.create(
        country=country,
        name="Tourist 60 days",
        visa_category="Tourist",
        validity="3 Months",
        max_stay="60 Days",
        visa_fee=Decimal("1500.00"),
        visa_processing_days=7,
        requirements={
            "job_holder": ["NOC letter", "Last 3 payslips"],
            "student": ["Institution ID card"],
        },
        faqs=[{"question": "How long does it take?", "answer": "About 7 working days."}],
    )


@pytest.fixture
def requirements(country):
    """The country's dynamic form: two text fields, a dropdown and a file upload."""
    return [
        VisaRequirement.objects.create(
            country=country, field_name="marital_status", field_type="dropdown",
            field_label="Marital Status", options=json.dumps(["Single", "Married"]),
            order_index=1),
        VisaRequirement.objects.create(
            country=country, field_name="mother_name", field_type="text",
            field_label="Mother's Name", placeholder="As written in passport",
            order_index=2),
        VisaRequirement.objects.create(
            country=country, field_name="passport_scan", field_type="file",
            field_label="Passport Scan", order_index=3),
        VisaRequirement.objects.create(
            country=country, field_name="nickname", field_type="text",
            field_label="Nickname", is_required=False, order_index=4),
    ]


@pytest.fixture
def tour_package(country):
    return TourPackage.objects.create(
        country=country,
        title="Bangkok & Pattaya 5 Days",
        description="City tour, coral island, floating market.",
        duration_days=5,
        price=Decimal("450.00"),
        max_people=6,
        highlights=["Grand Palace", "Coral Island"],
        itinerary=[{"day": 1, "title": "Arrival", "description": "Hotel check-in"}],
    )


@pytest.fixture
def tmp_storage(tmp_path):
    return FileSystemStorage(location=str(tmp_path / "uploads"))


@pytest.fixture
def make_pdf():
    """Factory for small in-memory PDF uploads."""
    def _make(name="document.pdf", content=b"%PDF-1.4 test document"):
        return SimpleUploadedFile(name, content, content_type="application/pdf")
    return _make


@pytest.fixture
def travel_date(today):
    """A travel date that satisfies the 7 processing days of `visa_type`."""
    return today + datetime.timedelta(days=10)
