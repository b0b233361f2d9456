"""Tests for the visa application wizard controller."""

import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.core.exceptions import ValidationError

from visas.services.wizard import (
    BACK,
    NEXT,
    TRANSITIONS,
    IllegalTransition,
    Profession,
    Role,
    Sponsorship,
    StepIncomplete,
    Traveler,
    WizardController,
    WizardState,
    WizardStep,
    min_travel_date,
    regenerate_travelers,
    required_documents,
    total_fee,
)

TODAY = datetime.date(2026, 3, 10)


@pytest.fixture
def visa():
    """Stand-in for a VisaType: only fee and processing days matter here."""
    return SimpleNamespace(pk=7, visa_fee=Decimal("1500.00"), visa_processing_days=7)


@pytest.fixture
def controller(visa):
    return WizardController(visa, today=TODAY)


def _keys(documents):
    return {doc.key for doc in documents}


def _fill_names(controller):
    for index, traveler in enumerate(controller.travelers):
        changes = {"first_name": f"First{index}", "last_name": f"Last{index}"}
        if index > 0:
            changes["relationship"] = "friend"
        controller.update_traveler(index, **changes)


class TestRegenerateTravelers:
    """Tests for rebuilding the traveler list."""

    @pytest.mark.parametrize("count", [1, 2, 3, 7, 20])
    def test_count_and_roles(self, count):
        """Test exactly `count` travelers, the first one main."""
        travelers = regenerate_travelers(count)

        assert len(travelers) == count
        assert travelers[0].role is Role.MAIN
        assert all(t.role is Role.ADDITIONAL for t in travelers[1:])
        assert [t.id for t in travelers] == list(range(1, count + 1))

    def test_defaults(self):
        """Test the defaults of main and additional travelers."""
        main, extra = regenerate_travelers(2)

        assert main.profession is Profession.JOB_HOLDER
        assert main.is_sponsoring is Sponsorship.NO
        assert extra.profession is Profession.JOB_HOLDER
        assert extra.relationship == ""
        assert extra.is_sponsoring is Sponsorship.MAIN_SPONSORING

    def test_zero_travelers_rejected(self):
        """Test at least one traveler is required."""
        with pytest.raises(ValueError):
            regenerate_travelers(0)


class TestRequiredDocuments:
    """Tests for the per-traveler document checklist."""

    @pytest.mark.parametrize("profession, expected", [
        ("job_holder", "noc_letter"),
        ("businessman", "trade_license"),
        ("student", "institution_id"),
    ])
    def test_profession_document(self, profession, expected):
        """Test each profession adds its own document."""
        documents = _keys(required_documents("main", profession, "no", ""))
        assert {"passport_copy", "photo", expected} <= documents

    def test_financial_document_rules(self):
        """Test financial proof is needed for main or non-sponsored travelers only."""
        assert "financial_document" in _keys(required_documents("main", "student", "yes", ""))
        assert "financial_document" in _keys(
            required_documents("additional", "student", "no", "friend"))
        assert "financial_document" not in _keys(
            required_documents("additional", "student", "main_sponsoring", "friend"))

    def test_spouse_needs_marriage_certificate(self):
        """Test spouses add a marriage certificate."""
        assert "marriage_certificate" in _keys(
            required_documents("additional", "job_holder", "main_sponsoring", "spouse"))
        assert "marriage_certificate" not in _keys(
            required_documents("additional", "job_holder", "main_sponsoring", "child"))

    def test_is_deterministic(self):
        """Test the same inputs always give the same checklist."""
        args = ("additional", "businessman", "no", "spouse")
        first = required_documents(*args)
        required_documents("main", "student", "yes", "")
        assert required_documents(*args) == first


class TestTravelDate:
    """Tests for the earliest travel date."""

    def test_min_travel_date(self):
        """Test today + processing days."""
        assert min_travel_date(7, TODAY) == datetime.date(2026, 3, 17)
        assert min_travel_date(0, TODAY) == TODAY

    def test_boundary(self, controller):
        """Test the boundary day is accepted and the day before is rejected."""
        boundary = datetime.date(2026, 3, 17)

        assert controller.validate_travel_date(boundary) == boundary
        with pytest.raises(ValidationError):
            controller.validate_travel_date(boundary - datetime.timedelta(days=1))

    def test_set_trip_basics_rejects_early_date(self, controller):
        """Test step 1 refuses a date before the minimum."""
        with pytest.raises(ValidationError):
            controller.set_trip_basics(1, datetime.date(2026, 3, 16))
        assert controller.state.travel_date is None


class TestTotalFee:
    """Tests for the derived fee."""

    @pytest.mark.parametrize("count", [1, 2, 5, 20])
    def test_fee_times_travelers(self, count):
        """Test total = fee x travelers."""
        assert total_fee(Decimal("1500.00"), count) == Decimal("1500.00") * count

    def test_controller_fee_follows_count(self, controller):
        """Test the controller's fee follows the traveler count."""
        controller.set_trip_basics(3, datetime.date(2026, 4, 1))
        assert controller.total_fee == Decimal("4500.00")


class TestTripBasics:
    """Tests for step 1 resizing."""

    def test_same_count_keeps_travelers(self, controller):
        """Test resubmitting the same count keeps what was entered."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.update_traveler(0, first_name="Amina", profession="student")
        controller.update_traveler(1, first_name="Karim", relationship="spouse")

        controller.set_trip_basics(2, datetime.date(2026, 4, 5))

        assert controller.travelers[0].first_name == "Amina"
        assert controller.travelers[0].profession is Profession.STUDENT
        assert controller.travelers[1].relationship == "spouse"
        assert controller.state.travel_date == datetime.date(2026, 4, 5)

    def test_new_count_resets_travelers(self, controller):
        """Test changing the count regenerates every traveler."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.update_traveler(0, first_name="Amina")

        controller.set_trip_basics(3, datetime.date(2026, 4, 1))

        assert len(controller.travelers) == 3
        assert controller.travelers == regenerate_travelers(3)

    def test_answers_are_kept(self, controller):
        """Test the country's step-1 answers are stored on the state."""
        controller.set_trip_basics(1, datetime.date(2026, 4, 1), answers={"mother_name": "Fatima"})
        assert controller.state.answers == {"mother_name": "Fatima"}


class TestTravelerDetails:
    """Tests for step 2 predicates and updates."""

    def test_visibility_predicates(self):
        """Test which conditional fields each traveler sees."""
        assert not WizardController.shows_sponsorship(0, 1)
        assert WizardController.shows_sponsorship(0, 2)
        assert not WizardController.shows_sponsorship(1, 2)
        assert not WizardController.shows_relationship(0)
        assert WizardController.shows_relationship(1)
        assert WizardController.shows_profession(0)
        assert WizardController.shows_profession(3)

    def test_role_is_fixed(self, controller):
        """Test role and id can't be edited."""
        with pytest.raises(ValueError):
            controller.update_traveler(0, role="additional")

    def test_main_has_no_relationship(self, controller):
        """Test a relationship sent for the main traveler is dropped."""
        controller.update_traveler(0, relationship="spouse")
        assert controller.travelers[0].relationship == ""

    def test_sponsorship_propagates(self, controller):
        """Test the main traveler's answer decides the others' funding proof."""
        controller.set_trip_basics(3, datetime.date(2026, 4, 1))

        controller.update_traveler(0, is_sponsoring="no")
        assert all(t.is_sponsoring is Sponsorship.NO for t in controller.travelers[1:])
        assert all("financial_document" in _keys(docs) for _, docs in controller.checklist())

        controller.update_traveler(0, is_sponsoring="yes")
        assert all(
            t.is_sponsoring is Sponsorship.MAIN_SPONSORING for t in controller.travelers[1:])
        assert "financial_document" not in _keys(controller.checklist()[1][1])


class TestTransitions:
    """Tests for the step state machine."""

    def test_table_has_no_skips(self):
        """Test no transition jumps over a step."""
        for (source, _), target in TRANSITIONS.items():
            assert abs(int(target) - int(source)) == 1

    def test_back_from_first_step_is_illegal(self, controller):
        """Test there is nothing before step 1."""
        with pytest.raises(IllegalTransition):
            controller.back()

    def test_unknown_action_is_illegal(self, controller):
        """Test actions outside the table are refused."""
        with pytest.raises(IllegalTransition):
            controller.move("submit")

    def test_next_without_date_is_incomplete(self, controller):
        """Test step 1 needs a travel date."""
        with pytest.raises(StepIncomplete) as exc:
            controller.next()
        assert exc.value.step is WizardStep.TRIP_BASICS
        assert controller.step is WizardStep.TRIP_BASICS

    def test_step_two_needs_names(self, controller):
        """Test step 2 is gated on every traveler's required fields."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.next()

        with pytest.raises(StepIncomplete) as exc:
            controller.next()
        assert "traveler 2: relationship" in exc.value.missing

        _fill_names(controller)
        assert controller.next() is WizardStep.DOCUMENTS

    def test_main_traveler_must_answer_sponsorship(self, controller):
        """Test the main traveler of a group must answer yes or no."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.next()
        _fill_names(controller)
        controller.update_traveler(0, is_sponsoring="main_sponsoring")

        with pytest.raises(StepIncomplete) as exc:
            controller.next()
        assert "traveler 1: sponsorship" in exc.value.missing

        controller.update_traveler(0, is_sponsoring="no")
        assert controller.next() is WizardStep.DOCUMENTS

    def test_back_keeps_data(self, controller):
        """Test going back does not lose anything."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.next()
        _fill_names(controller)
        controller.next()

        controller.move(BACK)
        controller.move(BACK)
        assert controller.step is WizardStep.TRIP_BASICS
        assert controller.travelers[1].first_name == "First1"

        controller.move(NEXT)
        controller.move(NEXT)
        assert controller.step is WizardStep.DOCUMENTS


class TestScenarios:
    """End-to-end checklist scenarios."""

    def test_single_student(self, controller):
        """Test one student traveler needs the financial document as main."""
        controller.set_trip_basics(1, datetime.date(2026, 4, 1))
        controller.update_traveler(0, first_name="Amina", last_name="Rahman", profession="student")

        (traveler, documents), = controller.checklist()

        assert traveler.is_main
        assert _keys(documents) == {"passport_copy", "photo", "institution_id", "financial_document"}

    def test_sponsoring_main_with_spouse(self, controller):
        """Test a sponsoring businessman travelling with his job-holder spouse."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))
        controller.update_traveler(0, profession="businessman", is_sponsoring="yes")
        controller.update_traveler(1, profession="job_holder", relationship="spouse")

        (main, main_docs), (spouse, spouse_docs) = controller.checklist()

        assert _keys(main_docs) == {"passport_copy", "photo", "trade_license", "financial_document"}
        assert _keys(spouse_docs) == {"passport_copy", "photo", "noc_letter", "marriage_certificate"}

    def test_checklist_field_names(self, controller):
        """Test each upload gets a per-traveler field name."""
        controller.set_trip_basics(1, datetime.date(2026, 4, 1))
        names = [name for name, _, _ in controller.checklist_fields()]
        assert names == [
            "traveler_1_passport_copy",
            "traveler_1_photo",
            "traveler_1_noc_letter",
            "traveler_1_financial_document",
        ]


class TestWizardState:
    """Tests for session storage and the summary."""

    def test_session_round_trip(self, controller):
        """Test the state survives the session's JSON form."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1), answers={"mother_name": "Fatima"})
        controller.next()
        _fill_names(controller)

        restored = WizardState.from_session(controller.state.to_session())

        assert restored == controller.state
        assert restored.step is WizardStep.TRAVELER_DETAILS

    def test_empty_session_starts_fresh(self):
        """Test no stored data means step 1 with one traveler."""
        state = WizardState.from_session(None)
        assert state.step is WizardStep.TRIP_BASICS
        assert state.travelers == [Traveler(id=1, role=Role.MAIN)]

    def test_summary(self, controller):
        """Test the summary carries travelers, their documents and the fee."""
        controller.set_trip_basics(2, datetime.date(2026, 4, 1))

        summary = controller.summary()

        assert summary["visa_type_id"] == 7
        assert summary["travel_date"] == "2026-04-01"
        assert summary["total_fee"] == "3000.00"
        assert summary["travelers"][1]["role"] == "additional"
        assert "passport_copy" in summary["travelers"][0]["documents"]
