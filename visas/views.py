import logging

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError
from django.db.models import Prefetch, Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from users.session import session_required

from .form_state import FormState, TextValue
from .forms import DocumentsForm, TravelerForm, TripBasicsForm
from .models import Country, VisaApplication, VisaType
from .services.schema import load_field_descriptors, serialize_descriptor, split_descriptors
from .services.submission import (
    ApplicationSubmissionError,
    missing_required,
    submit_application,
)
from .services.wizard import (
    BACK,
    IllegalTransition,
    StepIncomplete,
    WizardController,
    WizardState,
    WizardStep,
)

logger = logging.getLogger(__name__)


# ========================================================
# 1. CATALOG (Search & Detail)
# ========================================================

@require_GET
def visa_search_api(request):
    """
    API: Active countries with their active visa types.
    Optional ?q= filters by country name or code.
    """
    countries = Country.objects.filter(is_active=True).prefetch_related(
        Prefetch('visa_types', queryset=VisaType.objects.filter(is_active=True))
    )

    search = request.GET.get('q', '').strip()
    if search:
        countries = countries.filter(
            Q(name__icontains=search) | Q(code__iexact=search))

    data = []
    for country in countries:
        data.append({
            'id': country.id,
            'name': country.name,
            'code': country.code,
            'visa_types': [
                {
                    'id': visa.id,
                    'name': visa.name,
                    'description': visa.description,
                    'visa_category': visa.visa_category,
                    'visa_processing_days': visa.visa_processing_days,
                    'visa_fee': float(visa.visa_fee),
                    'status_badge': visa.status_badge,
                }
                for visa in country.visa_types.all()
            ],
        })

    return JsonResponse({'status': 'success', 'countries': data})


def _visa_payload(visa):
    return {
        'id': visa.id,
        'name': visa.name,
        'country': {'id': visa.country.id, 'name': visa.country.name},
        'visa_category': visa.visa_category,
        'validity': visa.validity,
        'max_stay': visa.max_stay,
        'visa_processing_days': visa.visa_processing_days,
        'visa_fee': float(visa.visa_fee),
        'country_overview': visa.country_overview,
        'requirements': visa.requirements or {},
        'faqs': visa.faqs or [],
        'cover_image': visa.cover_image.url if visa.cover_image else None,
    }


@require_GET
def visa_detail_api(request, pk):
    """
    API: One visa type, with its per-profession document lists and FAQs.
    """
    visa = get_object_or_404(
        VisaType.objects.select_related('country'), pk=pk, is_active=True)
    return JsonResponse(dict(_visa_payload(visa), status='success'))


@require_GET
def visa_detail_view(request, pk):
    visa = get_object_or_404(
        VisaType.objects.select_related('country'), pk=pk, is_active=True)
    return render(request, 'client/visa_detail.html', {
        'visa': visa,
        'requirements': sorted((visa.requirements or {}).items()),
        'faqs': visa.faqs or [],
    })


# ========================================================
# 2. SCHEMA API (Form Fields for a Country)
# ========================================================

@require_GET
def get_visa_schema(request, country_id):
    """
    API: The ordered dynamic fields of a country's application form.
    Used purely to RENDER inputs (No DB writes).
    """
    country = get_object_or_404(Country, pk=country_id, is_active=True)
    try:
        descriptors = load_field_descriptors(country)
    except DatabaseError as e:
        logger.error(f"Error fetching requirements for country {country_id}: {e}")
        return JsonResponse(
            {'status': 'error', 'message': 'Unable to load application form'}, status=503)

    return JsonResponse({
        'status': 'success',
        'country': {'id': country.id, 'name': country.name},
        'fields': [serialize_descriptor(d) for d in descriptors],
    })


# ========================================================
# 3. APPLICATION WIZARD
# ========================================================

def _wizard_key(visa_id):
    return f"{settings.VISA_WIZARD_SESSION_PREFIX}_{visa_id}"


def _save_wizard(request, controller):
    request.session[_wizard_key(controller.visa.pk)] = controller.state.to_session()


def _discard_wizard(request, visa_id):
    request.session.pop(_wizard_key(visa_id), None)


def _answers_state(controller):
    state = FormState()
    for name, text in controller.state.answers.items():
        state = state.apply(name, TextValue(text))
    return state


def _traveler_forms(controller, data=None):
    count = controller.state.traveler_count
    return [
        TravelerForm.for_traveler(traveler, index, count, data=data)
        for index, traveler in enumerate(controller.travelers)
    ]


@session_required
@require_http_methods(["GET", "POST"])
def visa_apply_view(request, pk, session):
    """
    The three-step application wizard.

    GET renders the current step (?restart=1 starts over).
    POST 'action' is one of: next, back, submit, restart.
    """
    visa = get_object_or_404(
        VisaType.objects.select_related('country'),
        pk=pk, is_active=True, country__is_active=True)

    # 1. Load the country's form schema (nothing is shown if this fails)
    try:
        descriptors = load_field_descriptors(visa.country)
    except DatabaseError as e:
        logger.error(f"Error fetching requirements for visa {pk}: {e}")
        return render(request, 'client/unavailable.html', status=503)

    answer_fields, upload_fields = split_descriptors(descriptors)

    action = request.POST.get('action', 'next') if request.method == 'POST' else None
    if action == 'restart' or request.GET.get('restart'):
        _discard_wizard(request, visa.pk)
        return redirect('visa_apply', pk=visa.pk)

    # 2. Restore the wizard from the session
    state = WizardState.from_session(request.session.get(_wizard_key(visa.pk)))
    controller = WizardController(visa, state)

    trip_form = traveler_forms = documents_form = None

    if request.method == 'POST':

        # --- BACK (no gating, nothing lost) ---
        if action == BACK:
            if controller.step is WizardStep.TRAVELER_DETAILS:
                # Keep every field that cleans, even if the step is incomplete.
                for form in _traveler_forms(controller, data=request.POST):
                    form.is_valid()
                    controller.update_traveler(form.index, **form.cleaned_data)
            elif controller.step is WizardStep.DOCUMENTS:
                messages.info(
                    request, "Selected files are not kept. Please attach them again.")
            try:
                controller.back()
            except IllegalTransition as e:
                messages.error(request, str(e))
            _save_wizard(request, controller)
            return redirect('visa_apply', pk=visa.pk)

        # --- STEP 1: Trip basics ---
        if controller.step is WizardStep.TRIP_BASICS:
            trip_form = TripBasicsForm(
                answer_fields, request.POST,
                state=_answers_state(controller),
                min_date=controller.min_travel_date)
            if trip_form.is_valid():
                answers = trip_form.to_state(FormState())
                controller.set_trip_basics(
                    trip_form.cleaned_data['traveler_count'],
                    trip_form.cleaned_data['travel_date'],
                    answers=answers.text_values())
                controller.next()
                _save_wizard(request, controller)
                return redirect('visa_apply', pk=visa.pk)

        # --- STEP 2: Traveler details ---
        elif controller.step is WizardStep.TRAVELER_DETAILS:
            traveler_forms = _traveler_forms(controller, data=request.POST)
            if all(form.is_valid() for form in traveler_forms):
                for form in traveler_forms:
                    controller.update_traveler(form.index, **form.cleaned_data)
                try:
                    controller.next()
                except StepIncomplete as e:
                    messages.error(request, str(e))
                else:
                    _save_wizard(request, controller)
                    return redirect('visa_apply', pk=visa.pk)

        # --- STEP 3: Documents + submit ---
        elif controller.step is WizardStep.DOCUMENTS:
            documents_form = DocumentsForm(
                upload_fields, controller.checklist_fields(),
                request.POST, request.FILES)
            if documents_form.is_valid():
                form_state = documents_form.to_state(_answers_state(controller))

                # Re-check required fields before anything is persisted
                missing = missing_required(descriptors, form_state)
                if missing:
                    messages.error(
                        request, f"Please complete: {', '.join(missing)}")
                else:
                    return _submit(request, session, visa, controller, form_state)

    # 3. Render the current step
    step = controller.step
    if step is WizardStep.TRIP_BASICS and trip_form is None:
        trip_form = TripBasicsForm(
            answer_fields,
            state=_answers_state(controller),
            min_date=controller.min_travel_date,
            initial={
                'traveler_count': controller.state.traveler_count,
                'travel_date': controller.state.travel_date,
            })
    elif step is WizardStep.TRAVELER_DETAILS and traveler_forms is None:
        traveler_forms = _traveler_forms(controller)
    elif step is WizardStep.DOCUMENTS and documents_form is None:
        documents_form = DocumentsForm(upload_fields, controller.checklist_fields())

    return render(request, 'client/visa_apply.html', {
        'visa': visa,
        'step': int(step),
        'controller': controller,
        'trip_form': trip_form,
        'traveler_forms': traveler_forms,
        'documents_form': documents_form,
        'checklist': controller.checklist(),
        'total_fee': controller.total_fee,
        'min_travel_date': controller.min_travel_date,
    })


def _submit(request, session, visa, controller, form_state):
    """
    Final step: one application record, then the uploads.
    The wizard state is dropped either way.
    """
    try:
        result = submit_application(
            session,
            visa.country,
            form_state,
            visa_type=visa,
            extra_data={VisaApplication.WIZARD_DATA_KEY: controller.summary()},
        )
    except ApplicationSubmissionError as e:
        _discard_wizard(request, visa.pk)
        messages.error(request, str(e))
        return redirect('visa_apply', pk=visa.pk)

    _discard_wizard(request, visa.pk)
    if result.has_failures:
        failed = ', '.join(name for _, name, _ in result.failures)
        messages.warning(
            request, f"Some files could not be uploaded ({failed}). Our team will contact you.")
    messages.success(request, "Application submitted successfully!")
    return redirect('dashboard_applications')
