"""
Wizard Controller for the visa application flow.

    TRIP_BASICS --next--> TRAVELER_DETAILS --next--> DOCUMENTS --(submit)
         ^                   |      ^                    |
         +-------back--------+      +--------back--------+

No step writes to the database. The state is a plain dataclass that
round-trips through the Django session (`to_session` / `from_session`).
"""

import datetime
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum, IntEnum

from django.core.exceptions import ValidationError
from django.utils import timezone


class Role(str, Enum):
    MAIN = 'main'
    ADDITIONAL = 'additional'


class Profession(str, Enum):
    JOB_HOLDER = 'job_holder'
    BUSINESSMAN = 'businessman'
    STUDENT = 'student'


class Sponsorship(str, Enum):
    YES = 'yes'
    NO = 'no'
    MAIN_SPONSORING = 'main_sponsoring'


PROFESSION_CHOICES = (
    (Profession.JOB_HOLDER.value, 'Job Holder'),
    (Profession.BUSINESSMAN.value, 'Businessman'),
    (Profession.STUDENT.value, 'Student'),
)

SPONSORSHIP_CHOICES = (
    (Sponsorship.NO.value, 'No, each traveler shows their own funds'),
    (Sponsorship.YES.value, 'Yes, I am sponsoring the other travelers'),
)

RELATIONSHIP_CHOICES = (
    ('spouse', 'Spouse'),
    ('child', 'Child'),
    ('parent', 'Parent'),
    ('sibling', 'Sibling'),
    ('friend', 'Friend'),
    ('colleague', 'Colleague'),
)


# ========================================================
# TRAVELERS
# ========================================================

@dataclass
class Traveler:
    id: int
    role: Role
    profession: Profession = Profession.JOB_HOLDER
    relationship: str = ''
    is_sponsoring: Sponsorship = Sponsorship.NO
    first_name: str = ''
    last_name: str = ''

    @property
    def is_main(self):
        return self.role is Role.MAIN

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self):
        return {
            'id': self.id,
            'role': self.role.value,
            'profession': self.profession.value,
            'relationship': self.relationship,
            'is_sponsoring': self.is_sponsoring.value,
            'first_name': self.first_name,
            'last_name': self.last_name,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data['id']),
            role=Role(data['role']),
            profession=Profession(data.get('profession', Profession.JOB_HOLDER.value)),
            relationship=data.get('relationship', ''),
            is_sponsoring=Sponsorship(data.get('is_sponsoring', Sponsorship.NO.value)),
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
        )


def regenerate_travelers(count):
    """
    Fresh traveler list for `count` people. Position 0 is the main applicant.
    Anything entered for the previous list is dropped.
    """
    if count < 1:
        raise ValueError("At least one traveler is required.")
    travelers = [Traveler(id=1, role=Role.MAIN, is_sponsoring=Sponsorship.NO)]
    for index in range(1, count):
        travelers.append(Traveler(
            id=index + 1,
            role=Role.ADDITIONAL,
            relationship='',
            is_sponsoring=Sponsorship.MAIN_SPONSORING,
        ))
    return travelers


# ========================================================
# DOCUMENT CHECKLIST
# ========================================================

@dataclass(frozen=True)
class DocumentRequirement:
    key: str
    label: str


PASSPORT_COPY = DocumentRequirement('passport_copy', 'Passport Copy')
PHOTO = DocumentRequirement('photo', 'Photograph')
NOC_LETTER = DocumentRequirement('noc_letter', 'NOC Letter')
TRADE_LICENSE = DocumentRequirement('trade_license', 'Trade License')
INSTITUTION_ID = DocumentRequirement('institution_id', 'Institution ID Card')
FINANCIAL_DOCUMENT = DocumentRequirement('financial_document', 'Bank Statement / Solvency Certificate')
MARRIAGE_CERTIFICATE = DocumentRequirement('marriage_certificate', 'Marriage Certificate')

PROFESSION_DOCUMENTS = {
    Profession.JOB_HOLDER: NOC_LETTER,
    Profession.BUSINESSMAN: TRADE_LICENSE,
    Profession.STUDENT: INSTITUTION_ID,
}


def required_documents(role, profession, is_sponsoring, relationship):
    """
    The checklist for one traveler. Pure: same inputs, same tuple.
    """
    role = Role(role)
    profession = Profession(profession)
    is_sponsoring = Sponsorship(is_sponsoring)

    documents = [PASSPORT_COPY, PHOTO, PROFESSION_DOCUMENTS[profession]]
    if role is Role.MAIN or is_sponsoring is Sponsorship.NO:
        documents.append(FINANCIAL_DOCUMENT)
    if relationship == 'spouse':
        documents.append(MARRIAGE_CERTIFICATE)
    return tuple(documents)


def documents_for(traveler):
    return required_documents(
        traveler.role, traveler.profession, traveler.is_sponsoring, traveler.relationship)


def upload_field_name(traveler, document):
    """Form/storage key of one checklist upload, e.g. 'traveler_2_photo'."""
    return f"traveler_{traveler.id}_{document.key}"


# ========================================================
# STEPS & TRANSITIONS
# ========================================================

class WizardStep(IntEnum):
    TRIP_BASICS = 1
    TRAVELER_DETAILS = 2
    DOCUMENTS = 3


NEXT = 'next'
BACK = 'back'

TRANSITIONS = {
    (WizardStep.TRIP_BASICS, NEXT): WizardStep.TRAVELER_DETAILS,
    (WizardStep.TRAVELER_DETAILS, BACK): WizardStep.TRIP_BASICS,
    (WizardStep.TRAVELER_DETAILS, NEXT): WizardStep.DOCUMENTS,
    (WizardStep.DOCUMENTS, BACK): WizardStep.TRAVELER_DETAILS,
}


class IllegalTransition(Exception):
    pass


class StepIncomplete(Exception):
    def __init__(self, step, missing):
        self.step = step
        self.missing = list(missing)
        super().__init__(f"Step {int(step)} is incomplete: {', '.join(self.missing)}")


# ========================================================
# STATE
# ========================================================

def min_travel_date(processing_days, today=None):
    today = today or timezone.localdate()
    return today + datetime.timedelta(days=int(processing_days or 0))


def total_fee(visa_fee, traveler_count):
    return Decimal(visa_fee) * int(traveler_count)


@dataclass
class WizardState:
    step: WizardStep = WizardStep.TRIP_BASICS
    traveler_count: int = 1
    travelers: list = field(default_factory=lambda: regenerate_travelers(1))
    travel_date: datetime.date = None
    # Step-1 answers to the country's non-file fields (field_name -> text)
    answers: dict = field(default_factory=dict)

    def to_session(self):
        return {
            'step': int(self.step),
            'traveler_count': self.traveler_count,
            'travelers': [t.to_dict() for t in self.travelers],
            'travel_date': self.travel_date.isoformat() if self.travel_date else None,
            'answers': dict(self.answers),
        }

    @classmethod
    def from_session(cls, data):
        if not data:
            return cls()
        travel_date = data.get('travel_date')
        return cls(
            step=WizardStep(data.get('step', WizardStep.TRIP_BASICS)),
            traveler_count=int(data.get('traveler_count', 1)),
            travelers=[Traveler.from_dict(t) for t in data.get('travelers', [])]
            or regenerate_travelers(1),
            travel_date=datetime.date.fromisoformat(travel_date) if travel_date else None,
            answers=dict(data.get('answers', {})),
        )


# ========================================================
# CONTROLLER
# ========================================================

class WizardController:
    """
    Drives one application wizard for a visa type.
    `visa` needs `visa_fee` and `visa_processing_days` (a VisaType).
    """

    def __init__(self, visa, state=None, today=None):
        self.visa = visa
        self.state = state or WizardState()
        self.today = today or timezone.localdate()

    # --- Derived values ---

    @property
    def step(self):
        return self.state.step

    @property
    def travelers(self):
        return self.state.travelers

    @property
    def min_travel_date(self):
        return min_travel_date(self.visa.visa_processing_days, self.today)

    @property
    def total_fee(self):
        return total_fee(self.visa.visa_fee, self.state.traveler_count)

    def validate_travel_date(self, travel_date):
        if travel_date < self.min_travel_date:
            raise ValidationError(
                f"Earliest possible travel date is {self.min_travel_date.isoformat()} "
                f"({self.visa.visa_processing_days} processing days).")
        return travel_date

    # --- Step 1 ---

    def set_trip_basics(self, traveler_count, travel_date, answers=None):
        traveler_count = int(traveler_count)
        if traveler_count < 1:
            raise ValidationError("At least one traveler is required.")
        self.validate_travel_date(travel_date)

        # Same count keeps what was already entered per traveler.
        if traveler_count != self.state.traveler_count or \
                len(self.state.travelers) != traveler_count:
            self.state.travelers = regenerate_travelers(traveler_count)
        self.state.traveler_count = traveler_count
        self.state.travel_date = travel_date
        if answers is not None:
            self.state.answers = dict(answers)

    # --- Step 2: visibility predicates ---

    @staticmethod
    def shows_sponsorship(index, traveler_count):
        return index == 0 and traveler_count > 1

    @staticmethod
    def shows_relationship(index):
        return index > 0

    @staticmethod
    def shows_profession(index):
        return True

    def update_traveler(self, index, **changes):
        traveler = self.state.travelers[index]
        if 'role' in changes or 'id' in changes:
            raise ValueError("Traveler role and id are fixed by position.")
        if 'profession' in changes:
            changes['profession'] = Profession(changes['profession'])
        if 'is_sponsoring' in changes:
            changes['is_sponsoring'] = Sponsorship(changes['is_sponsoring'])
        if 'relationship' in changes and not self.shows_relationship(index):
            changes['relationship'] = ''
        updated = replace(traveler, **changes)
        self.state.travelers[index] = updated

        if updated.is_main and 'is_sponsoring' in changes:
            self._sync_sponsorship(updated.is_sponsoring)
        return updated

    def _sync_sponsorship(self, main_answer):
        # Additional travelers prove funds themselves unless the main applicant sponsors them.
        follower = Sponsorship.MAIN_SPONSORING if main_answer is Sponsorship.YES else Sponsorship.NO
        for index in range(1, len(self.state.travelers)):
            self.state.travelers[index] = replace(
                self.state.travelers[index], is_sponsoring=follower)

    def missing_traveler_fields(self):
        missing = []
        count = self.state.traveler_count
        for index, traveler in enumerate(self.state.travelers):
            label = f"traveler {traveler.id}"
            if not traveler.first_name.strip():
                missing.append(f"{label}: first name")
            if not traveler.last_name.strip():
                missing.append(f"{label}: last name")
            if self.shows_relationship(index) and not traveler.relationship:
                missing.append(f"{label}: relationship")
            if self.shows_sponsorship(index, count) and \
                    traveler.is_sponsoring not in (Sponsorship.YES, Sponsorship.NO):
                missing.append(f"{label}: sponsorship")
        return missing

    # --- Step 3 ---

    def checklist(self):
        """[(traveler, (DocumentRequirement, ...)), ...] in traveler order."""
        return [(traveler, documents_for(traveler)) for traveler in self.state.travelers]

    def checklist_fields(self):
        """[(upload_field_name, traveler, document), ...] for every required upload."""
        return [
            (upload_field_name(traveler, document), traveler, document)
            for traveler, documents in self.checklist()
            for document in documents
        ]

    # --- Transitions ---

    def _gate(self, step):
        if step is WizardStep.TRIP_BASICS:
            missing = []
            if self.state.travel_date is None:
                missing.append('travel date')
            if self.state.traveler_count < 1:
                missing.append('number of travelers')
            return missing
        if step is WizardStep.TRAVELER_DETAILS:
            return self.missing_traveler_fields()
        return []

    def move(self, action):
        target = TRANSITIONS.get((self.state.step, action))
        if target is None:
            raise IllegalTransition(
                f"Cannot '{action}' from step {int(self.state.step)}.")
        if action == NEXT:
            missing = self._gate(self.state.step)
            if missing:
                raise StepIncomplete(self.state.step, missing)
        self.state.step = target
        return target

    def next(self):
        return self.move(NEXT)

    def back(self):
        return self.move(BACK)

    def summary(self):
        """JSON-safe wizard data stored inside the application record."""
        return {
            'visa_type_id': getattr(self.visa, 'pk', None),
            'traveler_count': self.state.traveler_count,
            'travel_date': self.state.travel_date.isoformat() if self.state.travel_date else None,
            'travelers': [
                dict(t.to_dict(), documents=[d.key for d in documents_for(t)])
                for t in self.state.travelers
            ],
            'total_fee': str(self.total_fee),
        }
