"""
Submission Assembler.

1. Creates the VisaApplication (status 'pending') and gets its id.
2. Uploads every file of every file-typed field, one at a time, to
   {user_id}/{application_id}/{field_name}/{file_name}.
3. Records one VisaApplicationFile per stored file.

A failed upload is logged and skipped. The application is never rolled back.
"""

import logging
from dataclasses import dataclass, field

from django.core.files.storage import default_storage
from django.db import DatabaseError, transaction

from ..models import VisaApplication, VisaApplicationFile

logger = logging.getLogger(__name__)


class ApplicationSubmissionError(Exception):
    """The application record could not be created. Nothing was uploaded."""


class StorageConflictError(Exception):
    """An object already exists at the target path."""


@dataclass
class SubmissionResult:
    application: VisaApplication
    files: list = field(default_factory=list)
    failures: list = field(default_factory=list)

    @property
    def has_failures(self):
        return bool(self.failures)


def missing_required(descriptors, state):
    """Labels of required fields that are absent or empty in the FormState."""
    return [d.label for d in descriptors if d.required and not state.is_filled(d.name)]


def build_file_path(user_id, application_id, field_name, file_name):
    return f"{user_id}/{application_id}/{field_name}/{file_name}"


def upload_file(storage, path, file_ref):
    """
    Stores one file. Never overwrites: an existing object at `path` is a conflict.
    """
    if storage.exists(path):
        raise StorageConflictError(f"File already exists at '{path}'.")
    content = file_ref.content
    if hasattr(content, 'seek'):
        content.seek(0)
    return storage.save(path, content)


def submit_application(session, country, state, visa_type=None, extra_data=None, storage=None):
    """
    Persists one application from a FormState.

    Args:
        session (SessionContext): the authenticated user.
        country (Country): the destination.
        state (FormState): text answers + file selections.
        visa_type (VisaType): optional visa product.
        extra_data (dict): merged into application_data (e.g. wizard summary).
            A key that is also a form field raises ApplicationSubmissionError.
        storage (Storage): defaults to Django's default_storage.
    """
    storage = storage or default_storage

    application_data = state.text_values()
    if extra_data:
        clashes = sorted(set(application_data) & set(extra_data))
        if clashes:
            logger.error(f"Form fields clash with reserved application keys: {clashes}")
            raise ApplicationSubmissionError(
                "This application form is misconfigured. Please contact us.")
        application_data.update(extra_data)

    # 1. CREATE THE APPLICATION RECORD
    try:
        application = VisaApplication.objects.create(
            user_id=session.user_id,
            country=country,
            visa_type=visa_type,
            status='pending',
            application_data=application_data,
        )
    except DatabaseError as e:
        logger.error(f"Error creating application for user {session.user_id}: {e}")
        raise ApplicationSubmissionError(
            "Failed to submit application. Please try again.") from e

    result = SubmissionResult(application=application)

    # 2. UPLOAD FILES (sequential, failures don't stop the loop)
    for field_name, file_refs in state.file_values():
        for file_ref in file_refs:
            path = build_file_path(session.user_id, application.id, field_name, file_ref.name)
            try:
                stored_path = upload_file(storage, path, file_ref)
                with transaction.atomic():
                    record = VisaApplicationFile.objects.create(
                        application=application,
                        field_name=field_name,
                        file_path=stored_path,
                        file_name=file_ref.name,
                        file_size=file_ref.size,
                        file_type=file_ref.content_type,
                    )
            except Exception as e:
                logger.error(
                    f"Error uploading '{file_ref.name}' ({field_name}) "
                    f"for application {application.id}: {e}")
                result.failures.append((field_name, file_ref.name, str(e)))
                continue
            result.files.append(record)

    logger.info(
        f"Application {application.id} submitted by user {session.user_id}: "
        f"{len(result.files)} file(s) stored, {len(result.failures)} failed")
    return result
