import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.views import exception_handler

from inventory.utils import respond

log = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    DRF handler that also understands the errors raised by the domain layer.

    Validation errors from the engines become 400, store errors are passed
    through with their own text: 409 for constraint violations, 503 for
    everything else the database reports.
    """
    if isinstance(exc, DjangoValidationError):
        messages = exc.messages
        return respond(
            {"status": "error", "errors": messages},
            " ".join(messages),
            http_status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        log.warning("Integrity error in %s: %s", _view_name(context), exc)
        return respond(
            {"status": "error", "error_code": "INTEGRITY"},
            f"Opslaan mislukt: {exc}",
            http_status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, DatabaseError):
        log.exception("Database error in %s", _view_name(context))
        return respond(
            {"status": "error", "error_code": "STORE"},
            f"Database niet beschikbaar: {exc}",
            http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return exception_handler(exc, context)


def _view_name(context):
    view = (context or {}).get("view")
    return type(view).__name__ if view is not None else "?"
