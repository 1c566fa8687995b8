"""DRF exception handler translating domain errors into API responses."""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler, set_rollback  # type: ignore

from shared.domain.exceptions import DomainError, ServerError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render domain errors, defer to DRF, and hide everything else behind a 500."""

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown view"

    if isinstance(exc, DomainError):
        if isinstance(exc, ServerError):
            logger.error(f"Server error in {view_name}: {exc.detail}", exc_info=exc.__cause__ or exc)
            exc = ServerError()
        set_rollback()
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, "error_dict") else {"non_field_errors": exc.messages}
        set_rollback()
        return Response(
            {"detail": "Invalid input.", "code": "validation_error", "errors": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    logger.exception(f"Unhandled error in {view_name}", exc_info=exc)
    set_rollback()
    return Response(ServerError().to_dict(), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
