"""
Domain Errors

Every failure a domain operation can report. Each error carries the HTTP
status it maps to and a stable machine-readable code; the API exception
handler renders them, so domain code never builds responses itself.
"""

from typing import Dict, List, Optional


class DomainError(Exception):
    """Base class for all expected domain failures."""

    status_code = 400
    default_code = "error"
    default_detail = "Request could not be processed."

    def __init__(self, detail: Optional[str] = None, *, errors: Optional[Dict[str, List[str]]] = None):
        self.detail = detail or self.default_detail
        self.errors = errors or {}
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        payload = {"detail": self.detail, "code": self.default_code}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationError(DomainError):
    """Malformed or missing input. ``errors`` maps each field to its messages."""

    default_code = "validation_error"
    default_detail = "Invalid input."


class InvalidIdentifier(DomainError):
    default_code = "invalid_identifier"
    default_detail = "Malformed identifier."


class NotFound(DomainError):
    status_code = 404
    default_code = "not_found"
    default_detail = "Not found."


class Forbidden(DomainError):
    status_code = 403
    default_code = "forbidden"
    default_detail = "You do not have permission to perform this action."


class Conflict(DomainError):
    status_code = 409
    default_code = "conflict"
    default_detail = "The selected dates are not available."


class InvalidRange(ValidationError):
    default_code = "invalid_range"
    default_detail = "Check-out date must be after check-in date."


class PastDate(ValidationError):
    default_code = "past_date"
    default_detail = "Check-in date cannot be in the past."


class CapacityExceeded(ValidationError):
    default_code = "capacity_exceeded"
    default_detail = "Number of guests exceeds the property capacity."


class InvalidTransition(DomainError):
    default_code = "invalid_transition"
    default_detail = "This status change is not allowed."


class InvalidStatus(DomainError):
    default_code = "invalid_status"
    default_detail = "Unknown booking status."


class ServerError(DomainError):
    """Unexpected or storage failure. The detail shown to callers is generic."""

    status_code = 500
    default_code = "server_error"
    default_detail = "Internal server error."
