"""Domain exceptions for DoubtDesk.

Every error carries the HTTP status the API answers with, so routes can let
them propagate and a single handler in ``doubtdesk.main`` renders them.
"""
from typing import Optional

from fastapi import status


class DoubtDeskError(Exception):
    """Base exception for all DoubtDesk errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message}


class Unauthenticated(DoubtDeskError):
    """Raised when no identity can be resolved for the caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized. Please login to continue."


class Forbidden(DoubtDeskError):
    """Raised when the caller is known but the operation is not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have permission to perform this action."


class NotFound(DoubtDeskError):
    """Raised when a record is absent or deliberately hidden from the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Doubt not found."


class ValidationFailed(DoubtDeskError):
    """Raised when a field constraint is violated."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, rule: str, message: str):
        """Initialize the exception.

        Args:
            field: Name of the offending field.
            rule: Short machine-readable rule id, e.g. ``min_length``.
            message: Human readable explanation.
        """
        self.field = field
        self.rule = rule
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "field": self.field, "rule": self.rule}


class Conflict(DoubtDeskError):
    """Raised when an operation violates the doubt lifecycle."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "This doubt has already been resolved."


class DependencyUnavailable(DoubtDeskError):
    """Raised when the AI suggestion service cannot produce an answer."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "AI service is not available. Please try again later."
