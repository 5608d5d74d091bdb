"""Domain errors raised by the forum services.

Every error carries a stable ``code`` and the HTTP status it maps to, so the
API layer can render them uniformly.
"""

from __future__ import annotations

from fastapi import status


class ForumError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "forum_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ForumError):
    """Raised when a referenced user, post, reply or category does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ForumError):
    """Raised when submitted content breaks a content rule."""

    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidOperationError(ForumError):
    """Raised for requests that are well formed but not allowed."""

    code = "invalid_operation"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ForumError):
    """Raised when a credential is missing, invalid or does not match a user."""

    code = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class ConfigurationError(ForumError):
    """Raised when required static configuration is missing from storage."""

    code = "configuration_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DataIntegrityError(ForumError):
    """Raised when stored data violates an invariant enforced at write time."""

    code = "data_integrity_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
