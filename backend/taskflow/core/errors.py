# taskflow/core/errors.py
"""
Error taxonomy shared by every layer of the API.

Each component raises the most specific subclass it can. All of them carry a
`category` tag, so the boundary handler in `taskflow.core.handlers` needs a
single lookup to turn any failure into a status code and response envelope.

Hierarchy:
- AppError
  - ValidationError (field-tagged)
    - DuplicateKeyError
  - AuthenticationError
    - InvalidTokenError
    - ExpiredTokenError
  - AuthorizationError
  - NotFoundError
  - InternalError
"""
from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorCategory(enum.Enum):
    """Client-facing failure categories and their HTTP status codes."""
    VALIDATION = 400
    AUTHENTICATION = 401
    AUTHORIZATION = 403
    NOT_FOUND = 404
    INTERNAL = 500

    @property
    def status_code(self) -> int:
        return self.value


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint, tagged with the input field it belongs to."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base class for every failure the API knows how to report."""
    category: ErrorCategory = ErrorCategory.INTERNAL
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or out-of-range input. Always carries at least one FieldError."""
    category = ErrorCategory.VALIDATION
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        super().__init__(message)
        self.errors = list(errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a failure on exactly one field; the field message doubles as the summary."""
        return cls([FieldError(field, message)], message=message)


class DuplicateKeyError(ValidationError):
    """A unique constraint in storage rejected the write."""

    def __init__(self, field: str, message: str):
        super().__init__([FieldError(field, message)], message=message)
        self.field = field


class AuthenticationError(AppError):
    """Missing, invalid or expired token, or a principal that no longer resolves."""
    category = ErrorCategory.AUTHENTICATION
    default_message = "Not authorized"


class InvalidTokenError(AuthenticationError):
    """Bad signature or malformed token structure."""
    default_message = "Invalid token"


class ExpiredTokenError(AuthenticationError):
    """Signature is fine but the validity window has passed."""
    default_message = "Token expired"


class AuthorizationError(AppError):
    """Valid principal, forbidden action on a resource it does not own."""
    category = ErrorCategory.AUTHORIZATION
    default_message = "Access forbidden"


class NotFoundError(AppError):
    """Resource absent, or deliberately hidden from the caller."""
    category = ErrorCategory.NOT_FOUND
    default_message = "Resource not found"


class InternalError(AppError):
    """Storage faults and anything unexpected. Details stay server-side."""
    category = ErrorCategory.INTERNAL
