"""Operational error hierarchy for consistent error handling.

Business logic raises ``AppError`` (or one of its variants) for expected
outcomes such as a missing resource or a duplicate email. The API layer
catches these centrally and turns them into the response envelope; any other
exception reaching the handlers is treated as a defect.

Key components:
- **AppError**: Base exception carrying an HTTP status code, the operational
  flag and optional field-level validation errors
- **Specialized exceptions**: Status-specific shortcuts (400, 404, 409)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from api_boilerplate.core.validation import ValidationErrorDetail


class AppError(Exception):
    """Base exception for anticipated failures.

    Args:
        message: Human-readable error message sent to the client
        status_code: HTTP status code of the response (defaults to 500)
        is_operational: Whether this is an expected business outcome rather
            than a defect (defaults to True)
        validation_errors: Field-level errors for validation failures
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        is_operational: bool = True,
        validation_errors: Sequence[ValidationErrorDetail] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.is_operational = is_operational
        self.validation_errors = (
            list(validation_errors) if validation_errors is not None else None
        )
        super().__init__(message)

    def __str__(self) -> str:
        """Return the status code and message."""
        return f"[{self.status_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception."""
        class_name = self.__class__.__name__
        errors_str = (
            f", validation_errors={len(self.validation_errors)}"
            if self.validation_errors
            else ""
        )
        return (
            f"{class_name}(message='{self.message}', status_code={self.status_code}, "
            f"is_operational={self.is_operational}{errors_str})"
        )


class BadRequestError(AppError):
    """Exception raised when a request is malformed (e.g. a non-numeric ID)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ValidationFailedError(AppError):
    """Exception raised when a request body violates its validation schema.

    Args:
        validation_errors: Every violation found in the body
        message: Summary message (defaults to "Validation failed")
    """

    def __init__(
        self,
        validation_errors: Sequence[ValidationErrorDetail],
        message: str = "Validation failed",
    ) -> None:
        super().__init__(message, 400, validation_errors=validation_errors)


class NotFoundError(AppError):
    """Exception raised when a requested resource does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(AppError):
    """Exception raised when a write would break a uniqueness rule."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)
