"""The response envelope shared by every endpoint.

Every body the API sends has the shape ``{success, message, data?, errors?}``:

- successful responses carry ``data`` and never ``errors``
- failed responses may carry ``errors`` and never ``data``

The models are used both to build responses and to document them in the
OpenAPI schema.
"""

from datetime import UTC, datetime
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope."""

    success: bool = Field(
        ...,
        description="Whether the request succeeded",
        examples=[True],
    )

    message: str = Field(
        ...,
        description="Human-readable outcome",
        examples=["User retrieved successfully", "User not found"],
    )

    data: T | None = Field(
        default=None,
        description="Payload of a successful response",
    )

    errors: Any = Field(
        default=None,
        description=(
            "Failure details: field-level validation errors, or a stack trace "
            "outside production"
        ),
        examples=[[{"field": "email", "message": "email is required"}]],
    )

    @model_validator(mode="after")
    def check_success_consistency(self) -> Self:
        """Reject envelopes mixing a payload with errors."""
        if self.success and self.errors is not None:
            msg = "A successful response cannot carry errors"
            raise ValueError(msg)
        if not self.success and self.data is not None:
            msg = "A failed response cannot carry data"
            raise ValueError(msg)
        return self

    def to_wire(self) -> dict[str, Any]:
        """Serialize with only the fields that were provided."""
        return self.model_dump(mode="json", exclude_unset=True)


class HealthResponse(BaseModel):
    """Body of the health check endpoint."""

    success: bool = True
    message: str = "API is healthy"
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Time the check was answered (with timezone)",
    )
