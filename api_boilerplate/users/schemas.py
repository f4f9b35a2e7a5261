"""Wire representations and validation schemas for users.

Bodies are checked against ``CREATE_USER_SCHEMA``/``UPDATE_USER_SCHEMA``
first, then loaded into the DTOs. Users travel in camelCase
(``firstName``, ``createdAt``) while the ORM uses snake_case.
"""

from datetime import datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_boilerplate.core.validation import FieldRule, ValidationSchema
from api_boilerplate.users.models import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH

NAME_MIN_LENGTH = 2

CREATE_USER_SCHEMA: ValidationSchema = MappingProxyType(
    {
        "firstName": FieldRule(
            required=True,
            type="string",
            min_length=NAME_MIN_LENGTH,
            max_length=NAME_MAX_LENGTH,
        ),
        "lastName": FieldRule(
            required=True,
            type="string",
            min_length=NAME_MIN_LENGTH,
            max_length=NAME_MAX_LENGTH,
        ),
        "email": FieldRule(required=True, type="email", max_length=EMAIL_MAX_LENGTH),
    }
)

UPDATE_USER_SCHEMA: ValidationSchema = MappingProxyType(
    {
        "firstName": FieldRule(
            type="string", min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
        ),
        "lastName": FieldRule(
            type="string", min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
        ),
        "email": FieldRule(type="email", max_length=EMAIL_MAX_LENGTH),
    }
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class UserCreate(_CamelModel):
    """Fields required to register a user."""

    first_name: str
    last_name: str
    email: str


class UserUpdate(_CamelModel):
    """Fields a client may change; absent or empty ones are left untouched."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    def changes(self) -> dict[str, str]:
        """Return the provided, non-empty fields keyed by attribute name."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None and value != ""
        }


class UserRead(_CamelModel):
    """A user as sent to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., examples=[1])
    first_name: str = Field(..., examples=["Ada"])
    last_name: str = Field(..., examples=["Lovelace"])
    email: str = Field(..., examples=["ada@example.com"])
    created_at: datetime
    updated_at: datetime

    def to_wire(self) -> dict[str, object]:
        """Serialize with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
