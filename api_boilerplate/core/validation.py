"""Declarative, schema-driven validation of request bodies.

A validation schema maps each field name to a ``FieldRule``. ``validate``
walks the schema in declaration order and collects every violation; it never
stops at the first failing field, so a client gets the full list of problems
in one response. A single field can contribute several errors.

Per field the checks run in this order:

1. presence (``required``); a missing required field reports only that
2. optional fields that are missing are skipped entirely
3. runtime type (``string``, ``number``, ``boolean``, ``email``)
4. length bounds for text
5. numeric bounds for numbers
6. ``pattern`` for text

A type mismatch does not stop the later checks. Bounds are compared with
``is not None``, so a bound of ``0`` is enforced like any other value.
"""

import math
import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FieldType = Literal["string", "number", "boolean", "email"]


class FieldRule(BaseModel):
    """Rules applied to a single body field."""

    model_config = ConfigDict(frozen=True)

    required: bool = False
    type: FieldType | None = None
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    min: int | float | None = None
    max: int | float | None = None
    pattern: re.Pattern[str] | None = None


ValidationSchema = Mapping[str, FieldRule]


class ValidationErrorDetail(BaseModel):
    """One violated rule.

    ``value`` is only set when the field was present in the record, so a
    serialized error for a missing field carries no ``value`` key.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    value: Any = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize the error, leaving out ``value`` for absent fields."""
        return self.model_dump(mode="json", exclude_unset=True)


_MISSING = object()


def _is_empty(value: object) -> bool:
    return value is _MISSING or value is None or value == ""


def _is_text(value: object) -> bool:
    return isinstance(value, str)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _matches_type(field_type: FieldType, value: object) -> bool:
    if field_type == "string":
        return _is_text(value)
    if field_type == "number":
        return _is_number(value) and not (
            isinstance(value, float) and math.isnan(value)
        )
    if field_type == "boolean":
        return isinstance(value, bool)
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


_TYPE_MESSAGES: dict[str, str] = {
    "string": "{field} must be a string",
    "number": "{field} must be a number",
    "boolean": "{field} must be a boolean",
    "email": "{field} must be a valid email",
}


def _check_field(field: str, rule: FieldRule, value: object) -> list[str]:
    """Return the messages for every rule ``value`` violates."""
    if _is_empty(value):
        return [f"{field} is required"] if rule.required else []

    messages: list[str] = []

    if rule.type is not None and not _matches_type(rule.type, value):
        messages.append(_TYPE_MESSAGES[rule.type].format(field=field))

    if isinstance(value, str):
        if rule.min_length is not None and len(value) < rule.min_length:
            messages.append(
                f"{field} must be at least {rule.min_length} characters long"
            )
        if rule.max_length is not None and len(value) > rule.max_length:
            messages.append(f"{field} must not exceed {rule.max_length} characters")

    if _is_number(value):
        if rule.min is not None and value < rule.min:  # type: ignore[operator]
            messages.append(f"{field} must be at least {rule.min}")
        if rule.max is not None and value > rule.max:  # type: ignore[operator]
            messages.append(f"{field} must not exceed {rule.max}")

    if (
        rule.pattern is not None
        and isinstance(value, str)
        and rule.pattern.search(value) is None
    ):
        messages.append(f"{field} format is invalid")

    return messages


def validate(
    schema: ValidationSchema, record: Mapping[str, Any]
) -> list[ValidationErrorDetail]:
    """Validate ``record`` against ``schema``.

    Args:
        schema: Field rules, checked in iteration order.
        record: The candidate record (usually a parsed JSON body).

    Returns:
        list[ValidationErrorDetail]: Every violation found, empty when the
            record is valid.
    """
    errors: list[ValidationErrorDetail] = []
    for field, rule in schema.items():
        value = record.get(field, _MISSING)
        for message in _check_field(field, rule, value):
            if value is _MISSING:
                errors.append(ValidationErrorDetail(field=field, message=message))
            else:
                errors.append(
                    ValidationErrorDetail(field=field, message=message, value=value)
                )
    return errors
