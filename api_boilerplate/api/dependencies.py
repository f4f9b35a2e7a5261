"""FastAPI dependencies shared by resource routers."""

from collections.abc import Awaitable, Callable
from typing import Any

import orjson
from fastapi import Request

from api_boilerplate.core.exceptions import BadRequestError, ValidationFailedError
from api_boilerplate.core.validation import ValidationSchema, validate


def validate_body(
    schema: ValidationSchema,
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Build a dependency that parses and validates the JSON request body.

    An empty body is treated as ``{}``, so required fields still report as
    missing. Every violation is collected before the request is rejected.

    Args:
        schema: Rules to apply to the body fields.

    Returns:
        An async dependency returning the body as a dict.

    Example:
        @router.post("")
        async def create(body: Annotated[dict[str, Any], Depends(validate_body(S))]): ...
    """

    async def dependency(request: Request) -> dict[str, Any]:
        raw = await request.body()
        if not raw.strip():
            body: object = {}
        else:
            try:
                body = orjson.loads(raw)
            except orjson.JSONDecodeError as e:
                raise BadRequestError("Invalid JSON body") from e

        if not isinstance(body, dict):
            raise BadRequestError("Request body must be a JSON object")

        errors = validate(schema, body)
        if errors:
            raise ValidationFailedError(errors)
        return body

    return dependency
