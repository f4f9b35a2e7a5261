"""JSON responses serialized with orjson and the envelope builders.

``ORJSONResponse`` is the application's default response class. The
``send_*`` helpers are the only way handlers produce bodies, which keeps
every response inside the ``{success, message, data?, errors?}`` envelope.
"""

from typing import Any

import orjson
from fastapi import Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api_boilerplate.api.schemas.envelope import ApiResponse


class ORJSONResponse(JSONResponse):
    """JSON response rendered with orjson.

    orjson handles datetime, UUID and Decimal values natively and is
    considerably faster than the standard library encoder.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")
        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)


def send_success(
    data: Any,  # noqa: ANN401 - any JSON-serializable payload
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> ORJSONResponse:
    """Build a successful envelope.

    Args:
        data: Payload placed in the ``data`` field.
        message: Human-readable outcome.
        status_code: HTTP status code (defaults to 200).

    Returns:
        ORJSONResponse: ``{success: true, message, data}``.
    """
    envelope = ApiResponse[Any](success=True, message=message, data=data)
    return ORJSONResponse(status_code=status_code, content=envelope.to_wire())


def send_created(
    data: Any,  # noqa: ANN401 - any JSON-serializable payload
    message: str = "Created successfully",
) -> ORJSONResponse:
    """Build a 201 envelope for a newly created resource."""
    return send_success(data, message, status.HTTP_201_CREATED)


def send_no_content() -> Response:
    """Build a 204 response.

    HTTP forbids a body on 204, so no envelope is sent.
    """
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def send_error(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    errors: Any = None,  # noqa: ANN401 - validation errors or a stack trace
) -> ORJSONResponse:
    """Build a failed envelope. Used by the exception handlers only.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code (defaults to 500).
        errors: Optional failure details; omitted from the body when None.

    Returns:
        ORJSONResponse: ``{success: false, message, errors?}``.
    """
    if errors is None:
        envelope = ApiResponse[Any](success=False, message=message)
    else:
        envelope = ApiResponse[Any](success=False, message=message, errors=errors)
    return ORJSONResponse(status_code=status_code, content=envelope.to_wire())
