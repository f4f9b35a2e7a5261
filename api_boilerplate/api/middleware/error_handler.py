"""Global exception handlers for the FastAPI application.

Every error raised while serving a request ends here and leaves as exactly
one failed envelope:

- ``AppError``: its own status code and message; field errors when present
- Starlette ``HTTPException``: 404/405 become the "route not found" message,
  other statuses keep their detail
- ``RequestValidationError``: 400 with field errors in the envelope shape
- anything else: 500 "Internal Server Error"

Outside production, failures without field errors also expose the stack
trace in ``errors``. Handlers never raise.
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from api_boilerplate.api.utils.responses import send_error
from api_boilerplate.core.config import get_settings
from api_boilerplate.core.context import RequestContext
from api_boilerplate.core.error_context import (
    sanitize_error_context,
    sanitize_validation_errors,
)
from api_boilerplate.core.exceptions import AppError
from api_boilerplate.core.observability import record_error_on_span
from api_boilerplate.core.validation import ValidationErrorDetail

INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"
VALIDATION_FAILED_MESSAGE = "Validation failed"
ROUTE_NOT_FOUND_STATUSES = {
    status.HTTP_404_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED,
}


def _stack_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def build_error_response(exc: Exception) -> Response:
    """Turn any exception into the failed envelope.

    Args:
        exc: The raised exception.

    Returns:
        Response: The envelope with the derived status code.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = INTERNAL_SERVER_ERROR_MESSAGE
    errors: Any = None
    operational = False

    if isinstance(exc, AppError):
        status_code = exc.status_code
        message = exc.message
        operational = exc.is_operational
        if exc.validation_errors:
            errors = [error.to_wire() for error in exc.validation_errors]

    if errors is None and not get_settings().is_production:
        errors = _stack_trace(exc)

    record_error_on_span(status_code, message, operational=operational)
    return send_error(message, status_code, errors)


def route_not_found_message(request: Request) -> str:
    """Message sent for requests no route accepts."""
    return f"Route {request.method} {request.url.path} not found"


async def app_error_handler(request: Request, exc: Exception) -> Response:
    """Handle AppError exceptions.

    Args:
        request: The request that caused the exception
        exc: The AppError to handle

    Returns:
        Response: The failed envelope

    Raises:
        TypeError: If exc is not an AppError instance
    """
    if not isinstance(exc, AppError):
        raise TypeError(f"Expected AppError, got {type(exc).__name__}")

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    if exc.validation_errors:
        error_context["validation_errors"] = sanitize_validation_errors(
            [error.to_wire() for error in exc.validation_errors]
        )

    log = logger.warning if exc.is_operational else logger.error
    log(
        "Error {status_code}: {message}",
        status_code=exc.status_code,
        message=exc.message,
        correlation_id=RequestContext.get_correlation_id(),
        **error_context,
    )

    return build_error_response(exc)


async def request_validation_error_handler(
    request: Request, exc: Exception
) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Pydantic-validated parameters report their problems in the same
    ``{field, message, value?}`` shape as the declarative validator.

    Args:
        request: The request that caused the exception
        exc: The RequestValidationError to handle

    Returns:
        Response: 400 envelope with field errors

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    details: list[ValidationErrorDetail] = []
    for error in exc.errors():
        field_path = error.get("loc", ())
        field_name = ".".join(str(loc) for loc in field_path[1:]) or "root"
        message = f"{field_name}: {error.get('msg', 'Invalid value')}"
        if "input" in error:
            details.append(
                ValidationErrorDetail(
                    field=field_name, message=message, value=error["input"]
                )
            )
        else:
            details.append(ValidationErrorDetail(field=field_name, message=message))

    wire_errors = [detail.to_wire() for detail in details]
    logger.warning(
        "Request validation failed",
        correlation_id=RequestContext.get_correlation_id(),
        method=request.method,
        path=str(request.url.path),
        validation_errors=sanitize_validation_errors(wire_errors),
    )

    record_error_on_span(
        status.HTTP_400_BAD_REQUEST, VALIDATION_FAILED_MESSAGE, operational=True
    )
    return send_error(VALIDATION_FAILED_MESSAGE, status.HTTP_400_BAD_REQUEST, wire_errors)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException.

    Unmatched routes (404) and unmatched methods (405) both answer 404 with
    the standard "route not found" message.

    Args:
        request: The request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: The failed envelope

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    if exc.status_code in ROUTE_NOT_FOUND_STATUSES:
        logger.info(
            "Route not found: {method} {path}",
            method=request.method,
            path=str(request.url.path),
            correlation_id=RequestContext.get_correlation_id(),
        )
        return send_error(route_not_found_message(request), status.HTTP_404_NOT_FOUND)

    logger.warning(
        "HTTP exception",
        correlation_id=RequestContext.get_correlation_id(),
        status=exc.status_code,
        method=request.method,
        path=str(request.url.path),
        detail=exc.detail,
    )
    return build_error_response(AppError(str(exc.detail), exc.status_code))


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle every exception no other handler claimed.

    The full exception is logged server-side; the client only gets the
    generic message (plus the stack trace outside production).

    Args:
        request: The request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: 500 envelope
    """
    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.opt(exception=exc).error(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        correlation_id=RequestContext.get_correlation_id(),
        **error_context,
    )

    return build_error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
