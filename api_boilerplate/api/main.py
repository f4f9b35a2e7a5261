"""FastAPI application initialization and configuration module.

This module builds the application served by uvicorn. It handles:
- Application lifecycle management (startup/shutdown)
- Middleware registration in the correct order
- Exception handler registration
- Route mounting under the API prefix
- Database connection verification and schema sync
- OpenTelemetry instrumentation

Middleware are executed in reverse order of registration.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from api_boilerplate.api.middleware.error_handler import register_exception_handlers
from api_boilerplate.api.middleware.request_context import RequestContextMiddleware
from api_boilerplate.api.middleware.request_logging import RequestLoggingMiddleware
from api_boilerplate.api.routes import include_routes
from api_boilerplate.api.utils.responses import ORJSONResponse
from api_boilerplate.core.config import Settings, get_settings
from api_boilerplate.core.logging import setup_logging
from api_boilerplate.core.observability import instrument_app, setup_tracing
from api_boilerplate.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_schema,
)


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.

    Raises:
        RuntimeError: If database connection fails during startup.
    """
    is_healthy, error_msg = await check_database_connection()

    if is_healthy:
        logger.info("Database connection successful")
    else:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    if get_settings().database_config.auto_create_schema:
        await create_schema()

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_database()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Exception handlers are registered before middleware
    register_exception_handlers(application)

    # Last added runs first: context sets the correlation ID that logging reads
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)

    include_routes(application, settings.api_prefix)

    instrument_app(application, settings)

    return application


app = create_app()
