"""Main entry point for running the API with uvicorn."""

import os

import uvicorn
from loguru import logger

from api_boilerplate.api.main import app
from api_boilerplate.core.config import get_settings
from api_boilerplate.core.logging import setup_logging

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_log_config() -> dict[str, object]:
    """Route uvicorn's loggers through loguru."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "default": {
                "class": "api_boilerplate.core.logging.InterceptHandler",
            },
        },
        "loggers": {
            name: {"handlers": ["default"], "level": "INFO", "propagate": False}
            for name in UVICORN_LOGGERS
        },
    }


def main() -> None:
    """Start the server on the configured host and port."""
    settings = get_settings()
    setup_logging(settings)

    # PORT is set by most container platforms
    port = int(os.environ.get("PORT", settings.api_port))
    log_config = build_log_config()

    # Reload requires the app as an import string
    if settings.debug:
        logger.info(
            "Starting Uvicorn on http://{}:{} (development mode with auto-reload)",
            settings.api_host,
            port,
        )
        uvicorn.run(
            "api_boilerplate.api.main:app",
            host=settings.api_host,
            port=port,
            reload=True,
            log_config=log_config,
        )
    else:
        logger.info(
            "Starting Uvicorn on http://{}:{} ({} mode)",
            settings.api_host,
            port,
            settings.environment,
        )
        uvicorn.run(
            app,
            host=settings.api_host,
            port=port,
            reload=False,
            log_config=log_config,
        )


if __name__ == "__main__":
    main()
