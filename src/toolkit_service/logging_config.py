"""
Logging configuration for the Toolkit Service.

Provides the shared service logger, the root logging setup and the
request logging middleware installed on the FastAPI application.
"""

import logging
import sys
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("toolkit_service")


def setup_logging() -> None:
    """Configure the root logger once, using the level from settings."""
    root_logger = logging.getLogger()
    level = getattr(logging, settings.LOGGING_LEVEL.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Avoid stacking handlers when the app module is reloaded (tests, uvicorn --reload)
    if not any(getattr(h, "_toolkit_handler", False) for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._toolkit_handler = True
        root_logger.addHandler(handler)

    # SQL echo is controlled by the engine, keep the pool quiet otherwise
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logger.setLevel(level)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration for every request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                f"{request.method} {request.url.path} failed after {duration_ms:.1f}ms"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f}ms)"
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install CORS and request logging middleware on the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
