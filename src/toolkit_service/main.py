"""
Toolkit Service main application entry point.

This module defines the FastAPI application that serves the Toolkit Service API,
including all routes, error handlers and lifecycle hooks.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .db import close_engine
from .errors import ToolkitError
from .logging_config import setup_logging, setup_middleware
from .routers import admin_router, docs_router, health_router, tool_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager.

    The engine is created lazily on first use and disposed on shutdown.
    """
    app.logger.info(f"'{settings.PROJECT_NAME}' startup sequence initiated.")
    app.startup_time = time.time()

    yield

    app.logger.info(f"'{settings.PROJECT_NAME}' shutdown sequence initiated.")
    await close_engine()


# Configure logging before app initialization
setup_logging()

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Directory of AI tools: public listings, submission and administration",
    version=settings.VERSION,
    root_path=settings.ROOT_PATH,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={"persistAuthorization": True},
)

# Initialize application logger
app.logger = logging.getLogger(settings.PROJECT_NAME)

# Setup middleware - MUST be done before application starts
setup_middleware(app)


# --- Custom Exception Handlers ---
@app.exception_handler(ToolkitError)
async def toolkit_error_handler(request: Request, exc: ToolkitError):
    log = app.logger.error if exc.status_code >= 500 else app.logger.info
    log(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")

    content = {"success": False, "error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    app.logger.error(f"HTTPException: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    app.logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


# --- Service-Specific Routers ---
app.include_router(health_router)
app.include_router(tool_router)
app.include_router(admin_router)
app.include_router(docs_router)


@app.get("/", tags=["root"], include_in_schema=False)
async def root():
    """Root endpoint for basic service information."""
    return {"service": settings.PROJECT_NAME, "version": settings.VERSION}
