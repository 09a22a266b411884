"""
FastAPI application entrypoint for the Job Jotter API.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobjotter.api.routes import router as api_router
from jobjotter.core.config import DEVELOPMENT_SECRET_KEY, get_settings
from jobjotter.core.errors import JobJotterError
from jobjotter.core.logging import configure_logging
from jobjotter.dependencies import get_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database pool and make sure the schema exists."""
    settings = get_settings()
    if settings.environment == "test":
        yield
        return

    db = get_database()
    await db.connect()
    await db.ensure_schema()
    try:
        yield
    finally:
        await db.close()


async def handle_domain_error(request: Request, exc: JobJotterError) -> JSONResponse:
    status = int(exc.status_code)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        {"error": {"message": exc.message, "status": status}}, status_code=status
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.security.secret_key == DEVELOPMENT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; using the development signing secret.")

    app = FastAPI(
        title="Job Jotter API",
        version="0.1.0",
        description="Track job applications, interviews and reminders.",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )
    app.add_exception_handler(JobJotterError, handle_domain_error)
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
