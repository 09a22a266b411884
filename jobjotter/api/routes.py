"""
FastAPI routes for the Job Jotter API.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from jobjotter.api import applications, auth, calendar, interviews, reminders, users
from jobjotter.clients.postgres import Database
from jobjotter.dependencies import get_database

router = APIRouter()
logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


@router.get("/", response_class=PlainTextResponse)
async def welcome() -> str:
    return "Welcome to Job Jotter API!"


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(db: Annotated[Database, Depends(get_database)]) -> JSONResponse:
    """Health endpoint for monitoring; probes the database."""
    body = {
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        await db.fetchval("SELECT 1")
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        body.update(status="error", database="disconnected", error=str(exc))
        return JSONResponse(body, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)

    body.update(status="ok", database="connected")
    return JSONResponse(body)


router.include_router(auth.router)
router.include_router(calendar.router)
router.include_router(users.router)
router.include_router(applications.router)
router.include_router(interviews.router)
router.include_router(reminders.router)

__all__ = ["router"]
