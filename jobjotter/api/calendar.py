"""Proxy routes for the signed-in user's Google Calendar."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from jobjotter.clients.google_calendar import GoogleCalendarClient
from jobjotter.core.errors import BadRequestError, EmptyUpdateError
from jobjotter.dependencies import CurrentActor, get_calendar_authorizer, get_calendar_client
from jobjotter.schemas import CalendarEventRequest, CalendarEventUpdateRequest
from jobjotter.services import CalendarAuthorizer

router = APIRouter(prefix="/google-calendar", tags=["calendar"])
logger = logging.getLogger(__name__)

_MIXED_TIMES_MESSAGE = "Start and end times must either both be 'date' or both be 'dateTime'."

Authorizer = Annotated[CalendarAuthorizer, Depends(get_calendar_authorizer)]
Calendar = Annotated[GoogleCalendarClient, Depends(get_calendar_client)]


@router.get("/events")
async def list_calendar_events(
    actor: CurrentActor, authorizer: Authorizer, calendar: Calendar
) -> Dict[str, Any]:
    """Events from the past lookback window onward, in start order."""
    credentials = await authorizer.get_authorized_client(actor.id)
    events = await calendar.list_events(credentials)
    return {"events": events}


@router.post("/events", status_code=HTTPStatus.CREATED)
async def create_calendar_event(
    payload: CalendarEventRequest,
    actor: CurrentActor,
    authorizer: Authorizer,
    calendar: Calendar,
) -> Dict[str, Any]:
    if not payload.has_consistent_times():
        raise BadRequestError(_MIXED_TIMES_MESSAGE)

    credentials = await authorizer.get_authorized_client(actor.id)
    event = await calendar.insert_event(credentials, payload.to_event())
    logger.info("User %s created calendar event %s", actor.id, event.get("id"))
    return {"event": event}


@router.patch("/events/{event_id}")
async def update_calendar_event(
    event_id: str,
    payload: CalendarEventUpdateRequest,
    actor: CurrentActor,
    authorizer: Authorizer,
    calendar: Calendar,
) -> Dict[str, Any]:
    if not payload.has_consistent_times():
        raise BadRequestError(_MIXED_TIMES_MESSAGE)
    changes = payload.to_changes()
    if not changes:
        raise EmptyUpdateError()

    credentials = await authorizer.get_authorized_client(actor.id)
    event = await calendar.patch_event(credentials, event_id, changes)
    return {"event": event}


@router.delete("/events/{event_id}")
async def delete_calendar_event(
    event_id: str, actor: CurrentActor, authorizer: Authorizer, calendar: Calendar
) -> Dict[str, Any]:
    credentials = await authorizer.get_authorized_client(actor.id)
    await calendar.delete_event(credentials, event_id)
    return {"deleted": event_id}


__all__ = ["router"]
