"""Routes for reminders attached to the caller's applications."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from jobjotter.dependencies import CurrentActor, get_application_service, get_reminder_service
from jobjotter.schemas import ReminderCreateRequest, ReminderUpdateRequest
from jobjotter.services import ApplicationService, ReminderService, ensure_access

router = APIRouter(prefix="/reminders", tags=["reminders"])

Applications = Annotated[ApplicationService, Depends(get_application_service)]
Reminders = Annotated[ReminderService, Depends(get_reminder_service)]


@router.post("", status_code=HTTPStatus.CREATED)
async def create_reminder(
    payload: ReminderCreateRequest,
    actor: CurrentActor,
    applications: Applications,
    reminders: Reminders,
) -> Dict[str, Any]:
    """The reminder belongs to whoever owns the application."""
    application = await applications.get(payload.application_id)
    ensure_access(actor, application.user_id)
    reminder = await reminders.add(user_id=application.user_id, **payload.model_dump())
    return {"reminder": reminder}


@router.get("")
async def list_reminders(actor: CurrentActor, reminders: Reminders) -> Dict[str, Any]:
    return {"reminders": await reminders.find_all(actor.id)}


@router.get("/{reminder_id}")
async def get_reminder(reminder_id: int, actor: CurrentActor, reminders: Reminders) -> Dict[str, Any]:
    reminder = await reminders.get(reminder_id)
    ensure_access(actor, reminder.user_id)
    return {"reminder": reminder}


@router.patch("/{reminder_id}")
async def update_reminder(
    reminder_id: int,
    payload: ReminderUpdateRequest,
    actor: CurrentActor,
    reminders: Reminders,
) -> Dict[str, Any]:
    reminder = await reminders.get(reminder_id)
    ensure_access(actor, reminder.user_id)
    return {"reminder": await reminders.update(reminder_id, payload.changes())}


@router.delete("/{reminder_id}")
async def delete_reminder(
    reminder_id: int, actor: CurrentActor, reminders: Reminders
) -> Dict[str, Any]:
    reminder = await reminders.get(reminder_id)
    ensure_access(actor, reminder.user_id)
    await reminders.remove(reminder_id)
    return {"deleted": reminder_id}


__all__ = ["router"]
