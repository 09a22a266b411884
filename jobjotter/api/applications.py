"""Routes for job applications and their related records."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from jobjotter.dependencies import (
    CurrentActor,
    get_application_service,
    get_interview_service,
    get_reminder_service,
)
from jobjotter.models import ApplicationDetail
from jobjotter.schemas import ApplicationCreateRequest, ApplicationUpdateRequest
from jobjotter.services import (
    ApplicationService,
    InterviewService,
    ReminderService,
    ensure_access,
)

router = APIRouter(prefix="/applications", tags=["applications"])

Applications = Annotated[ApplicationService, Depends(get_application_service)]
Interviews = Annotated[InterviewService, Depends(get_interview_service)]
Reminders = Annotated[ReminderService, Depends(get_reminder_service)]


@router.post("", status_code=HTTPStatus.CREATED)
async def create_application(
    payload: ApplicationCreateRequest, actor: CurrentActor, applications: Applications
) -> Dict[str, Any]:
    """Record an application owned by the caller."""
    application = await applications.add(user_id=actor.id, **payload.model_dump())
    return {"application": application}


@router.get("")
async def list_applications(actor: CurrentActor, applications: Applications) -> Dict[str, Any]:
    return {"applications": await applications.find_by_user(actor.id)}


@router.get("/{application_id}")
async def get_application(
    application_id: int,
    actor: CurrentActor,
    applications: Applications,
    interviews: Interviews,
    reminders: Reminders,
) -> Dict[str, Any]:
    """The application with its interviews and reminders."""
    application = await applications.get(application_id)
    ensure_access(actor, application.user_id)

    detail = ApplicationDetail(
        **application.model_dump(),
        interviews=await interviews.find_by_application(application_id),
        reminders=await reminders.find_by_application(application_id),
    )
    return {"application": detail}


@router.patch("/{application_id}")
async def update_application(
    application_id: int,
    payload: ApplicationUpdateRequest,
    actor: CurrentActor,
    applications: Applications,
) -> Dict[str, Any]:
    application = await applications.get(application_id)
    ensure_access(actor, application.user_id)
    return {"application": await applications.update(application_id, payload.changes())}


@router.delete("/{application_id}")
async def delete_application(
    application_id: int, actor: CurrentActor, applications: Applications
) -> Dict[str, Any]:
    application = await applications.get(application_id)
    ensure_access(actor, application.user_id)
    await applications.remove(application_id)
    return {"deleted": application_id}


@router.get("/{application_id}/interviews")
async def list_application_interviews(
    application_id: int,
    actor: CurrentActor,
    applications: Applications,
    interviews: Interviews,
) -> Dict[str, Any]:
    application = await applications.get(application_id)
    ensure_access(actor, application.user_id)
    return {"interviews": await interviews.find_by_application(application_id)}


@router.get("/{application_id}/reminders")
async def list_application_reminders(
    application_id: int,
    actor: CurrentActor,
    applications: Applications,
    reminders: Reminders,
) -> Dict[str, Any]:
    application = await applications.get(application_id)
    ensure_access(actor, application.user_id)
    return {"reminders": await reminders.find_by_application(application_id)}


__all__ = ["router"]
