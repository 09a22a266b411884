"""Routes for interviews; access follows the owning application."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from jobjotter.dependencies import CurrentActor, get_application_service, get_interview_service
from jobjotter.schemas import InterviewCreateRequest, InterviewUpdateRequest
from jobjotter.services import ApplicationService, InterviewService, ensure_access

router = APIRouter(prefix="/interviews", tags=["interviews"])

Applications = Annotated[ApplicationService, Depends(get_application_service)]
Interviews = Annotated[InterviewService, Depends(get_interview_service)]


@router.post("", status_code=HTTPStatus.CREATED)
async def create_interview(
    payload: InterviewCreateRequest,
    actor: CurrentActor,
    applications: Applications,
    interviews: Interviews,
) -> Dict[str, Any]:
    application = await applications.get(payload.application_id)
    ensure_access(actor, application.user_id)
    return {"interview": await interviews.add(**payload.model_dump())}


@router.get("")
async def list_interviews(actor: CurrentActor, interviews: Interviews) -> Dict[str, Any]:
    return {"interviews": await interviews.find_all(actor.id)}


@router.get("/{interview_id}")
async def get_interview(
    interview_id: int, actor: CurrentActor, interviews: Interviews
) -> Dict[str, Any]:
    ensure_access(actor, await interviews.owner_of(interview_id))
    return {"interview": await interviews.get(interview_id)}


@router.patch("/{interview_id}")
async def update_interview(
    interview_id: int,
    payload: InterviewUpdateRequest,
    actor: CurrentActor,
    interviews: Interviews,
) -> Dict[str, Any]:
    ensure_access(actor, await interviews.owner_of(interview_id))
    return {"interview": await interviews.update(interview_id, payload.changes())}


@router.delete("/{interview_id}")
async def delete_interview(
    interview_id: int, actor: CurrentActor, interviews: Interviews
) -> Dict[str, Any]:
    ensure_access(actor, await interviews.owner_of(interview_id))
    await interviews.remove(interview_id)
    return {"deleted": interview_id}


__all__ = ["router"]
