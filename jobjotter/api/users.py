"""User administration and profile routes."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from jobjotter.core.errors import ForbiddenError, UnauthorizedError
from jobjotter.dependencies import (
    AdminActor,
    CurrentActor,
    get_auth_token_service,
    get_user_service,
)
from jobjotter.models.users import Actor
from jobjotter.schemas import UserCreateRequest, UserUpdateRequest
from jobjotter.services import AuthTokenService, UserService

router = APIRouter(prefix="/users", tags=["users"])

Users = Annotated[UserService, Depends(get_user_service)]


def _ensure_user_or_admin(actor: Actor, username: str) -> None:
    if not (actor.is_admin or actor.username == username):
        raise ForbiddenError()


@router.post("", status_code=HTTPStatus.CREATED)
async def create_user(
    payload: UserCreateRequest,
    actor: AdminActor,
    users: Users,
    tokens: Annotated[AuthTokenService, Depends(get_auth_token_service)],
) -> Dict[str, Any]:
    """Admins create accounts, possibly other admins, and get their token back."""
    user = await users.register(
        username=payload.username,
        password=payload.password,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        is_admin=payload.is_admin,
    )
    return {"user": user, "token": tokens.create_token(user)}


@router.get("")
async def list_users(actor: AdminActor, users: Users) -> Dict[str, Any]:
    return {"users": await users.find_all()}


@router.get("/{username}")
async def get_user(username: str, actor: CurrentActor, users: Users) -> Dict[str, Any]:
    _ensure_user_or_admin(actor, username)
    return {"user": await users.get(username)}


@router.patch("/{username}")
async def update_user(
    username: str, payload: UserUpdateRequest, actor: CurrentActor, users: Users
) -> Dict[str, Any]:
    """Profile edits must be confirmed with the account's current password."""
    _ensure_user_or_admin(actor, username)
    try:
        await users.authenticate(username, payload.password)
    except UnauthorizedError as exc:
        raise UnauthorizedError("Incorrect password.") from exc

    return {"user": await users.update(username, payload.changes())}


@router.delete("/{username}")
async def delete_user(username: str, actor: CurrentActor, users: Users) -> Dict[str, Any]:
    _ensure_user_or_admin(actor, username)
    await users.remove(username)
    return {"deleted": username}


@router.post("/{username}/applications/{application_id}", status_code=HTTPStatus.CREATED)
async def apply_to_job(
    username: str, application_id: int, actor: CurrentActor, users: Users
) -> Dict[str, Any]:
    _ensure_user_or_admin(actor, username)
    await users.apply_to_job(username, application_id)
    return {"applied": application_id}


__all__ = ["router"]
