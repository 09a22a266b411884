"""Schemas for user administration endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field

from jobjotter.schemas.auth import RegisterRequest
from jobjotter.schemas.base import RequestModel


class UserCreateRequest(RegisterRequest):
    """Admin-only creation; the new account may itself be an admin."""

    is_admin: bool = False


class UserUpdateRequest(RequestModel):
    """Profile changes, confirmed with the account's current password."""

    password: str = Field(..., min_length=1, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[str] = Field(
        None, min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$"
    )

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude={"password"})


__all__ = ["UserCreateRequest", "UserUpdateRequest"]
