"""User records and the identity carried in API tokens."""

from __future__ import annotations

from typing import Optional

from jobjotter.models.applications import ApplicationSummary
from jobjotter.models.base import CamelModel


class User(CamelModel):
    id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False


class UserWithApplications(User):
    applications: list[ApplicationSummary] = []


class Actor(CamelModel):
    """Identity decoded from a bearer token."""

    id: Optional[int] = None
    username: str
    is_admin: bool = False


__all__ = ["Actor", "User", "UserWithApplications"]
