"""Authorization rules for user-owned resources."""

from __future__ import annotations

from typing import Optional

from jobjotter.core.errors import ForbiddenError
from jobjotter.models.users import Actor


def can_access(actor: Optional[Actor], resource_owner_id: Optional[int]) -> bool:
    """Admins may touch anything; everyone else only what they own."""
    if actor is None:
        return False
    if actor.is_admin:
        return True
    return actor.id is not None and actor.id == resource_owner_id


def ensure_access(actor: Optional[Actor], resource_owner_id: Optional[int]) -> None:
    if not can_access(actor, resource_owner_id):
        raise ForbiddenError()


__all__ = ["can_access", "ensure_access"]
