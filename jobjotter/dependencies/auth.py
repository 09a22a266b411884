"""Bearer-token authentication dependencies."""

from __future__ import annotations

import logging
import re
from typing import Annotated, Optional

from fastapi import Depends, Request

from jobjotter.core.errors import ForbiddenError, UnauthorizedError
from jobjotter.dependencies.clients import get_auth_token_service
from jobjotter.models.users import Actor
from jobjotter.services.auth_tokens import AuthTokenService

logger = logging.getLogger(__name__)

_BEARER_PREFIX = re.compile(r"^bearer\s+", re.IGNORECASE)


def _extract_token(header: str) -> str:
    return _BEARER_PREFIX.sub("", header).replace('"', "").strip()


def get_optional_actor(
    request: Request,
    tokens: Annotated[AuthTokenService, Depends(get_auth_token_service)],
) -> Optional[Actor]:
    """Identity from the ``Authorization`` header, or ``None`` when absent or invalid."""
    header = request.headers.get("authorization")
    if not header:
        return None
    try:
        return tokens.decode(_extract_token(header))
    except UnauthorizedError:
        logger.info("Ignoring invalid bearer token on %s", request.url.path)
        return None


def get_current_actor(
    actor: Annotated[Optional[Actor], Depends(get_optional_actor)],
) -> Actor:
    if actor is None:
        raise UnauthorizedError("Must be logged in.")
    return actor


def require_admin(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    if not actor.is_admin:
        raise ForbiddenError("Must be an admin.")
    return actor


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
AdminActor = Annotated[Actor, Depends(require_admin)]

__all__ = [
    "AdminActor",
    "CurrentActor",
    "get_current_actor",
    "get_optional_actor",
    "require_admin",
]
