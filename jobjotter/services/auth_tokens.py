"""Issue and verify the JSON Web Tokens used to authenticate API calls."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict

from jose import JWTError, jwt
from pydantic import ValidationError

from jobjotter.core.errors import UnauthorizedError
from jobjotter.models.users import Actor, User

logger = logging.getLogger(__name__)


class AuthTokenService:
    """Sign ``{id, username, isAdmin}`` claims with the application secret."""

    def __init__(self, *, secret_key: str, algorithm: str = "HS256") -> None:
        if not secret_key:
            raise ValueError("A secret key is required to sign tokens.")
        self._secret_key = secret_key
        self._algorithm = algorithm

    def create_token(self, user: User | Actor) -> str:
        if not user.username:
            raise ValueError("create_token passed user without required properties")
        claims: Dict[str, Any] = {
            "id": user.id,
            "username": user.username,
            "isAdmin": bool(user.is_admin),
            "iat": int(time.time()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> Actor:
        """Verify a token and return the actor it identifies."""
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            return Actor.model_validate(claims)
        except (JWTError, ValidationError) as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise UnauthorizedError("Invalid token.") from exc


__all__ = ["AuthTokenService"]
