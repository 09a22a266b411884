"""bcrypt password hashing with a configurable work factor."""

from __future__ import annotations

import bcrypt


class PasswordHasher:
    def __init__(self, *, work_factor: int = 12) -> None:
        self._work_factor = work_factor

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._work_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Malformed stored hash.
            return False


__all__ = ["PasswordHasher"]
