"""Data access for user accounts."""

from __future__ import annotations

import logging
from typing import Any, Dict

import asyncpg

from jobjotter.clients.postgres import Database
from jobjotter.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobjotter.models.users import User, UserWithApplications
from jobjotter.services.passwords import PasswordHasher
from jobjotter.utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, username, first_name, last_name, email, is_admin"

USER_UPDATE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "isAdmin": "is_admin",
    "password": "password",
}


class UserService:
    def __init__(self, db: Database, hasher: PasswordHasher) -> None:
        self._db = db
        self._hasher = hasher

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user when the password matches.

        Raises ``UnauthorizedError`` without saying which part was wrong.
        """
        row = await self._db.fetchrow(
            f"SELECT {_USER_COLUMNS}, password FROM users WHERE username = $1",
            username,
        )
        if row is not None and self._hasher.verify(password, row.pop("password")):
            return User.model_validate(row)
        raise UnauthorizedError("Invalid username/password")

    async def register(
        self,
        *,
        username: str,
        password: str,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        is_admin: bool = False,
    ) -> User:
        duplicate = await self._db.fetchval(
            "SELECT username FROM users WHERE username = $1", username
        )
        if duplicate:
            raise BadRequestError(f"Duplicate username: {username}")

        try:
            row = await self._db.fetchrow(
                f"""INSERT INTO users
                        (username, password, email, first_name, last_name, is_admin)
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING {_USER_COLUMNS}""",
                username,
                self._hasher.hash(password),
                email,
                first_name,
                last_name,
                is_admin,
            )
        except asyncpg.UniqueViolationError as exc:
            raise BadRequestError(f"Duplicate username: {username}") from exc
        logger.info("Registered user %s", username)
        return User.model_validate(row)

    async def find_all(self) -> list[User]:
        rows = await self._db.fetch(
            f"SELECT {_USER_COLUMNS} FROM users ORDER BY username"
        )
        return [User.model_validate(row) for row in rows]

    async def get(self, username: str) -> UserWithApplications:
        """Return the user along with a summary of their applications."""
        row = await self._db.fetchrow(
            f"SELECT {_USER_COLUMNS} FROM users WHERE username = $1", username
        )
        if row is None:
            raise NotFoundError(f"No user: {username}")

        row["applications"] = await self._db.fetch(
            """SELECT id, company, job_title, status
               FROM applications
               WHERE user_id = $1
               ORDER BY id""",
            row["id"],
        )
        return UserWithApplications.model_validate(row)

    async def update(self, username: str, data: Dict[str, Any]) -> User:
        """Partially update a user; ``data`` uses the API field names."""
        data = dict(data)
        if data.get("password"):
            data["password"] = self._hasher.hash(data["password"])

        set_clause, values = sql_for_partial_update(data, USER_UPDATE_COLUMNS)
        username_idx = len(values) + 1
        row = await self._db.fetchrow(
            f"""UPDATE users
                SET {set_clause}
                WHERE username = ${username_idx}
                RETURNING {_USER_COLUMNS}""",
            *values,
            username,
        )
        if row is None:
            raise NotFoundError(f"No user: {username}")
        return User.model_validate(row)

    async def remove(self, username: str) -> None:
        row = await self._db.fetchrow(
            "DELETE FROM users WHERE username = $1 RETURNING username", username
        )
        if row is None:
            raise NotFoundError(f"No user: {username}")

    async def apply_to_job(self, username: str, application_id: int) -> None:
        application = await self._db.fetchval(
            "SELECT id FROM applications WHERE id = $1", application_id
        )
        if application is None:
            raise NotFoundError(f"No application: {application_id}")

        user_id = await self._db.fetchval(
            "SELECT id FROM users WHERE username = $1", username
        )
        if user_id is None:
            raise NotFoundError(f"No user: {username}")

        await self._db.execute(
            """INSERT INTO user_applications (application_id, user_id)
               VALUES ($1, $2)
               ON CONFLICT DO NOTHING""",
            application_id,
            user_id,
        )


__all__ = ["USER_UPDATE_COLUMNS", "UserService"]
