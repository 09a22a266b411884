"""Data access for interviews attached to applications."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from jobjotter.clients.postgres import Database
from jobjotter.core.errors import NotFoundError
from jobjotter.models.applications import Interview
from jobjotter.utils.sql import sql_for_partial_update

_INTERVIEW_COLUMNS = "id, application_id, date, time, location, notes"

INTERVIEW_UPDATE_COLUMNS = {
    "date": "date",
    "time": "time",
    "location": "location",
    "notes": "notes",
}


class InterviewService:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def add(
        self,
        *,
        application_id: int,
        date: dt.date,
        time: dt.time,
        location: str,
        notes: Optional[str] = None,
    ) -> Interview:
        row = await self._db.fetchrow(
            f"""INSERT INTO interviews (application_id, date, time, location, notes)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_INTERVIEW_COLUMNS}""",
            application_id,
            date,
            time,
            location,
            notes,
        )
        return Interview.model_validate(row)

    async def get(self, interview_id: int) -> Interview:
        """Interview with the company of its application, for display."""
        row = await self._db.fetchrow(
            """SELECT i.id, i.application_id, i.date, i.time, i.location, i.notes,
                      a.company
               FROM interviews i
               JOIN applications a ON i.application_id = a.id
               WHERE i.id = $1""",
            interview_id,
        )
        if row is None:
            raise NotFoundError(f"No interview found with id: {interview_id}")
        return Interview.model_validate(row)

    async def owner_of(self, interview_id: int) -> int:
        """User id owning the interview's application."""
        user_id = await self._db.fetchval(
            """SELECT a.user_id
               FROM interviews i
               JOIN applications a ON i.application_id = a.id
               WHERE i.id = $1""",
            interview_id,
        )
        if user_id is None:
            raise NotFoundError(f"No interview found with id: {interview_id}")
        return user_id

    async def find_all(self, user_id: int) -> list[Interview]:
        rows = await self._db.fetch(
            """SELECT i.id, i.application_id, i.date, i.time, i.location, i.notes,
                      a.company
               FROM interviews i
               JOIN applications a ON i.application_id = a.id
               WHERE a.user_id = $1
               ORDER BY i.date, i.time""",
            user_id,
        )
        return [Interview.model_validate(row) for row in rows]

    async def find_by_application(self, application_id: int) -> list[Interview]:
        rows = await self._db.fetch(
            f"""SELECT {_INTERVIEW_COLUMNS}
                FROM interviews
                WHERE application_id = $1
                ORDER BY date, time""",
            application_id,
        )
        return [Interview.model_validate(row) for row in rows]

    async def update(self, interview_id: int, data: Dict[str, Any]) -> Interview:
        set_clause, values = sql_for_partial_update(data, INTERVIEW_UPDATE_COLUMNS)
        id_idx = len(values) + 1
        row = await self._db.fetchrow(
            f"""UPDATE interviews
                SET {set_clause}
                WHERE id = ${id_idx}
                RETURNING {_INTERVIEW_COLUMNS}""",
            *values,
            interview_id,
        )
        if row is None:
            raise NotFoundError(f"No interview: {interview_id}")
        return Interview.model_validate(row)

    async def remove(self, interview_id: int) -> None:
        row = await self._db.fetchrow(
            "DELETE FROM interviews WHERE id = $1 RETURNING id", interview_id
        )
        if row is None:
            raise NotFoundError(f"No interview: {interview_id}")


__all__ = ["INTERVIEW_UPDATE_COLUMNS", "InterviewService"]
