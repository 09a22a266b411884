"""Data access for job applications."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from jobjotter.clients.postgres import Database
from jobjotter.core.errors import NotFoundError
from jobjotter.models.applications import Application
from jobjotter.utils.sql import sql_for_partial_update

_APPLICATION_COLUMNS = "id, user_id, company, job_title, status, date_applied, notes"

APPLICATION_UPDATE_COLUMNS = {
    "company": "company",
    "jobTitle": "job_title",
    "status": "status",
    "dateApplied": "date_applied",
    "notes": "notes",
}


class ApplicationService:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def add(
        self,
        *,
        user_id: int,
        company: str,
        job_title: str,
        date_applied: dt.date,
        status: str = "pending",
        notes: Optional[str] = None,
    ) -> Application:
        row = await self._db.fetchrow(
            f"""INSERT INTO applications
                    (user_id, company, job_title, status, date_applied, notes)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {_APPLICATION_COLUMNS}""",
            user_id,
            company,
            job_title,
            status,
            date_applied,
            notes,
        )
        return Application.model_validate(row)

    async def find_all(self, user_id: Optional[int] = None) -> list[Application]:
        """All applications, or one user's, newest first."""
        query = f"SELECT {_APPLICATION_COLUMNS} FROM applications"
        args: list[Any] = []
        if user_id is not None:
            query += " WHERE user_id = $1"
            args.append(user_id)
        query += " ORDER BY date_applied DESC, id"

        rows = await self._db.fetch(query, *args)
        return [Application.model_validate(row) for row in rows]

    async def find_by_user(self, user_id: int) -> list[Application]:
        return await self.find_all(user_id)

    async def get(self, application_id: int) -> Application:
        row = await self._db.fetchrow(
            f"SELECT {_APPLICATION_COLUMNS} FROM applications WHERE id = $1",
            application_id,
        )
        if row is None:
            raise NotFoundError(f"No application: {application_id}")
        return Application.model_validate(row)

    async def update(self, application_id: int, data: Dict[str, Any]) -> Application:
        set_clause, values = sql_for_partial_update(data, APPLICATION_UPDATE_COLUMNS)
        id_idx = len(values) + 1
        row = await self._db.fetchrow(
            f"""UPDATE applications
                SET {set_clause}
                WHERE id = ${id_idx}
                RETURNING {_APPLICATION_COLUMNS}""",
            *values,
            application_id,
        )
        if row is None:
            raise NotFoundError(f"No application: {application_id}")
        return Application.model_validate(row)

    async def remove(self, application_id: int) -> None:
        row = await self._db.fetchrow(
            "DELETE FROM applications WHERE id = $1 RETURNING id", application_id
        )
        if row is None:
            raise NotFoundError(f"No application: {application_id}")


__all__ = ["APPLICATION_UPDATE_COLUMNS", "ApplicationService"]
