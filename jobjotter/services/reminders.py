"""Data access for reminders."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from jobjotter.clients.postgres import Database
from jobjotter.core.errors import NotFoundError
from jobjotter.models.applications import Reminder
from jobjotter.utils.sql import sql_for_partial_update

_REMINDER_COLUMNS = "id, application_id, user_id, reminder_type, date, description"

_REMINDER_WITH_COMPANY = """
    SELECT r.id, r.application_id, r.user_id, r.reminder_type, r.date,
           r.description, a.company
    FROM reminders r
    JOIN applications a ON r.application_id = a.id
"""

REMINDER_UPDATE_COLUMNS = {
    "reminderType": "reminder_type",
    "date": "date",
    "description": "description",
}


class ReminderService:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def add(
        self,
        *,
        application_id: int,
        user_id: int,
        reminder_type: str,
        date: dt.date,
        description: str,
    ) -> Reminder:
        row = await self._db.fetchrow(
            f"""INSERT INTO reminders
                    (application_id, user_id, reminder_type, date, description)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_REMINDER_COLUMNS}""",
            application_id,
            user_id,
            reminder_type,
            date,
            description,
        )
        return Reminder.model_validate(row)

    async def find_all(self, user_id: int) -> list[Reminder]:
        rows = await self._db.fetch(
            _REMINDER_WITH_COMPANY + " WHERE a.user_id = $1 ORDER BY r.date, r.id",
            user_id,
        )
        return [Reminder.model_validate(row) for row in rows]

    async def get(self, reminder_id: int) -> Reminder:
        row = await self._db.fetchrow(
            _REMINDER_WITH_COMPANY + " WHERE r.id = $1", reminder_id
        )
        if row is None:
            raise NotFoundError(f"No reminder with ID: {reminder_id}")
        return Reminder.model_validate(row)

    async def find_by_application(self, application_id: int) -> list[Reminder]:
        rows = await self._db.fetch(
            f"""SELECT {_REMINDER_COLUMNS}
                FROM reminders
                WHERE application_id = $1
                ORDER BY date, id""",
            application_id,
        )
        return [Reminder.model_validate(row) for row in rows]

    async def update(self, reminder_id: int, data: Dict[str, Any]) -> Reminder:
        set_clause, values = sql_for_partial_update(data, REMINDER_UPDATE_COLUMNS)
        id_idx = len(values) + 1
        row = await self._db.fetchrow(
            f"""UPDATE reminders
                SET {set_clause}
                WHERE id = ${id_idx}
                RETURNING {_REMINDER_COLUMNS}""",
            *values,
            reminder_id,
        )
        if row is None:
            raise NotFoundError(f"No reminder: {reminder_id}")
        return Reminder.model_validate(row)

    async def remove(self, reminder_id: int) -> None:
        row = await self._db.fetchrow(
            "DELETE FROM reminders WHERE id = $1 RETURNING id", reminder_id
        )
        if row is None:
            raise NotFoundError(f"No reminder: {reminder_id}")


__all__ = ["REMINDER_UPDATE_COLUMNS", "ReminderService"]
