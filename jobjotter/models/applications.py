"""Job application, interview and reminder records."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from jobjotter.models.base import CamelModel


class ApplicationSummary(CamelModel):
    id: int
    company: str
    job_title: str
    status: str


class Application(ApplicationSummary):
    user_id: Optional[int] = None
    date_applied: Optional[dt.date] = None
    notes: Optional[str] = None


class Interview(CamelModel):
    id: int
    application_id: Optional[int] = None
    date: dt.date
    time: dt.time
    location: str
    notes: Optional[str] = None
    company: Optional[str] = None


class Reminder(CamelModel):
    id: int
    application_id: Optional[int] = None
    user_id: Optional[int] = None
    reminder_type: str
    date: dt.date
    description: str
    company: Optional[str] = None


class ApplicationDetail(Application):
    interviews: list[Interview] = []
    reminders: list[Reminder] = []


__all__ = [
    "Application",
    "ApplicationDetail",
    "ApplicationSummary",
    "Interview",
    "Reminder",
]
