"""Schemas for applications, interviews and reminders."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import Field

from jobjotter.schemas.base import RequestModel


class PartialUpdateRequest(RequestModel):
    def changes(self) -> Dict[str, Any]:
        """Only the fields the client sent, keyed by their API names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ApplicationCreateRequest(RequestModel):
    company: str = Field(..., min_length=1, max_length=100)
    job_title: str = Field(..., min_length=1, max_length=100)
    status: str = Field("pending", min_length=1, max_length=25)
    date_applied: dt.date
    notes: Optional[str] = None


class ApplicationUpdateRequest(PartialUpdateRequest):
    company: Optional[str] = Field(None, min_length=1, max_length=100)
    job_title: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = Field(None, min_length=1, max_length=25)
    date_applied: Optional[dt.date] = None
    notes: Optional[str] = None


class InterviewCreateRequest(RequestModel):
    application_id: int
    date: dt.date
    time: dt.time
    location: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = None


class InterviewUpdateRequest(PartialUpdateRequest):
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    notes: Optional[str] = None


class ReminderCreateRequest(RequestModel):
    application_id: int
    reminder_type: str = Field(..., min_length=1, max_length=50)
    date: dt.date
    description: str = Field(..., min_length=1)


class ReminderUpdateRequest(PartialUpdateRequest):
    reminder_type: Optional[str] = Field(None, min_length=1, max_length=50)
    date: Optional[dt.date] = None
    description: Optional[str] = Field(None, min_length=1)


__all__ = [
    "ApplicationCreateRequest",
    "ApplicationUpdateRequest",
    "InterviewCreateRequest",
    "InterviewUpdateRequest",
    "PartialUpdateRequest",
    "ReminderCreateRequest",
    "ReminderUpdateRequest",
]
