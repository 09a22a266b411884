"""Schemas for the Google Calendar events proxy."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from jobjotter.schemas.base import RequestModel


class EventTime(RequestModel):
    """Either an all-day ``date`` or a timed ``dateTime``."""

    date: Optional[dt.date] = None
    date_time: Optional[dt.datetime] = None
    time_zone: Optional[str] = None

    @model_validator(mode="after")
    def _one_kind_of_time(self) -> "EventTime":
        if (self.date is None) == (self.date_time is None):
            raise ValueError("Provide exactly one of date or dateTime.")
        return self

    @property
    def is_all_day(self) -> bool:
        return self.date is not None


class CalendarEventRequest(RequestModel):
    summary: Optional[str] = Field(None, max_length=1024)
    location: Optional[str] = None
    description: Optional[str] = None
    start: EventTime
    end: EventTime

    def has_consistent_times(self) -> bool:
        """Start and end must both be all-day or both be timed."""
        return self.start.is_all_day == self.end.is_all_day

    def to_event(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CalendarEventUpdateRequest(RequestModel):
    summary: Optional[str] = Field(None, max_length=1024)
    location: Optional[str] = None
    description: Optional[str] = None
    start: Optional[EventTime] = None
    end: Optional[EventTime] = None

    def has_consistent_times(self) -> bool:
        if self.start is None or self.end is None:
            return True
        return self.start.is_all_day == self.end.is_all_day

    def to_changes(self) -> Dict[str, Any]:
        return self.model_dump(
            by_alias=True, exclude_unset=True, exclude_none=True, mode="json"
        )


__all__ = ["CalendarEventRequest", "CalendarEventUpdateRequest", "EventTime"]
