"""Google Calendar client wrapper for the events proxy."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, TypeVar

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from jobjotter.core.errors import CalendarAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRIMARY_CALENDAR = "primary"


class GoogleCalendarClient:
    """List, create, patch and delete events on a user's primary calendar."""

    def __init__(
        self,
        *,
        calendar_id: str = PRIMARY_CALENDAR,
        lookback_days: int = 30,
        max_results: int = 50,
    ) -> None:
        self._calendar_id = calendar_id
        self._lookback = timedelta(days=lookback_days)
        self._max_results = max_results

    @staticmethod
    def _events(credentials: Credentials) -> Any:
        service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        return service.events()

    async def _call(self, action: str, func: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(func)
        except HttpError as exc:
            logger.error("Calendar %s failed with status %s", action, exc.status_code)
            raise CalendarAPIError() from exc

    async def list_events(self, credentials: Credentials) -> List[Dict[str, Any]]:
        """Return events starting from one lookback window ago, oldest first."""
        time_min = (datetime.now(timezone.utc) - self._lookback).isoformat()

        def _execute_list() -> List[Dict[str, Any]]:
            response = (
                self._events(credentials)
                .list(
                    calendarId=self._calendar_id,
                    timeMin=time_min,
                    maxResults=self._max_results,
                    singleEvents=True,
                    orderBy="startTime",
                )
                .execute()
            )
            return response.get("items", [])

        events = await self._call("list", _execute_list)
        logger.debug("Fetched %s calendar events", len(events))
        return events

    async def insert_event(
        self, credentials: Credentials, event: Dict[str, Any]
    ) -> Dict[str, Any]:
        def _execute_insert() -> Dict[str, Any]:
            return (
                self._events(credentials)
                .insert(calendarId=self._calendar_id, body=event)
                .execute()
            )

        created = await self._call("insert", _execute_insert)
        logger.info("Created calendar event %s", created.get("id"))
        return created

    async def patch_event(
        self, credentials: Credentials, event_id: str, changes: Dict[str, Any]
    ) -> Dict[str, Any]:
        def _execute_patch() -> Dict[str, Any]:
            return (
                self._events(credentials)
                .patch(calendarId=self._calendar_id, eventId=event_id, body=changes)
                .execute()
            )

        return await self._call("patch", _execute_patch)

    async def delete_event(self, credentials: Credentials, event_id: str) -> None:
        def _execute_delete() -> None:
            self._events(credentials).delete(
                calendarId=self._calendar_id, eventId=event_id
            ).execute()

        await self._call("delete", _execute_delete)
        logger.info("Deleted calendar event %s", event_id)


__all__ = ["GoogleCalendarClient"]
