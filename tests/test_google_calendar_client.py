from __future__ import annotations

from typing import Any

import httplib2
import pytest
from googleapiclient.errors import HttpError

from jobjotter.clients.google_calendar import GoogleCalendarClient
from jobjotter.core.errors import CalendarAPIError


class _Request:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self._result = result
        self._error = error

    def execute(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._result


class FakeEventsResource:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict]] = []
        self._error = error

    def list(self, **kwargs: Any) -> _Request:
        self.calls.append(("list", kwargs))
        return _Request({"items": [{"id": "evt-1"}]}, self._error)

    def insert(self, **kwargs: Any) -> _Request:
        self.calls.append(("insert", kwargs))
        return _Request({"id": "evt-2", **kwargs["body"]}, self._error)

    def delete(self, **kwargs: Any) -> _Request:
        self.calls.append(("delete", kwargs))
        return _Request(None, self._error)


@pytest.fixture()
def resource(monkeypatch: pytest.MonkeyPatch) -> FakeEventsResource:
    fake = FakeEventsResource()
    monkeypatch.setattr(GoogleCalendarClient, "_events", staticmethod(lambda credentials: fake))
    return fake


@pytest.mark.asyncio
async def test_list_events_queries_primary_calendar_in_start_order(resource) -> None:
    events = await GoogleCalendarClient(max_results=10).list_events(object())

    assert events == [{"id": "evt-1"}]
    action, kwargs = resource.calls[0]
    assert action == "list"
    assert kwargs["calendarId"] == "primary"
    assert kwargs["singleEvents"] is True
    assert kwargs["orderBy"] == "startTime"
    assert kwargs["maxResults"] == 10
    assert "timeMin" in kwargs


@pytest.mark.asyncio
async def test_insert_and_delete_event(resource) -> None:
    client = GoogleCalendarClient()

    created = await client.insert_event(object(), {"summary": "Onsite"})
    await client.delete_event(object(), "evt-2")

    assert created == {"id": "evt-2", "summary": "Onsite"}
    assert resource.calls[1] == ("delete", {"calendarId": "primary", "eventId": "evt-2"})


@pytest.mark.asyncio
async def test_http_errors_become_calendar_api_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    error = HttpError(httplib2.Response({"status": 403}), b'{"error": {"code": 403, "message": "forbidden"}}')
    fake = FakeEventsResource(error=error)
    monkeypatch.setattr(GoogleCalendarClient, "_events", staticmethod(lambda credentials: fake))

    with pytest.raises(CalendarAPIError) as excinfo:
        await GoogleCalendarClient().list_events(object())

    assert excinfo.value.status_code == 500
