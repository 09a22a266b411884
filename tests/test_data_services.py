from __future__ import annotations

import datetime as dt

import pytest

try:
    from .fakes import FakeDatabase
except ImportError:  # pragma: no cover - rootdir import mode
    from fakes import FakeDatabase  # type: ignore

from jobjotter.core.errors import (
    BadRequestError,
    EmptyUpdateError,
    NotFoundError,
    UnauthorizedError,
)
from jobjotter.services import (
    ApplicationService,
    InterviewService,
    PasswordHasher,
    ReminderService,
    UserService,
)

APPLICATION_ROW = {
    "id": 10,
    "user_id": 1,
    "company": "Acme",
    "job_title": "Engineer",
    "status": "pending",
    "date_applied": dt.date(2024, 1, 2),
    "notes": None,
}


@pytest.mark.asyncio
async def test_application_update_builds_partial_statement() -> None:
    db = FakeDatabase()
    db.queued.append({**APPLICATION_ROW, "job_title": "Staff Engineer", "status": "offer"})

    application = await ApplicationService(db).update(
        10, {"jobTitle": "Staff Engineer", "status": "offer"}
    )

    assert db.last_query == (
        "UPDATE applications SET job_title = $1, status = $2 WHERE id = $3 "
        "RETURNING id, user_id, company, job_title, status, date_applied, notes"
    )
    assert db.last_args == ("Staff Engineer", "offer", 10)
    assert application.job_title == "Staff Engineer"


@pytest.mark.asyncio
async def test_application_update_missing_row_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        await ApplicationService(FakeDatabase()).update(99, {"status": "offer"})


@pytest.mark.asyncio
async def test_application_update_without_fields_touches_nothing() -> None:
    db = FakeDatabase()

    with pytest.raises(EmptyUpdateError):
        await ApplicationService(db).update(10, {})

    assert db.calls == []


@pytest.mark.asyncio
async def test_application_find_all_filters_by_user() -> None:
    db = FakeDatabase()
    db.queued.append([APPLICATION_ROW])

    applications = await ApplicationService(db).find_all(1)

    assert db.last_query.endswith("WHERE user_id = $1 ORDER BY date_applied DESC, id")
    assert db.last_args == (1,)
    assert [a.company for a in applications] == ["Acme"]


@pytest.mark.asyncio
async def test_interview_and_reminder_updates_map_columns() -> None:
    db = FakeDatabase()
    db.queued.append(
        {
            "id": 4,
            "application_id": 10,
            "date": dt.date(2024, 2, 1),
            "time": dt.time(9, 30),
            "location": "Remote",
            "notes": "bring portfolio",
        }
    )
    await InterviewService(db).update(4, {"location": "Remote", "notes": "bring portfolio"})
    assert "SET location = $1, notes = $2 WHERE id = $3" in db.last_query
    assert db.last_args == ("Remote", "bring portfolio", 4)

    db.queued.append(
        {
            "id": 6,
            "application_id": 10,
            "user_id": 1,
            "reminder_type": "follow-up",
            "date": dt.date(2024, 2, 3),
            "description": "Email recruiter",
        }
    )
    await ReminderService(db).update(6, {"reminderType": "follow-up"})
    assert "SET reminder_type = $1 WHERE id = $2" in db.last_query
    assert db.last_args == ("follow-up", 6)


@pytest.mark.asyncio
async def test_interview_owner_of_unknown_interview() -> None:
    with pytest.raises(NotFoundError):
        await InterviewService(FakeDatabase()).owner_of(123)


@pytest.mark.asyncio
async def test_user_update_rehashes_password() -> None:
    db = FakeDatabase()
    db.queued.append({"id": 1, "username": "ada", "first_name": "Ada", "is_admin": False})
    hasher = PasswordHasher(work_factor=4)

    await UserService(db, hasher).update("ada", {"firstName": "Ada", "password": "new-pass"})

    assert "SET first_name = $1, password = $2 WHERE username = $3" in db.last_query
    first_name, hashed, username = db.last_args
    assert (first_name, username) == ("Ada", "ada")
    assert hashed != "new-pass" and hasher.verify("new-pass", hashed)


@pytest.mark.asyncio
async def test_authenticate_checks_password() -> None:
    hasher = PasswordHasher(work_factor=4)
    row = {"id": 1, "username": "ada", "is_admin": False, "password": hasher.hash("secret")}
    service = UserService(FakeDatabase(lambda query, args: dict(row)), hasher)

    user = await service.authenticate("ada", "secret")
    assert user.username == "ada"

    with pytest.raises(UnauthorizedError) as excinfo:
        await service.authenticate("ada", "wrong")
    assert excinfo.value.message == "Invalid username/password"


@pytest.mark.asyncio
async def test_register_rejects_duplicate_username() -> None:
    db = FakeDatabase()
    db.queued.append("ada")

    with pytest.raises(BadRequestError):
        await UserService(db, PasswordHasher(work_factor=4)).register(
            username="ada", password="password"
        )

    assert len(db.calls) == 1


@pytest.mark.asyncio
async def test_get_user_includes_application_summaries() -> None:
    db = FakeDatabase()
    db.queued.append({"id": 1, "username": "ada", "is_admin": False})
    db.queued.append([{"id": 10, "company": "Acme", "job_title": "Engineer", "status": "pending"}])

    user = await UserService(db, PasswordHasher(work_factor=4)).get("ada")

    assert [a.company for a in user.applications] == ["Acme"]
    assert db.last_args == (1,)
