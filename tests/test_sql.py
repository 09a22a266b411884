import pytest

from jobjotter.core.errors import EmptyUpdateError
from jobjotter.services.applications import APPLICATION_UPDATE_COLUMNS
from jobjotter.utils.sql import sql_for_partial_update


def test_unmapped_names_pass_through() -> None:
    set_clause, values = sql_for_partial_update({"status": "x"})

    assert set_clause == "status = $1"
    assert values == ["x"]


def test_mapped_names_resolve_to_columns() -> None:
    set_clause, values = sql_for_partial_update(
        {"jobTitle": "Eng"}, {"jobTitle": "job_title"}
    )

    assert set_clause == "job_title = $1"
    assert values == ["Eng"]


def test_placeholders_follow_key_order() -> None:
    data = {"company": "Acme", "jobTitle": "Eng", "status": "applied", "notes": None}

    set_clause, values = sql_for_partial_update(data, APPLICATION_UPDATE_COLUMNS)

    assert set_clause == "company = $1, job_title = $2, status = $3, notes = $4"
    assert values == ["Acme", "Eng", "applied", None]
    assert set_clause.count("$") == len(values) == len(data)


def test_start_offset_shifts_placeholders() -> None:
    set_clause, values = sql_for_partial_update({"a": 1, "b": 2}, start=3)

    assert set_clause == "a = $3, b = $4"
    assert values == [1, 2]


def test_empty_update_rejected() -> None:
    with pytest.raises(EmptyUpdateError) as excinfo:
        sql_for_partial_update({}, APPLICATION_UPDATE_COLUMNS)

    assert excinfo.value.status_code == 400


def test_input_not_mutated() -> None:
    data = {"firstName": "Ada"}

    sql_for_partial_update(data, {"firstName": "first_name"})

    assert data == {"firstName": "Ada"}
