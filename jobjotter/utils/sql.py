"""SQL helpers for building parameterized partial updates."""

from __future__ import annotations

from typing import Any, Mapping

from jobjotter.core.errors import EmptyUpdateError


def sql_for_partial_update(
    data: Mapping[str, Any],
    column_map: Mapping[str, str] | None = None,
    *,
    start: int = 1,
) -> tuple[str, list[Any]]:
    """
    Build the ``SET`` clause and ordered values for a partial ``UPDATE``.

    ``data`` maps logical field names to new values; ``column_map`` maps
    logical names to column names, falling back to the field name itself.
    Placeholders are numbered ``$start, $start + 1, ...`` in the same order
    values are returned, so callers can append e.g. ``WHERE id = $N`` with
    ``N = start + len(values)``.

    Column names are interpolated into the clause. ``column_map`` and the keys
    of ``data`` must come from a closed set defined in code, never from raw
    user input.

        >>> sql_for_partial_update({"jobTitle": "Eng", "status": "x"},
        ...                        {"jobTitle": "job_title"})
        ('job_title = $1, status = $2', ['Eng', 'x'])
    """
    if not data:
        raise EmptyUpdateError()

    column_map = column_map or {}
    assignments = []
    values: list[Any] = []
    for index, (field, value) in enumerate(data.items(), start=start):
        column = column_map.get(field, field)
        assignments.append(f"{column} = ${index}")
        values.append(value)

    return ", ".join(assignments), values


__all__ = ["sql_for_partial_update"]
