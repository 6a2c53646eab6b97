"""
Booking statement composition.

Turns the optional fields of a filter/create/update model into a single
parameterized statement. Nothing in here touches the database.

Read path, in order:
- project the booking columns
- join tagassignment + tag only when tag names were supplied
- `WHERE TRUE`, then one ` AND ...` per supplied field:
  id, start_min, start_max, end_min, end_max, description_contains, tags
"""

from __future__ import annotations

import time

from core.projections import BOOKING_COLUMNS, BOOKING_TABLE, TAG_ASSIGNMENT_TABLE, TAG_TABLE
from core.query import QueryBuilder, Statement, like_contains, select_list

from .schemas import BookingCreate, BookingFilter, BookingUpdate

BOOKING_ALIAS = "b"

_TAG_JOIN = (
    f" {BOOKING_ALIAS}"
    f" INNER JOIN {TAG_ASSIGNMENT_TABLE} ta ON {BOOKING_ALIAS}.id = ta.booking_id"
    f" INNER JOIN {TAG_TABLE} t ON t.id = ta.tag_id"
)


def now_epoch_ms() -> int:
    return int(time.time() * 1000)


def _returning() -> str:
    return f" RETURNING {select_list(BOOKING_COLUMNS)}"


def compose_select(filters: BookingFilter) -> Statement:
    # Only the join makes `id` ambiguous, so decide it before any predicate.
    joined = filters.has_tags
    qb = QueryBuilder()

    if joined:
        qb.push(f"SELECT DISTINCT {select_list(BOOKING_COLUMNS, alias=BOOKING_ALIAS)} FROM {BOOKING_TABLE}")
        qb.push(_TAG_JOIN)
    else:
        qb.push(f"SELECT {select_list(BOOKING_COLUMNS)} FROM {BOOKING_TABLE}")

    qb.push(" WHERE TRUE")

    if filters.id is not None:
        qb.push(" AND ")
        if joined:
            qb.push(f"{BOOKING_ALIAS}.")
        qb.push("id = ").push_bind(filters.id)

    if filters.start_min is not None:
        qb.push(" AND startdate > ").push_bind(filters.start_min)

    if filters.start_max is not None:
        qb.push(" AND startdate < ").push_bind(filters.start_max)

    if filters.end_min is not None:
        qb.push(" AND enddate > ").push_bind(filters.end_min)

    if filters.end_max is not None:
        qb.push(" AND enddate < ").push_bind(filters.end_max)

    if filters.description_contains is not None:
        qb.push(" AND description LIKE ").push_bind(like_contains(filters.description_contains))

    if joined:
        qb.push(" AND t.name IN (").push_bind_list(filters.tags or [], separator=",").push(")")

    return qb.build()


def compose_get(booking_id: int) -> Statement:
    return compose_select(BookingFilter(id=booking_id))


def compose_insert(booking: BookingCreate, *, now_ms: int | None = None) -> Statement:
    start = booking.start
    if start is None:
        start = now_ms if now_ms is not None else now_epoch_ms()

    # Column names and bound values are pushed in lockstep.
    columns: list[str] = ["startdate"]
    values: list[object] = [start]

    if booking.end is not None:
        columns.append("enddate")
        values.append(booking.end)

    if booking.description is not None:
        columns.append("description")
        values.append(booking.description)

    qb = QueryBuilder(f"INSERT INTO {BOOKING_TABLE} (")
    qb.push(", ".join(columns))
    qb.push(") VALUES (").push_bind_list(values).push(")")
    qb.push(_returning())
    return qb.build()


def compose_update(booking_id: int, changes: BookingUpdate) -> Statement | None:
    """
    Return None when no field was supplied; callers must treat that as a no-op.
    """
    if changes.is_empty():
        return None

    qb = QueryBuilder(f"UPDATE {BOOKING_TABLE} SET ")
    comma_necessary = False

    if changes.start is not None:
        qb.push("startdate = ").push_bind(changes.start)
        comma_necessary = True

    if changes.end is not None:
        if comma_necessary:
            qb.push(", ")
        qb.push("enddate = ").push_bind(changes.end)
        comma_necessary = True

    if changes.description is not None:
        if comma_necessary:
            qb.push(", ")
        qb.push("description = ").push_bind(changes.description)

    qb.push(" WHERE id = ").push_bind(booking_id)
    qb.push(_returning())
    return qb.build()


def compose_finish(booking_id: int, *, now_ms: int | None = None) -> Statement:
    """
    Set `end` on a running booking, never earlier than its start.

    Matches no row when the booking is missing or already finished.
    """
    end = now_ms if now_ms is not None else now_epoch_ms()
    qb = QueryBuilder(f"UPDATE {BOOKING_TABLE} SET enddate = GREATEST(")
    qb.push_bind(end).push(", startdate)")
    qb.push(" WHERE id = ").push_bind(booking_id)
    qb.push(" AND enddate IS NULL")
    qb.push(_returning())
    return qb.build()


def compose_delete_assignments(booking_id: int) -> Statement:
    return QueryBuilder(f"DELETE FROM {TAG_ASSIGNMENT_TABLE} WHERE booking_id = ").push_bind(booking_id).build()


def compose_delete(booking_id: int) -> Statement:
    qb = QueryBuilder(f"DELETE FROM {BOOKING_TABLE} WHERE id = ").push_bind(booking_id)
    qb.push(_returning())
    return qb.build()
