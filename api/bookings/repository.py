"""
Booking persistence (raw SQL).

Every function takes the executor explicitly (pool or connection) and runs
statements composed in `queries`.
"""

from __future__ import annotations

import logging
from typing import Any

from core import db
from core.errors import BookingAlreadyFinished, RecordNotFound

from . import queries
from .schemas import BookingCreate, BookingFilter, BookingUpdate

logger = logging.getLogger(__name__)


async def list_bookings(executor: db.Executor, filters: BookingFilter) -> list[dict[str, Any]]:
    return await db.fetch_all(executor, queries.compose_select(filters))


async def get_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_get(booking_id))
    if row is None:
        raise RecordNotFound("Booking", id=booking_id)
    return row


async def create_booking(executor: db.Executor, booking: BookingCreate) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_insert(booking))
    if row is None:
        raise RuntimeError("Failed to insert booking.")
    logger.info("booking_created id=%s start=%s", row["id"], row["start"])
    return row


async def update_booking(
    executor: db.Executor,
    booking_id: int,
    changes: BookingUpdate,
) -> dict[str, Any] | None:
    """
    Apply the supplied fields only.

    Returns None without contacting storage when nothing was supplied.
    """
    statement = queries.compose_update(booking_id, changes)
    if statement is None:
        return None

    row = await db.fetch_one(executor, statement)
    if row is None:
        raise RecordNotFound("Booking", id=booking_id)
    return row


async def finish_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_finish(booking_id))
    if row is not None:
        logger.info("booking_finished id=%s end=%s", row["id"], row["end"])
        return row

    # Nothing matched: tell a missing booking from a finished one.
    existing = await get_booking(executor, booking_id)
    raise BookingAlreadyFinished(booking_id, existing["end"])


async def delete_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    """
    Delete a booking together with its tag assignments, in one transaction.
    """
    async with db.transaction(executor) as conn:
        await db.execute(conn, queries.compose_delete_assignments(booking_id))
        row = await db.fetch_one(conn, queries.compose_delete(booking_id))
        if row is None:
            # Raising inside the block rolls the assignment delete back too.
            raise RecordNotFound("Booking", id=booking_id)
    logger.info("booking_deleted id=%s", booking_id)
    return row
