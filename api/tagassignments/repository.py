"""
Tag assignment persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core import db
from core.errors import RecordNotFound

from . import queries
from .schemas import TagAssignmentCreate, TagAssignmentFilter

logger = logging.getLogger(__name__)


async def list_assignments(executor: db.Executor, filters: TagAssignmentFilter) -> list[dict[str, Any]]:
    return await db.fetch_all(executor, queries.compose_select(filters))


async def list_tags_for_booking(executor: db.Executor, booking_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(executor, queries.compose_tags_for_booking(booking_id))


async def create_assignment(executor: db.Executor, assignment: TagAssignmentCreate) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_insert(assignment))
    if row is None:
        raise RuntimeError("Failed to insert tag assignment.")
    return row


async def create_assignments(
    executor: db.Executor,
    booking_id: int,
    tag_ids: Sequence[int],
) -> list[dict[str, Any]]:
    """
    Assign every tag in `tag_ids` to the booking inside a single transaction.

    Any failing tuple rolls the whole batch back; the storage error is re-raised.
    """
    statement = queries.compose_insert_many(booking_id, tag_ids)
    if statement is None:
        return []

    try:
        async with db.transaction(executor) as conn:
            rows = await db.fetch_all(conn, statement)
    except Exception:
        logger.exception("tag_assignment_batch_failed booking_id=%s tag_ids=%s", booking_id, list(tag_ids))
        raise

    logger.info("tag_assignment_batch booking_id=%s assigned=%s", booking_id, len(rows))
    return rows


async def delete_assignment(executor: db.Executor, booking_id: int, tag_id: int) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_delete(booking_id, tag_id))
    if row is None:
        raise RecordNotFound("TagAssignment", booking_id=booking_id, tag_id=tag_id)
    return row
