"""
Tag persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any

from core import db
from core.errors import RecordNotFound

from . import queries
from .schemas import TagCreate, TagFilter, TagUpdate

logger = logging.getLogger(__name__)


async def list_tags(executor: db.Executor, filters: TagFilter) -> list[dict[str, Any]]:
    return await db.fetch_all(executor, queries.compose_select(filters))


async def get_tag(executor: db.Executor, tag_id: int) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_get(tag_id))
    if row is None:
        raise RecordNotFound("Tag", id=tag_id)
    return row


async def create_tag(executor: db.Executor, tag: TagCreate) -> dict[str, Any]:
    row = await db.fetch_one(executor, queries.compose_insert(tag))
    if row is None:
        raise RuntimeError("Failed to insert tag.")
    logger.info("tag_created id=%s name=%s", row["id"], row["name"])
    return row


async def update_tag(executor: db.Executor, tag_id: int, changes: TagUpdate) -> dict[str, Any] | None:
    statement = queries.compose_update(tag_id, changes)
    if statement is None:
        return None

    row = await db.fetch_one(executor, statement)
    if row is None:
        raise RecordNotFound("Tag", id=tag_id)
    return row


async def delete_tag(executor: db.Executor, tag_id: int) -> dict[str, Any]:
    """
    Delete a tag and every assignment that points at it, in one transaction.
    """
    async with db.transaction(executor) as conn:
        await db.execute(conn, queries.compose_delete_assignments(tag_id))
        row = await db.fetch_one(conn, queries.compose_delete(tag_id))
        if row is None:
            raise RecordNotFound("Tag", id=tag_id)
    logger.info("tag_deleted id=%s", tag_id)
    return row
