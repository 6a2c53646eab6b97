"""
Tag assignment business logic.

Storage errors from asyncpg reach this layer unchanged; the two that a
client can cause are mapped to HTTP:
- foreign key violation (unknown booking or tag) -> 404
- unique violation (pair already assigned) -> 409
"""

from __future__ import annotations

from typing import Any, Awaitable, TypeVar

import asyncpg
from fastapi import HTTPException, status

from bookings import repository as booking_repository
from core import db
from core.errors import RecordNotFound

from . import repository
from .schemas import TagAssignmentBatch, TagAssignmentCreate, TagAssignmentFilter

T = TypeVar("T")


async def _mapped(call: Awaitable[T]) -> T:
    try:
        return await call
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking or tag not found.",
        ) from exc
    except asyncpg.UniqueViolationError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Tag is already assigned to this booking.",
        ) from exc
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


async def list_assignments(executor: db.Executor, filters: TagAssignmentFilter) -> list[dict[str, Any]]:
    return await repository.list_assignments(executor, filters)


async def list_tags_for_booking(executor: db.Executor, booking_id: int) -> list[dict[str, Any]]:
    # 404 for an unknown booking rather than an empty tag list.
    await _mapped(booking_repository.get_booking(executor, booking_id))
    return await repository.list_tags_for_booking(executor, booking_id)


async def create_assignment(executor: db.Executor, payload: TagAssignmentCreate) -> dict[str, Any]:
    return await _mapped(repository.create_assignment(executor, payload))


async def assign_tags(
    executor: db.Executor,
    booking_id: int,
    payload: TagAssignmentBatch,
) -> list[dict[str, Any]]:
    return await _mapped(repository.create_assignments(executor, booking_id, payload.tag_ids))


async def delete_assignment(executor: db.Executor, booking_id: int, tag_id: int) -> dict[str, Any]:
    return await _mapped(repository.delete_assignment(executor, booking_id, tag_id))
