"""
FastAPI router for booking endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query, Response, status

from core import db
from tagassignments import service as assignment_service
from tagassignments.schemas import TagAssignmentBatch

from . import schemas, service

router = APIRouter(prefix="/api/bookings")


@router.get("")
async def list_bookings(
    id: int | None = None,
    start_min: int | None = None,
    start_max: int | None = None,
    end_min: int | None = None,
    end_max: int | None = None,
    tag: list[str] | None = Query(default=None),
    description_contains: str | None = None,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    List bookings matching every supplied filter.

    `tag` may be repeated; a booking matches when it carries any of the names.
    """
    filters = schemas.BookingFilter(
        id=id,
        start_min=start_min,
        start_max=start_max,
        end_min=end_min,
        end_max=end_max,
        tags=tag,
        description_contains=description_contains,
    )
    bookings = await service.list_bookings(pool, filters)
    return {"bookings": bookings, "count": len(bookings)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: schemas.BookingCreate,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.create_booking(pool, payload)


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.get_booking(pool, booking_id)


@router.patch("/{booking_id}", response_model=None)
async def update_booking(
    booking_id: int,
    payload: schemas.BookingUpdate,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict | Response:
    row = await service.update_booking(pool, booking_id, payload)
    if row is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return row


@router.post("/{booking_id}/finish")
async def finish_booking(
    booking_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Stamp the current time as the booking's end. 409 if it already has one.
    """
    return await service.finish_booking(pool, booking_id)


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Delete a booking; its tag assignments are removed with it.
    """
    row = await service.delete_booking(pool, booking_id)
    return {"ok": True, "booking": row}


@router.get("/{booking_id}/tags")
async def list_booking_tags(
    booking_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    tags = await assignment_service.list_tags_for_booking(pool, booking_id)
    return {"booking_id": booking_id, "tags": tags, "count": len(tags)}


@router.post("/{booking_id}/tags", status_code=status.HTTP_201_CREATED)
async def assign_tags(
    booking_id: int,
    payload: TagAssignmentBatch,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Assign several tags at once. Either all assignments are stored or none.
    """
    rows = await assignment_service.assign_tags(pool, booking_id, payload)
    return {"assignments": rows, "count": len(rows)}
