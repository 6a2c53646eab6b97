"""
FastAPI router for tag assignment endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query, status

from core import db

from . import schemas, service

router = APIRouter(prefix="/api/tagassignments")


@router.get("")
async def list_assignments(
    booking_id: int | None = None,
    tag_id: int | None = None,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    filters = schemas.TagAssignmentFilter(booking_id=booking_id, tag_id=tag_id)
    assignments = await service.list_assignments(pool, filters)
    return {"assignments": assignments, "count": len(assignments)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assignment(
    payload: schemas.TagAssignmentCreate,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.create_assignment(pool, payload)


@router.delete("")
async def delete_assignment(
    booking_id: int = Query(...),
    tag_id: int = Query(...),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    row = await service.delete_assignment(pool, booking_id, tag_id)
    return {"ok": True, "assignment": row}
