"""
FastAPI router for tag endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Response, status

from core import db

from . import schemas, service

router = APIRouter(prefix="/api/tags")


@router.get("")
async def list_tags(
    id: int | None = None,
    name: str | None = None,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    tags = await service.list_tags(pool, schemas.TagFilter(id=id, name=name))
    return {"tags": tags, "count": len(tags)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: schemas.TagCreate,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.create_tag(pool, payload)


@router.get("/{tag_id}")
async def get_tag(
    tag_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.get_tag(pool, tag_id)


@router.patch("/{tag_id}", response_model=None)
async def update_tag(
    tag_id: int,
    payload: schemas.TagUpdate,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict | Response:
    row = await service.update_tag(pool, tag_id, payload)
    if row is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return row


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Delete a tag; it is unassigned from every booking first.
    """
    row = await service.delete_tag(pool, tag_id)
    return {"ok": True, "tag": row}
