"""
Tag business logic.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core import db
from core.errors import RecordNotFound

from . import repository
from .schemas import TagCreate, TagFilter, TagUpdate


async def list_tags(executor: db.Executor, filters: TagFilter) -> list[dict[str, Any]]:
    return await repository.list_tags(executor, filters)


async def get_tag(executor: db.Executor, tag_id: int) -> dict[str, Any]:
    try:
        return await repository.get_tag(executor, tag_id)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


async def create_tag(executor: db.Executor, payload: TagCreate) -> dict[str, Any]:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tag name is required.")
    return await repository.create_tag(executor, TagCreate(name=name))


async def update_tag(executor: db.Executor, tag_id: int, payload: TagUpdate) -> dict[str, Any] | None:
    try:
        return await repository.update_tag(executor, tag_id, payload)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


async def delete_tag(executor: db.Executor, tag_id: int) -> dict[str, Any]:
    try:
        return await repository.delete_tag(executor, tag_id)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
