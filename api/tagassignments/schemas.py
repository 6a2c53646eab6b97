"""
Pydantic schemas for tag assignment endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TagAssignmentFilter(BaseModel):
    booking_id: int | None = None
    tag_id: int | None = None


class TagAssignmentCreate(BaseModel):
    booking_id: int
    tag_id: int


class TagAssignmentBatch(BaseModel):
    tag_ids: list[int] = Field(default_factory=list, max_length=500)
