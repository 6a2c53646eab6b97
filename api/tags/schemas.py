"""
Pydantic schemas for tag endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TagFilter(BaseModel):
    id: int | None = None
    name: str | None = None


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=30)


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=30)

    def is_empty(self) -> bool:
        return self.name is None
