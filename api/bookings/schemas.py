"""
Pydantic schemas for booking endpoints.

Every field is optional; `None` means "not supplied". Nothing here checks
how values relate to each other (e.g. start_min > start_max is accepted).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BookingFilter(BaseModel):
    id: int | None = None
    start_min: int | None = None
    start_max: int | None = None
    end_min: int | None = None
    end_max: int | None = None
    tags: list[str] | None = None
    description_contains: str | None = None

    @property
    def has_tags(self) -> bool:
        # An empty list filters nothing, same as no list at all.
        return bool(self.tags)


class BookingCreate(BaseModel):
    start: int | None = Field(default=None, description="Epoch milliseconds; defaults to now.")
    end: int | None = Field(default=None, description="Epoch milliseconds; absent while running.")
    description: str | None = None


class BookingUpdate(BaseModel):
    start: int | None = None
    end: int | None = None
    description: str | None = None

    def is_empty(self) -> bool:
        return self.start is None and self.end is None and self.description is None
