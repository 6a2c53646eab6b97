"""
Record projections: the exact columns each entity is read back with.

Every statement that returns rows for an entity selects (or RETURNs) this
column set, in this order, whatever filters or updates produced it.
Each entry is (storage column, name in the returned row).
"""

from __future__ import annotations

BOOKING_TABLE = "booking"
TAG_TABLE = "tag"
TAG_ASSIGNMENT_TABLE = "tagassignment"

BOOKING_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("startdate", "start"),
    ("enddate", "end"),
    ("description", "description"),
)

TAG_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
)

TAG_ASSIGNMENT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("tag_id", "tag_id"),
    ("booking_id", "booking_id"),
)


def field_names(columns: tuple[tuple[str, str], ...]) -> tuple[str, ...]:
    return tuple(name for _, name in columns)


BOOKING_FIELDS = field_names(BOOKING_COLUMNS)
TAG_FIELDS = field_names(TAG_COLUMNS)
TAG_ASSIGNMENT_FIELDS = field_names(TAG_ASSIGNMENT_COLUMNS)
