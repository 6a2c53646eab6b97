"""
Tag assignment statement composition.

An assignment is just the (booking_id, tag_id) pair; rows are always
returned as (tag_id, booking_id).
"""

from __future__ import annotations

from typing import Sequence

from core.projections import TAG_ASSIGNMENT_COLUMNS, TAG_ASSIGNMENT_TABLE, TAG_COLUMNS, TAG_TABLE
from core.query import QueryBuilder, Statement, select_list

from .schemas import TagAssignmentCreate, TagAssignmentFilter


def _returning() -> str:
    return f" RETURNING {select_list(TAG_ASSIGNMENT_COLUMNS)}"


def compose_select(filters: TagAssignmentFilter) -> Statement:
    qb = QueryBuilder(f"SELECT {select_list(TAG_ASSIGNMENT_COLUMNS)} FROM {TAG_ASSIGNMENT_TABLE} WHERE TRUE")

    if filters.booking_id is not None:
        qb.push(" AND booking_id = ").push_bind(filters.booking_id)

    if filters.tag_id is not None:
        qb.push(" AND tag_id = ").push_bind(filters.tag_id)

    return qb.build()


def compose_tags_for_booking(booking_id: int) -> Statement:
    qb = QueryBuilder(f"SELECT {select_list(TAG_COLUMNS, alias='t')} FROM {TAG_TABLE} t")
    qb.push(f" INNER JOIN {TAG_ASSIGNMENT_TABLE} ta ON t.id = ta.tag_id")
    qb.push(" WHERE ta.booking_id = ").push_bind(booking_id)
    return qb.build()


def compose_insert(assignment: TagAssignmentCreate) -> Statement:
    qb = QueryBuilder(f"INSERT INTO {TAG_ASSIGNMENT_TABLE} (tag_id, booking_id) VALUES ")
    qb.push_tuples([(assignment.tag_id, assignment.booking_id)])
    qb.push(_returning())
    return qb.build()


def compose_insert_many(booking_id: int, tag_ids: Sequence[int]) -> Statement | None:
    """
    One multi-row INSERT with a (tag_id, booking_id) tuple per tag.

    Returns None for an empty tag list.
    """
    if not tag_ids:
        return None

    qb = QueryBuilder(f"INSERT INTO {TAG_ASSIGNMENT_TABLE} (tag_id, booking_id) VALUES ")
    qb.push_tuples([(tag_id, booking_id) for tag_id in tag_ids])
    qb.push(_returning())
    return qb.build()


def compose_delete(booking_id: int, tag_id: int) -> Statement:
    qb = QueryBuilder(f"DELETE FROM {TAG_ASSIGNMENT_TABLE} WHERE booking_id = ").push_bind(booking_id)
    qb.push(" AND tag_id = ").push_bind(tag_id)
    qb.push(_returning())
    return qb.build()
