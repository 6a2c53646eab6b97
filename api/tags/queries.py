"""
Tag statement composition. Exact-match filters only.
"""

from __future__ import annotations

from core.projections import TAG_ASSIGNMENT_TABLE, TAG_COLUMNS, TAG_TABLE
from core.query import QueryBuilder, Statement, select_list

from .schemas import TagCreate, TagFilter, TagUpdate


def _returning() -> str:
    return f" RETURNING {select_list(TAG_COLUMNS)}"


def compose_select(filters: TagFilter) -> Statement:
    qb = QueryBuilder(f"SELECT {select_list(TAG_COLUMNS)} FROM {TAG_TABLE} WHERE TRUE")

    if filters.id is not None:
        qb.push(" AND id = ").push_bind(filters.id)

    if filters.name is not None:
        qb.push(" AND name = ").push_bind(filters.name)

    return qb.build()


def compose_get(tag_id: int) -> Statement:
    return compose_select(TagFilter(id=tag_id))


def compose_insert(tag: TagCreate) -> Statement:
    qb = QueryBuilder(f"INSERT INTO {TAG_TABLE} (name) VALUES (").push_bind(tag.name).push(")")
    qb.push(_returning())
    return qb.build()


def compose_update(tag_id: int, changes: TagUpdate) -> Statement | None:
    if changes.is_empty():
        return None

    qb = QueryBuilder(f"UPDATE {TAG_TABLE} SET name = ").push_bind(changes.name)
    qb.push(" WHERE id = ").push_bind(tag_id)
    qb.push(_returning())
    return qb.build()


def compose_delete_assignments(tag_id: int) -> Statement:
    return QueryBuilder(f"DELETE FROM {TAG_ASSIGNMENT_TABLE} WHERE tag_id = ").push_bind(tag_id).build()


def compose_delete(tag_id: int) -> Statement:
    qb = QueryBuilder(f"DELETE FROM {TAG_TABLE} WHERE id = ").push_bind(tag_id)
    qb.push(_returning())
    return qb.build()
