"""
Parameterized SQL composition.

`QueryBuilder` collects static SQL fragments and bound values in the order
they appear and only turns the values into asyncpg placeholders ($1, $2, ...)
when `build()` is called. Feature packages decide *which* fragments to push;
this module guarantees that no value ever ends up inside the SQL text.

Column and table names passed to `push()` must be owned by application code,
never taken from request input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence


@dataclass(frozen=True)
class Statement:
    sql: str
    args: tuple[Any, ...] = ()


class _Bind:
    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


class QueryBuilder:
    def __init__(self, sql: str = "") -> None:
        self._parts: list[str | _Bind] = []
        if sql:
            self._parts.append(sql)

    def push(self, sql: str) -> QueryBuilder:
        self._parts.append(sql)
        return self

    def push_bind(self, value: Any) -> QueryBuilder:
        self._parts.append(_Bind(value))
        return self

    def push_bind_list(self, values: Iterable[Any], *, separator: str = ", ") -> QueryBuilder:
        """
        Push one bound value per element, separated only between elements.
        """
        for index, value in enumerate(values):
            if index > 0:
                self.push(separator)
            self.push_bind(value)
        return self

    def push_tuples(self, rows: Sequence[Sequence[Any]], *, separator: str = ", ") -> QueryBuilder:
        """
        Push `(v1, v2), (v3, v4), ...` with every value bound.
        """
        for index, row in enumerate(rows):
            if index > 0:
                self.push(separator)
            self.push("(").push_bind_list(row).push(")")
        return self

    def build(self) -> Statement:
        sql: list[str] = []
        args: list[Any] = []
        for part in self._parts:
            if isinstance(part, _Bind):
                args.append(part.value)
                sql.append(f"${len(args)}")
            else:
                sql.append(part)
        return Statement(sql="".join(sql), args=tuple(args))


def escape_like(text: str) -> str:
    # Postgres LIKE uses backslash as the default escape character.
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def like_contains(text: str) -> str:
    """
    Wrap `text` in wildcards for a substring LIKE match.

    The result is meant to be bound as a parameter, never concatenated.
    """
    return f"%{escape_like(text)}%"


def select_list(columns: Sequence[tuple[str, str]], *, alias: str | None = None) -> str:
    """
    Render `(storage_column, projected_name)` pairs as a SELECT/RETURNING list.
    """
    prefix = f"{alias}." if alias else ""
    rendered = []
    for column, name in columns:
        if column == name:
            rendered.append(f"{prefix}{column}")
        else:
            rendered.append(f'{prefix}{column} AS "{name}"')
    return ", ".join(rendered)
