"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Repositories never reach for the
pool themselves: routes receive it through `get_pool` and pass it down.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- statements are composed by `core.query.QueryBuilder`
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from core.query import Statement

# Anything that can run a statement: the pool (one connection per call)
# or a connection that is already inside a transaction.
Executor = Union[asyncpg.Pool, asyncpg.Connection]

_pool: asyncpg.Pool | None = None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def pool_settings() -> tuple[int, int, int]:
    """
    Returns (min_size, max_size, command_timeout_s).

    - DB_POOL_MIN_SIZE (default 1)
    - DB_POOL_MAX_SIZE (default 5)
    - DB_COMMAND_TIMEOUT_S (default 30)
    """
    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), 1)
    if min_size > max_size:
        min_size = max_size
    timeout = _env_int("DB_COMMAND_TIMEOUT_S", 30)
    return min_size, max_size, timeout


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    min_size, max_size, timeout = pool_settings()
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=timeout,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def get_pool() -> asyncpg.Pool:
    """
    FastAPI dependency handing the pool to a route.
    """
    return pool()


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(executor: Executor, statement: Statement) -> dict[str, Any] | None:
    """
    Run a statement and return a single row as a dict (or None).
    """
    row = await executor.fetchrow(statement.sql, *statement.args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(executor: Executor, statement: Statement) -> list[dict[str, Any]]:
    """
    Run a statement and return all rows as a list of dicts.
    """
    rows = await executor.fetch(statement.sql, *statement.args)
    return [_record_to_dict(r) for r in rows]


async def execute(executor: Executor, statement: Statement) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    await executor.execute(statement.sql, *statement.args)


@asynccontextmanager
async def transaction(executor: Executor) -> AsyncIterator[asyncpg.Connection]:
    """
    Yield a connection inside a transaction.

    Committed when the block exits normally; rolled back in full when it
    raises, and the exception propagates unchanged.
    """
    if isinstance(executor, asyncpg.Pool):
        async with executor.acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                yield conn
    else:
        async with executor.transaction():
            yield executor
