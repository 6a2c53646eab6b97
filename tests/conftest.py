"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add api/ to Python path (the service runs with api/ as its root)
api_path = Path(__file__).parent.parent / "api"
sys.path.insert(0, str(api_path))


class FakeTransaction:
    def __init__(self, conn):
        self._conn = conn

    async def __aenter__(self):
        self._conn.transactions_started += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            self._conn.committed += 1
        else:
            self._conn.rolled_back += 1
        return False


class FakeConnection:
    """
    Stands in for an asyncpg pool/connection.

    Records every statement and answers from a queue of canned responses.
    A queued exception instance is raised instead of returned.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.transactions_started = 0
        self.committed = 0
        self.rolled_back = 0

    def _next(self, default):
        if not self.responses:
            return default
        value = self.responses.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value

    async def fetchrow(self, sql, *args):
        self.calls.append(("fetchrow", sql, args))
        return self._next(None)

    async def fetch(self, sql, *args):
        self.calls.append(("fetch", sql, args))
        return self._next([])

    async def execute(self, sql, *args):
        self.calls.append(("execute", sql, args))
        return self._next("OK")

    def transaction(self):
        return FakeTransaction(self)


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def make_conn():
    def _make(*responses):
        return FakeConnection(responses)

    return _make
