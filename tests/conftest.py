"""
In-memory stand-ins for the Neo4j async session and driver.
"""

from contextlib import asynccontextmanager

import pytest


class FakeResult:
    def __init__(self, records):
        self._records = list(records)

    async def single(self):
        return self._records[0] if self._records else None

    async def data(self):
        return list(self._records)


class FakeTransaction:
    """Buffers queries until the owning session commits them."""

    def __init__(self, session):
        self.session = session
        self.pending = []

    async def run(self, query, **params):
        self.pending.append((query, params))
        self.session.calls.append((query, params))
        return FakeResult(self.session.handler(query, params))


class FakeSession:
    """Answers each query through ``handler(query, params) -> list[dict]``.

    Auto-commit ``run`` calls are committed immediately; ``execute_write``
    commits its queries only if the transaction function returns.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self.committed = []

    async def run(self, query, **params):
        self.calls.append((query, params))
        self.committed.append((query, params))
        return FakeResult(self.handler(query, params))

    async def execute_write(self, work, *args, **kwargs):
        tx = FakeTransaction(self)
        value = await work(tx, *args, **kwargs)
        self.committed.extend(tx.pending)
        return value


class FakeDriver:
    def __init__(self, handler):
        self.handler = handler
        self.sessions = []

    @asynccontextmanager
    async def session(self):
        session = FakeSession(self.handler)
        self.sessions.append(session)
        yield session


def job_corpus_handler(jobs):
    """Serve ``jobs`` (list of dicts) to the count and paging queries."""

    def handler(query, params):
        if "count(j)" in query:
            return [{"cnt": len(jobs)}]
        skip, limit = params["skip"], params["limit"]
        return jobs[skip:skip + limit]

    return handler


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_driver():
    return FakeDriver


@pytest.fixture
def corpus_handler():
    return job_corpus_handler
