"""Shared fixtures: a controllable clock and an in-memory context."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from docsync.context import Context
from docsync.repository import DocumentRepository
from docsync.storage.local import MemoryStore
from docsync.storage.remote import InMemoryRemoteStore

ACCOUNT = "alice.near"
PID = "p1"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def remote() -> InMemoryRemoteStore:
    return InMemoryRemoteStore()


@pytest.fixture
def context(clock: FakeClock, remote: InMemoryRemoteStore) -> Context:
    return Context(account_id=ACCOUNT, local=MemoryStore(), remote=remote, clock=clock)


@pytest.fixture
def repo(context: Context) -> DocumentRepository:
    return DocumentRepository(context)
