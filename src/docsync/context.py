"""Explicit dependency bundle shared by the document and project services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docsync.config import DocsyncConfig
    from docsync.storage.base import LocalStore, RemoteStore


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Context:
    """Account identity plus the storage adapters it reads and writes."""

    account_id: str
    local: LocalStore
    remote: RemoteStore
    clock: Callable[[], datetime] = utcnow
    staleness: timedelta = field(default_factory=lambda: timedelta(hours=24))
    id_length: int = 7

    @classmethod
    def from_config(
        cls, config: DocsyncConfig, local: LocalStore, remote: RemoteStore
    ) -> Context:
        return cls(
            account_id=config.account_id,
            local=local,
            remote=remote,
            staleness=timedelta(hours=config.sync.staleness_hours),
            id_length=config.sync.id_length,
        )
