"""Storage protocols consumed by the document repository."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LocalStore(Protocol):
    """Synchronous key-value persistence. Storing None removes the key."""

    def retrieve(self, key: str) -> Any | None: ...

    def store(self, key: str, value: Any) -> None: ...


@runtime_checkable
class RemoteStore(Protocol):
    """Hierarchical remote store addressed by `/`-separated paths."""

    async def fetch(self, pattern: str) -> Any | None:
        """Read everything matching a glob pattern. Returns None if nothing exists."""
        ...

    async def submit(self, tree: dict[str, Any]) -> None:
        """Merge `tree` into the store. Returns once the write is durable.

        A None leaf deletes that subtree.
        """
        ...
