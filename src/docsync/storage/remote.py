"""Remote store adapters and glob reads over hierarchical data.

Patterns are `/`-separated key paths:

    alice/document/p1/**          # everything under p1
    alice/document/p1/*/title     # the title of every document in p1

Results are rooted below the longest literal prefix. Wildcard levels
stay in the result as keys.
"""

from __future__ import annotations

import asyncio
import logging
from copy import deepcopy
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

_WILDCARDS = ("*", "**")


def select(tree: Any, pattern: str) -> Any | None:
    """Read the part of `tree` matching `pattern`. None if nothing matches."""
    stripped = pattern.strip("/")
    segments = stripped.split("/") if stripped else []
    node = tree
    i = 0
    while i < len(segments) and segments[i] not in _WILDCARDS:
        if not isinstance(node, dict) or segments[i] not in node:
            return None
        node = node[segments[i]]
        i += 1
    return _match(node, segments[i:])


def _match(node: Any, segments: list[str]) -> Any | None:
    if not segments or segments[0] == "**":
        return deepcopy(node)
    if not isinstance(node, dict):
        return None

    head, rest = segments[0], segments[1:]
    if head == "*":
        keys = list(node)
    else:
        keys = [head] if head in node else []

    result = {}
    for key in keys:
        value = _match(node[key], rest)
        if value is not None:
            result[key] = value
    return result or None


def merge_tree(target: dict[str, Any], data: dict[str, Any]) -> None:
    """Deep-merge `data` into `target` in place. None values delete keys."""
    for key, value in data.items():
        if value is None:
            target.pop(key, None)
        elif isinstance(value, dict) and isinstance(target.get(key), dict):
            merge_tree(target[key], value)
        else:
            target[key] = deepcopy(value)


class InMemoryRemoteStore:
    """Process-local remote store.

    With auto_commit=False, submitted writes are held until `commit()` or
    `fail()` is called, simulating a slow acknowledgement.
    """

    def __init__(self, data: dict[str, Any] | None = None, *, auto_commit: bool = True) -> None:
        self.data: dict[str, Any] = deepcopy(data) if data else {}
        self.fetch_count = 0
        self.submitted: list[dict[str, Any]] = []
        self._auto_commit = auto_commit
        self._pending: list[tuple[dict[str, Any], asyncio.Future]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def fetch(self, pattern: str) -> Any | None:
        self.fetch_count += 1
        return select(self.data, pattern)

    async def submit(self, tree: dict[str, Any]) -> None:
        self.submitted.append(deepcopy(tree))
        if self._auto_commit:
            merge_tree(self.data, tree)
            return
        future = asyncio.get_running_loop().create_future()
        self._pending.append((deepcopy(tree), future))
        await future

    def commit(self) -> int:
        """Apply and acknowledge every held write. Returns how many."""
        pending, self._pending = self._pending, []
        for tree, future in pending:
            merge_tree(self.data, tree)
            if not future.done():
                future.set_result(None)
        return len(pending)

    def fail(self, exc: BaseException) -> int:
        """Reject every held write with `exc`. Returns how many."""
        pending, self._pending = self._pending, []
        for _, future in pending:
            if not future.done():
                future.set_exception(exc)
        return len(pending)


class HttpRemoteStore:
    """Remote store over HTTP.

    POST {url}/get  {"keys": [pattern]}  -> full tree rooted at account ids
    POST {url}/set  {"data": tree}       -> 2xx once the write is durable
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: int = 30,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def fetch(self, pattern: str) -> Any | None:
        session = self._get_session()
        async with session.post(f"{self._url}/get", json={"keys": [pattern]}) as resp:
            if resp.status == 404:
                return None
            resp.raise_for_status()
            data = await resp.json()
        if data is None:
            return None
        return select(data, pattern)

    async def submit(self, tree: dict[str, Any]) -> None:
        session = self._get_session()
        async with session.post(f"{self._url}/set", json={"data": tree}) as resp:
            resp.raise_for_status()
        logger.debug("Remote write committed (%d top-level keys)", len(tree))

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
