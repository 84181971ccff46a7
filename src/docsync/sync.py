"""Project synchronizer — pull remote documents into the local repository.

The pull is rate-limited by a per-project init marker: a project pulled
within the staleness window is not fetched again unless forced. Merging is
last-write-wins per document, by `updatedAt`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from docsync.document import isoformat, is_newer, parse_timestamp
from docsync.keys import init_marker_key

if TYPE_CHECKING:
    from docsync.context import Context
    from docsync.repository import DocumentRepository

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one `initialize_project` call."""

    fetched: bool = False
    updated: list[str] = field(default_factory=list)


def _updated_at(doc: Any) -> Any:
    return doc.get("updatedAt") if isinstance(doc, dict) else None


class ProjectSynchronizer:
    """Staleness-gated pull of a project's remote documents."""

    def __init__(self, context: Context, documents: DocumentRepository) -> None:
        self._ctx = context
        self._documents = documents

    def is_fresh(self, pid: str) -> bool:
        """True if the project was pulled within the staleness window."""
        last_init = parse_timestamp(self._ctx.local.retrieve(init_marker_key(pid)))
        return last_init is not None and last_init > self._ctx.clock() - self._ctx.staleness

    async def initialize_project(self, pid: str | None, force: bool = False) -> SyncResult:
        """Fetch the project's remote documents and merge the newer ones locally.

        Local documents are replaced when they are missing or the remote copy
        has a strictly later `updatedAt`. Local-only documents are kept. An
        absent remote result aborts without touching the init marker.
        """
        if not pid:
            return SyncResult()
        if not force and self.is_fresh(pid):
            logger.debug("Project %s pulled recently, skipping remote fetch", pid)
            return SyncResult()

        remote_docs = await self._documents.fetch_all_documents(pid)
        if remote_docs is None:
            logger.info("Remote returned nothing for project %s, will retry on next init", pid)
            return SyncResult()

        result = SyncResult(fetched=True)
        for path, doc in remote_docs.items():
            local_doc = self._documents.get_document(pid, path)
            if local_doc is None or is_newer(_updated_at(doc), _updated_at(local_doc)):
                logger.debug("Taking remote copy of %s/%s", pid, path or "<root>")
                self._documents.set_document(pid, path, doc)
                result.updated.append(path)

        self._ctx.local.store(init_marker_key(pid), isoformat(self._ctx.clock()))
        logger.info(
            "Project %s initialized (%d of %d remote documents taken)",
            pid,
            len(result.updated),
            len(remote_docs),
        )
        return result
