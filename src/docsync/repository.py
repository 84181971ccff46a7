"""Document repository: flat, path-keyed documents in the local store.

Per project the local store holds:
- one entry per document, keyed by its dot-separated path
- an ordered index of document paths (insertion order, no duplicates)
- the path of the currently selected document

Every write goes through `set_document`, which keeps the index in step
with the stored documents and moves the selection to the written path.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
from typing import TYPE_CHECKING, Any

from docsync.document import BUFFER_FIELD, Document, isoformat
from docsync.keys import doc_key, docs_index_key, join_path, selected_doc_key

if TYPE_CHECKING:
    from docsync.context import Context

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class DocumentRepository:
    """CRUD over one account's locally cached project documents."""

    def __init__(self, context: Context) -> None:
        self._ctx = context
        self._issued_ids: set[str] = set()
        self._publishing: set[asyncio.Task] = set()

    def _now(self) -> str:
        return isoformat(self._ctx.clock())

    def _read_index(self, pid: str) -> list[str]:
        paths = self._ctx.local.retrieve(docs_index_key(pid))
        if paths is None:
            return []
        if not isinstance(paths, list):
            logger.warning("Document index for project %s is malformed, treating as empty", pid)
            return []
        return paths

    def _remote_prefix(self, pid: str) -> str:
        return f"{self._ctx.account_id}/document/{pid}"

    # ── Local writes ─────────────────────────────────────────

    def set_document(self, pid: str, path: str, value: dict[str, Any] | None) -> None:
        """Create, replace or (with value=None) delete the document at `path`.

        Always selects `path` afterwards, deletes included.
        """
        local = self._ctx.local
        local.store(doc_key(pid, path), value)

        paths = self._read_index(pid)
        if value is None:
            local.store(docs_index_key(pid), [p for p in paths if p != path])
        elif path not in paths:
            local.store(docs_index_key(pid), [*paths, path])

        local.store(selected_doc_key(pid), path)

    def update_document(self, pid: str, path: str, value: dict[str, Any]) -> Document:
        """Merge `value` over the stored document and mark it as unpublished.

        Fields missing from `value` keep their stored values, so
        `update_document(pid, path, {"title": "New"})` leaves the content alone.
        """
        existing = self._ctx.local.retrieve(doc_key(pid, path))
        doc = Document(existing) if isinstance(existing, dict) else Document()
        doc.update(value)
        doc["updatedAt"] = self._now()
        doc[BUFFER_FIELD] = {"inBuffer": True}
        self.set_document(pid, path, doc)
        return doc

    def create_document(
        self, pid: str, parent_path: str = "", value: dict[str, Any] | None = None
    ) -> str:
        """Create a document under `parent_path` (root by default). Returns its path."""
        if value is None:
            value = {"title": "", "content": ""}
        path = join_path(parent_path or "", self.generate_document_id())
        doc = Document(value)
        doc["createdAt"] = self._now()
        doc[BUFFER_FIELD] = {"inBuffer": True}
        self.set_document(pid, path, doc)
        return path

    def delete_document(self, pid: str, path: str) -> None:
        """Delete one document. Descendant paths are left in place."""
        self.set_document(pid, path, None)

    def open_document(self, pid: str, path: str) -> None:
        self._ctx.local.store(selected_doc_key(pid), path)

    # ── Local reads ──────────────────────────────────────────

    def get_document(self, pid: str, path: str) -> Document | None:
        doc = self._ctx.local.retrieve(doc_key(pid, path))
        if doc is None:
            return None
        return Document(doc) if isinstance(doc, dict) else doc

    def get_all_documents(self, pid: str) -> dict[str, Document]:
        """All indexed documents of a project, in index order.

        Index entries whose document has gone missing are skipped.
        """
        docs: dict[str, Document] = {}
        for path in self._read_index(pid):
            doc = self.get_document(pid, path)
            if doc is not None:
                docs[path] = doc
        return docs

    def get_selected_document(self, pid: str) -> str | None:
        """Path of the selected document, falling back to (and opening) the first one."""
        selected = self._ctx.local.retrieve(selected_doc_key(pid))
        if selected is not None:
            return selected

        first = next(iter(self.get_all_documents(pid)), None)
        if first is not None:
            self.open_document(pid, first)
        return first

    # ── Remote ───────────────────────────────────────────────

    async def fetch_document(self, pid: str, path: str) -> Any | None:
        return await self._ctx.remote.fetch(f"{self._remote_prefix(pid)}/{path}/**")

    async def fetch_all_documents(self, pid: str) -> dict[str, Any] | None:
        return await self._ctx.remote.fetch(f"{self._remote_prefix(pid)}/**")

    async def fetch_all_titles(self, pid: str) -> dict[str, Any] | None:
        return await self._ctx.remote.fetch(f"{self._remote_prefix(pid)}/*/title")

    def publish_document(self, pid: str, path: str) -> asyncio.Task[Document]:
        """Send a document to the remote store without waiting for it.

        Returns the commit task. When the remote acknowledges the write, the
        local copy is rewritten with its buffer flag cleared; if the write
        fails, awaiting the task raises and the local copy stays buffered.
        Must be called with a running event loop.
        """
        stored = self.get_document(pid, path)
        if stored is None:
            raise LookupError(f"No local document at {path!r} in project {pid!r}")

        payload = stored.without_buffer_state()
        tree = {self._ctx.account_id: {"document": {pid: {path: dict(payload)}}}}

        task = asyncio.get_running_loop().create_task(self._commit(pid, path, payload, tree))
        self._publishing.add(task)
        task.add_done_callback(self._publishing.discard)
        logger.info("Publishing document %s/%s", pid, path or "<root>")
        return task

    async def _commit(
        self, pid: str, path: str, payload: Document, tree: dict[str, Any]
    ) -> Document:
        await self._ctx.remote.submit(tree)
        self.set_document(pid, path, payload.with_buffer_state(False))
        logger.info("Document %s/%s committed", pid, path or "<root>")
        return payload

    # ── Ids ──────────────────────────────────────────────────

    def generate_document_id(self) -> str:
        """Random lowercase alphanumeric id, never repeated within this repository."""
        while True:
            candidate = "".join(secrets.choice(_ID_ALPHABET) for _ in range(self._ctx.id_length))
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
