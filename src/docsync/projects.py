"""Project records in the remote store.

Projects live under `{account}/thing/project/{pid}`:

    data:      {title, logo, tags: {tag: ""}}
    template:  {src}
    type:      {src}
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from docsync.config import ProjectConfig

if TYPE_CHECKING:
    from docsync.context import Context
    from docsync.sync import ProjectSynchronizer, SyncResult

logger = logging.getLogger(__name__)


class ProjectService:
    """Remote CRUD for project metadata, plus document initialization."""

    def __init__(
        self,
        context: Context,
        synchronizer: ProjectSynchronizer,
        config: ProjectConfig | None = None,
    ) -> None:
        self._ctx = context
        self._synchronizer = synchronizer
        self._config = config or ProjectConfig()

    def _prefix(self) -> str:
        return f"{self._ctx.account_id}/thing/project"

    def _tree(self, pid: str, record: Any) -> dict[str, Any]:
        return {self._ctx.account_id: {"thing": {"project": {pid: record}}}}

    async def get_all(self) -> dict[str, Any] | None:
        return await self._ctx.remote.fetch(f"{self._prefix()}/**")

    async def get(self, pid: str) -> dict[str, Any] | None:
        return await self._ctx.remote.fetch(f"{self._prefix()}/{pid}/**")

    async def create(self, project: dict[str, Any]) -> str:
        """Write a new project record and return its generated id."""
        pid = str(uuid.uuid4())
        record = {
            "data": {
                "title": project.get("title") or "Untitled",
                "logo": project.get("logo") or "",
                "tags": {tag: "" for tag in project.get("tags") or []},
            },
            "template": {"src": project.get("template") or self._config.default_template},
            "type": {"src": f"{self._config.app_account}/type/project"},
        }
        await self._ctx.remote.submit(self._tree(pid, record))
        logger.info("Created project %s (%s)", pid, record["data"]["title"])
        return pid

    async def delete(self, pid: str) -> None:
        await self._ctx.remote.submit(self._tree(pid, None))
        logger.info("Deleted project %s", pid)

    async def update(self, pid: str, project: dict[str, Any]) -> None:
        await self._ctx.remote.submit(self._tree(pid, project))

    async def init(self, pid: str | None, force: bool = False) -> SyncResult:
        return await self._synchronizer.initialize_project(pid, force=force)
