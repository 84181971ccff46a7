"""The handle handed to editor code: documents, projects and tree helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from docsync.hierarchy import unflatten
from docsync.keys import DOC_SEPARATOR
from docsync.projects import ProjectService
from docsync.repository import DocumentRepository
from docsync.sync import ProjectSynchronizer

if TYPE_CHECKING:
    from docsync.config import ProjectConfig
    from docsync.context import Context


class Utils:
    """Stateless helpers."""

    def unflatten_documents(self, documents: dict[str, Any]) -> dict[str, dict[str, Any]]:
        return unflatten(documents)


@dataclass
class Handle:
    document: DocumentRepository
    project: ProjectService
    utils: Utils = field(default_factory=Utils)
    DOC_SEPARATOR: str = DOC_SEPARATOR


def build_handle(context: Context, project_config: ProjectConfig | None = None) -> Handle:
    """Wire the repository, synchronizer and project service around one context."""
    documents = DocumentRepository(context)
    synchronizer = ProjectSynchronizer(context, documents)
    return Handle(
        document=documents,
        project=ProjectService(context, synchronizer, project_config),
    )
