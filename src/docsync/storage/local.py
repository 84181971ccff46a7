"""Local store adapters: in-memory and file-backed."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any
from urllib.parse import quote

import frontmatter

_DOC_NAMESPACE = "doc"


class MemoryStore:
    """Dict-backed store. Values are copied on the way in and out."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def retrieve(self, key: str) -> Any | None:
        return deepcopy(self._data.get(key))

    def store(self, key: str, value: Any) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStore:
    """Persistent store rooted at a directory.

    Layout:
        {root}/doc/{pid}/{path}.md      # document: front matter + content body
        {root}/{namespace}/{rest}.json  # everything else

    Key components are percent-encoded. The root document of a project
    (empty path) lives in `doc/{pid}/.md`.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _markdown_path(self, key: str) -> Path | None:
        namespace, _, rest = key.partition("/")
        if namespace != _DOC_NAMESPACE:
            return None
        pid, _, doc_path = rest.partition("/")
        return self.root / namespace / quote(pid, safe="") / f"{quote(doc_path, safe='')}.md"

    def _json_path(self, key: str) -> Path:
        namespace, _, rest = key.partition("/")
        if namespace == _DOC_NAMESPACE:
            # Documents that are not mappings are kept as plain JSON
            pid, _, doc_path = rest.partition("/")
            return self.root / namespace / quote(pid, safe="") / f"{quote(doc_path, safe='')}.json"
        return self.root / quote(namespace, safe="") / f"{quote(rest, safe='')}.json"

    def retrieve(self, key: str) -> Any | None:
        md_path = self._markdown_path(key)
        if md_path is not None and md_path.exists():
            return self._load_document(md_path)
        json_path = self._json_path(key)
        if json_path.exists():
            return json.loads(json_path.read_text(encoding="utf-8"))
        return None

    def store(self, key: str, value: Any) -> None:
        md_path = self._markdown_path(key)
        json_path = self._json_path(key)
        for stale in (md_path, json_path):
            if stale is not None and stale.exists():
                stale.unlink()
        if value is None:
            return

        if md_path is not None and isinstance(value, dict):
            md_path.parent.mkdir(parents=True, exist_ok=True)
            md_path.write_text(self._render_document(value), encoding="utf-8")
        else:
            json_path.parent.mkdir(parents=True, exist_ok=True)
            json_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")

    def _render_document(self, doc: dict) -> str:
        """Move `content` into the body when front matter would round-trip it unchanged."""
        metadata = dict(doc)
        body = ""
        content = metadata.get("content")
        # Empty or whitespace-padded content stays in front matter, the body is stripped on load
        if isinstance(content, str) and content and content == content.strip():
            body = metadata.pop("content")
        post = frontmatter.Post(body)
        post.metadata.update(metadata)
        return frontmatter.dumps(post) + "\n"

    def _load_document(self, path: Path) -> dict:
        post = frontmatter.load(str(path))
        doc = dict(post.metadata)
        if "content" not in doc and post.content:
            doc["content"] = post.content
        return doc
