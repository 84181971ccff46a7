"""Local storage key scheme.

Four namespaces, each scoped by project id:

    selectedDoc/{pid}     currently open document path
    doc/{pid}/{path}      document content
    docs/{pid}            ordered index of document paths
    init/{pid}            timestamp of the last remote pull
"""

from __future__ import annotations

from urllib.parse import quote

DOC_SEPARATOR = "."


def selected_doc_key(pid: str) -> str:
    return f"selectedDoc/{pid}"


def doc_key(pid: str, path: str) -> str:
    # pid is encoded so the first "/" always ends it
    return f"doc/{quote(pid, safe='')}/{path}"


def docs_index_key(pid: str) -> str:
    return f"docs/{pid}"


def init_marker_key(pid: str) -> str:
    return f"init/{pid}"


def join_path(parent: str, segment: str) -> str:
    """Append a segment to a document path. Root children have no separator."""
    if not parent:
        return segment
    return f"{parent}{DOC_SEPARATOR}{segment}"
