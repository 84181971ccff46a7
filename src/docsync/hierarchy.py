"""Rebuild the document tree from flat dot-separated paths."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from docsync.keys import DOC_SEPARATOR

CHILDREN = "children"


def unflatten(documents: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Nest a `{path: document}` map into a tree keyed by path segment.

    Each node carries the document's own fields plus, when it has
    descendants, a `children` map. Intermediate segments without a document
    of their own become nodes holding only `children`. Input order does not
    matter and the input is never mutated.

    >>> unflatten({"1": {"t": 1}, "1.2": {"t": 2}})
    {'1': {'t': 1, 'children': {'2': {'t': 2}}}}
    """
    result: dict[str, dict[str, Any]] = {}

    for path, doc in documents.items():
        segments = path.split(DOC_SEPARATOR)
        level = result
        for segment in segments[:-1]:
            node = level.setdefault(segment, {})
            level = node.setdefault(CHILDREN, {})

        leaf = segments[-1]
        node = level.setdefault(leaf, {})
        # Keep children a descendant may have registered before this document
        children = node.get(CHILDREN)
        node.clear()
        node.update(deepcopy(doc) if doc else {})
        node.pop(CHILDREN, None)
        if children is not None:
            node[CHILDREN] = children

    return result
