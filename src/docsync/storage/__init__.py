"""Storage adapters.

- local:  key-value persistence for the per-device document cache
- remote: hierarchical store that documents are published to and pulled from
"""

from docsync.storage.base import LocalStore, RemoteStore
from docsync.storage.local import FileStore, MemoryStore
from docsync.storage.remote import HttpRemoteStore, InMemoryRemoteStore, merge_tree, select

__all__ = [
    "FileStore",
    "HttpRemoteStore",
    "InMemoryRemoteStore",
    "LocalStore",
    "MemoryStore",
    "RemoteStore",
    "merge_tree",
    "select",
]
