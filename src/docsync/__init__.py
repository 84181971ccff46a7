"""docsync — local-first project documents synchronized with a remote store.

Documents are stored flat, keyed by dot-separated paths:

    ""            # project root document
    "a1b2c3d"     # child of the root
    "a1b2c3d.x9"  # grandchild

The hierarchy is rebuilt on demand with `docsync.hierarchy.unflatten`.
"""

__version__ = "0.1.0"
