"""Entry point: python -m docsync <command> <project-id>

- ls <pid>:             List the project's locally indexed document paths
- tree <pid>:           Print the local document hierarchy as JSON
- sync <pid> [--force]: Pull the project's documents from the remote store
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from docsync.config import DocsyncConfig, load_config
from docsync.context import Context
from docsync.handle import Handle, build_handle
from docsync.storage.local import FileStore
from docsync.storage.remote import HttpRemoteStore


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build(config: DocsyncConfig) -> tuple[Handle, HttpRemoteStore]:
    remote = HttpRemoteStore(config.remote.url, timeout=config.remote.timeout)
    context = Context.from_config(config, FileStore(config.storage_dir), remote)
    return build_handle(context, config.project), remote


def _run_ls(handle: Handle, pid: str) -> None:
    for path, doc in handle.document.get_all_documents(pid).items():
        marker = "*" if doc.in_buffer else " "
        print(f"{marker} {path or '<root>'}\t{doc.title}")


def _run_tree(handle: Handle, pid: str) -> None:
    tree = handle.utils.unflatten_documents(handle.document.get_all_documents(pid))
    print(json.dumps(tree, indent=2, ensure_ascii=False))


async def _run_sync(handle: Handle, remote: HttpRemoteStore, pid: str, force: bool) -> None:
    try:
        result = await handle.project.init(pid, force=force)
    finally:
        await remote.close()
    if not result.fetched:
        print("Nothing fetched (recently synced or remote unavailable)")
        return
    print(f"Updated {len(result.updated)} document(s)")


def _usage() -> None:
    print("Usage: python -m docsync [ls|tree|sync] <project-id> [--force]")
    print("  ls    — List locally indexed documents (* = unpublished)")
    print("  tree  — Print the document hierarchy as JSON")
    print("  sync  — Pull documents from the remote store")


def main() -> None:
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    flags = {a for a in sys.argv[1:] if a.startswith("--")}
    if len(args) != 2 or args[0] not in ("ls", "tree", "sync"):
        _usage()
        sys.exit(1)

    cmd, pid = args
    config = load_config()
    _setup_logging(config.log_level)
    handle, remote = _build(config)

    if cmd == "ls":
        _run_ls(handle, pid)
    elif cmd == "tree":
        _run_tree(handle, pid)
    else:
        if not config.remote.url:
            print("No remote configured. Set DOCSYNC_REMOTE_URL or [remote] url.", file=sys.stderr)
            sys.exit(1)
        asyncio.run(_run_sync(handle, remote, pid, "--force" in flags))


if __name__ == "__main__":
    main()
