"""Configuration loading from environment variables and docsync.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_STORAGE_DIR = Path.home() / ".docsync" / "store"
_CONFIG_FILENAME = "docsync.toml"


@dataclass
class RemoteConfig:
    """HTTP remote store configuration."""

    url: str = ""
    timeout: int = 30


@dataclass
class SyncConfig:
    """Remote pull policy."""

    staleness_hours: float = 24
    id_length: int = 7


@dataclass
class ProjectConfig:
    """Sources written into newly created project records."""

    app_account: str = ""
    default_template: str = ""


@dataclass
class DocsyncConfig:
    """Top-level docsync configuration."""

    account_id: str = ""
    storage_dir: Path = _DEFAULT_STORAGE_DIR
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    project: ProjectConfig = field(default_factory=ProjectConfig)
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> DocsyncConfig:
    """Load configuration from environment variables and optional docsync.toml.

    Priority: environment variables > docsync.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.docsync/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".docsync" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    account_data = file_data.get("account", {})
    storage_data = file_data.get("storage", {})
    remote_data = file_data.get("remote", {})
    sync_data = file_data.get("sync", {})
    project_data = file_data.get("project", {})

    app_account = project_data.get("app_account", "")
    config = DocsyncConfig(
        account_id=os.getenv("DOCSYNC_ACCOUNT", account_data.get("id", "")),
        storage_dir=Path(
            os.getenv("DOCSYNC_STORAGE_DIR", storage_data.get("dir", str(_DEFAULT_STORAGE_DIR)))
        ),
        remote=RemoteConfig(
            url=os.getenv("DOCSYNC_REMOTE_URL", remote_data.get("url", "")),
            timeout=int(os.getenv("DOCSYNC_REMOTE_TIMEOUT", remote_data.get("timeout", 30))),
        ),
        sync=SyncConfig(
            staleness_hours=float(
                os.getenv("DOCSYNC_STALENESS_HOURS", sync_data.get("staleness_hours", 24))
            ),
            id_length=int(sync_data.get("id_length", 7)),
        ),
        project=ProjectConfig(
            app_account=app_account,
            default_template=project_data.get(
                "default_template",
                f"{app_account}/widget/templates.project.doc" if app_account else "",
            ),
        ),
        log_level=os.getenv("DOCSYNC_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
