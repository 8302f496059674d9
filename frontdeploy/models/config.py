"""
Deploy Configuration Model

The single record every pipeline stage reads from.
"""

import posixpath
from dataclasses import dataclass
from typing import Optional

from frontdeploy.constants import (
    BACKUP_DIR_NAME,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_BUILD_DIR,
    DEFAULT_LOG_DIR,
    DEFAULT_OWNER,
    EXCLUDE_PATTERNS,
)


@dataclass(frozen=True)
class DeployConfig:
    """Immutable configuration for one deploy run."""

    ssh_host: str
    remote_path: str
    build_command: str = DEFAULT_BUILD_COMMAND
    build_dir: str = DEFAULT_BUILD_DIR
    migrate_command: str = ""
    dry_run: bool = False
    exclude_patterns: tuple[str, ...] = EXCLUDE_PATTERNS
    owner: Optional[str] = DEFAULT_OWNER
    ssh_key: Optional[str] = None
    ssh_port: Optional[int] = None
    log_dir: Optional[str] = DEFAULT_LOG_DIR

    @property
    def normalized_remote_path(self) -> str:
        """Remote path without a trailing slash ('/' stays '/')."""
        return self.remote_path.rstrip("/") or "/"

    @property
    def remote_target(self) -> str:
        """Rsync destination (host:path/)."""
        return f"{self.ssh_host}:{self.normalized_remote_path.rstrip('/')}/"

    @property
    def build_source(self) -> str:
        """Rsync source with a trailing slash so contents are copied, not the directory."""
        return self.build_dir.rstrip("/") + "/"

    @property
    def backup_dir(self) -> str:
        """Remote directory holding backup archives."""
        return posixpath.join(self.normalized_remote_path, BACKUP_DIR_NAME)

    @property
    def has_migrate_step(self) -> bool:
        return bool(self.migrate_command.strip())

    @property
    def has_permission_step(self) -> bool:
        return bool(self.owner)

    def __repr__(self) -> str:
        return (
            f"DeployConfig(host={self.ssh_host}, path={self.remote_path}, "
            f"dry_run={self.dry_run})"
        )
