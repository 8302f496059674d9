"""Remote backup of the current deployment."""

import posixpath
import shlex
from datetime import datetime
from typing import Optional

from frontdeploy.constants import (
    BACKUP_DIR_NAME,
    BACKUP_NAME_FORMAT,
    BACKUP_TIMESTAMP_FORMAT,
)
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import StageResult, StageStatus
from frontdeploy.services.ssh_service import SSHService


class BackupService:
    """
    Archives the remote path before it is overwritten.

    Failure never aborts a run: a fresh target legitimately has nothing
    to back up.
    """

    def __init__(self, ssh_service: SSHService):
        self.ssh_service = ssh_service

    @staticmethod
    def backup_name(now: Optional[datetime] = None) -> str:
        """Archive file name for the given (local) time."""
        timestamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
        return BACKUP_NAME_FORMAT.format(timestamp=timestamp)

    @staticmethod
    def build_backup_command(config: DeployConfig, archive_name: str) -> str:
        """Remote shell command creating the backup archive."""
        backup_dir = config.backup_dir
        archive_path = posixpath.join(backup_dir, archive_name)
        return (
            f"mkdir -p {shlex.quote(backup_dir)} && "
            f"tar -czf {shlex.quote(archive_path)} "
            f"--exclude=./{BACKUP_DIR_NAME} "
            f"-C {shlex.quote(config.normalized_remote_path)} ."
        )

    def backup(self, config: DeployConfig, now: Optional[datetime] = None) -> StageResult:
        """Create the archive, or only announce it in dry-run mode."""
        archive_name = self.backup_name(now)
        archive_path = posixpath.join(config.backup_dir, archive_name)

        if config.dry_run:
            return StageResult(
                stage="backup",
                status=StageStatus.DRY_RUN,
                message=f"Would back up {config.remote_path} to {archive_path}",
            )

        command = self.build_backup_command(config, archive_name)
        try:
            result = self.ssh_service.execute_command(command)
        except OSError as e:
            return StageResult(
                stage="backup",
                status=StageStatus.WARNING,
                message=f"Backup skipped, could not run ssh: {e}",
            )

        if result.is_failure:
            return StageResult(
                stage="backup",
                status=StageStatus.WARNING,
                message=(
                    f"Backup failed with exit code {result.returncode} "
                    "(remote path may be empty or missing), continuing"
                ),
            )

        return StageResult(
            stage="backup",
            status=StageStatus.SUCCESS,
            message=f"Backup created: {archive_path}",
        )
