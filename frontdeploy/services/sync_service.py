"""Rsync mirroring and remote ownership normalization."""

import shlex

from frontdeploy.constants import RSYNC_BASE_FLAGS
from frontdeploy.exceptions import SyncError
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import StageResult, StageStatus
from frontdeploy.services.runner import CommandRunner
from frontdeploy.services.ssh_service import SSHService


class SyncService:
    """Mirrors the build directory onto the remote path."""

    def __init__(self, ssh_service: SSHService, runner: CommandRunner):
        self.ssh_service = ssh_service
        self.runner = runner

    def build_rsync_command(self, config: DeployConfig) -> list[str]:
        """Build the rsync argv for config."""
        rsync_cmd = ["rsync", *RSYNC_BASE_FLAGS]
        for pattern in config.exclude_patterns:
            rsync_cmd.extend(["--exclude", pattern])

        if config.dry_run:
            rsync_cmd.append("--dry-run")

        rsync_cmd.extend(["-e", self.ssh_service.connection.rsync_shell])
        rsync_cmd.extend([config.build_source, config.remote_target])
        return rsync_cmd

    def sync(self, config: DeployConfig) -> StageResult:
        """
        Run rsync against the remote host.

        Raises:
            SyncError: If rsync exits non-zero
        """
        result = self.runner.run(self.build_rsync_command(config))
        if result.is_failure:
            raise SyncError(config.remote_target, result.returncode)

        if config.dry_run:
            return StageResult(
                stage="sync",
                status=StageStatus.DRY_RUN,
                message="Previewed changes, nothing written remotely",
            )

        return StageResult(
            stage="sync",
            status=StageStatus.SUCCESS,
            message=f"Synced {config.build_source} to {config.remote_target}",
        )

    @staticmethod
    def build_chown_command(config: DeployConfig) -> str:
        # -n: fail instead of prompting when sudo needs a password
        return (
            f"sudo -n chown -R {shlex.quote(config.owner)} "
            f"{shlex.quote(config.normalized_remote_path)}"
        )

    def normalize_permissions(self, config: DeployConfig) -> StageResult:
        """Best-effort chown of the remote path to the service owner."""
        if not config.has_permission_step:
            return StageResult(
                stage="permissions",
                status=StageStatus.SKIPPED,
                message="Ownership change disabled",
            )

        if config.dry_run:
            return StageResult(
                stage="permissions",
                status=StageStatus.DRY_RUN,
                message=f"Would change ownership of {config.remote_path} to {config.owner}",
            )

        try:
            result = self.ssh_service.execute_command(self.build_chown_command(config))
        except OSError as e:
            return StageResult(
                stage="permissions",
                status=StageStatus.WARNING,
                message=f"Could not change ownership: {e}",
            )

        if result.is_failure:
            return StageResult(
                stage="permissions",
                status=StageStatus.WARNING,
                message=(
                    f"Could not change ownership to {config.owner} "
                    f"(exit code {result.returncode}), continuing"
                ),
            )

        return StageResult(
            stage="permissions",
            status=StageStatus.SUCCESS,
            message=f"Ownership set to {config.owner}",
        )
