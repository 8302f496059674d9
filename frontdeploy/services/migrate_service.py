"""Remote post-deploy command."""

from frontdeploy.exceptions import MigrateError
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import StageResult, StageStatus
from frontdeploy.services.ssh_service import SSHService


class MigrateService:
    """Runs the migrate command inside the remote path."""

    def __init__(self, ssh_service: SSHService):
        self.ssh_service = ssh_service

    def migrate(self, config: DeployConfig) -> StageResult:
        """
        Run migrate_command on the remote host.

        Raises:
            MigrateError: If the remote command exits non-zero
        """
        if not config.has_migrate_step:
            return StageResult(
                stage="migrate",
                status=StageStatus.SKIPPED,
                message="No migration command",
            )

        if config.dry_run:
            return StageResult(
                stage="migrate",
                status=StageStatus.DRY_RUN,
                message=f"Would run '{config.migrate_command}' in {config.remote_path}",
            )

        result = self.ssh_service.execute_command(
            config.migrate_command, cwd=config.normalized_remote_path
        )
        if result.is_failure:
            raise MigrateError(config.migrate_command, result.returncode)

        return StageResult(
            stage="migrate",
            status=StageStatus.SUCCESS,
            message=f"Ran '{config.migrate_command}' in {config.remote_path}",
        )
