"""Deploy command - build, back up, sync and migrate"""

from datetime import datetime
from typing import Optional

from rich.console import Console

from frontdeploy.base import BaseCommand
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import DeployReport, StageResult, StageStatus
from frontdeploy.models.ssh import SSHConnection
from frontdeploy.services import (
    BackupService,
    BuildService,
    CommandRunner,
    MigrateService,
    SSHService,
    SyncService,
)
from frontdeploy.services.preflight import check_tools
from frontdeploy.ui_components import build_report_table


class DeployCommand(BaseCommand):
    """Build the frontend and mirror it to the remote host."""

    def __init__(
        self,
        config: DeployConfig,
        verbose: bool = False,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
        now: Optional[datetime] = None,
    ):
        super().__init__(verbose=verbose, console=console)
        self.config = config
        self.runner = runner
        self.started_at = now or datetime.now()
        self.report = DeployReport(
            host=config.ssh_host,
            remote_path=config.remote_path,
            dry_run=config.dry_run,
        )

    def execute(self) -> None:
        """Execute deploy command."""
        config = self.config

        self.show_header(
            title="Deploy",
            details={
                "Host": config.ssh_host,
                "Remote path": config.remote_path,
                "Build dir": config.build_dir,
                "Mode": "dry-run" if config.dry_run else "live",
            },
        )

        logger = self.init_logger("deploy", config.log_dir)
        logger.log(repr(config))

        logger.step("Checking required tools")
        check_tools()
        logger.success("rsync and ssh available")

        runner = self.runner or CommandRunner(logger)
        if runner.logger is None:
            runner.logger = logger
        ssh_service = SSHService(
            SSHConnection(host=config.ssh_host, key_path=config.ssh_key, port=config.ssh_port),
            runner,
        )
        sync_service = SyncService(ssh_service, runner)

        logger.step("Building project")
        self._report(BuildService(runner).build(config))

        logger.step("Backing up remote directory")
        self._report(BackupService(ssh_service).backup(config, now=self.started_at))

        if config.dry_run:
            logger.step(f"Previewing sync to {config.remote_target}")
        else:
            logger.step(f"Deploying to {config.remote_target}")
        self._report(sync_service.sync(config))

        logger.step("Normalizing remote ownership")
        self._report(sync_service.normalize_permissions(config))

        logger.step("Running migration command")
        self._report(MigrateService(ssh_service).migrate(config))

        self.console.print()
        self.console.print(build_report_table(self.report))

        if self.report.warnings:
            logger.success(f"Deploy complete with {len(self.report.warnings)} warning(s)")
        elif config.dry_run:
            logger.success("Dry run complete, nothing changed remotely")
        else:
            logger.success("Deploy complete!")

        self.print_log_location()

    def _report(self, result: StageResult) -> StageResult:
        """Record a stage outcome and echo it through the logger."""
        self.report.record(result)
        if result.status == StageStatus.WARNING:
            self.logger.warning(result.message)
        else:
            self.logger.success(result.message)
        return result
