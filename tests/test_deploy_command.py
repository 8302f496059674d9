import io
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest import mock

from rich.console import Console

from frontdeploy.commands import DeployCommand
from frontdeploy.models import DeployConfig, StageStatus
from tests.fakes import FakeRunner


class DeployCommandTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.build_dir = Path(self.tmp.name) / "dist"
        self.build_dir.mkdir()

        patcher = mock.patch("frontdeploy.commands.deploy.check_tools")
        self.check_tools = patcher.start()
        self.addCleanup(patcher.stop)

    def make_config(self, **overrides) -> DeployConfig:
        values = {
            "ssh_host": "deploy@example.com",
            "remote_path": "/var/www/site",
            "build_dir": str(self.build_dir),
            "log_dir": None,
        }
        values.update(overrides)
        return DeployConfig(**values)

    def run_deploy(self, config: DeployConfig, runner: FakeRunner) -> DeployCommand:
        command = DeployCommand(
            config,
            runner=runner,
            console=Console(file=io.StringIO()),
            now=datetime(2024, 3, 5, 14, 7, 9),
        )
        command.run()
        return command

    def assertExitCode(self, config: DeployConfig, runner: FakeRunner, code: int) -> None:
        with self.assertRaises(SystemExit) as cm:
            self.run_deploy(config, runner)
        self.assertEqual(cm.exception.code, code)


class TestDeployScenarios(DeployCommandTestCase):
    def test_dry_run_never_mutates_remote(self) -> None:
        runner = FakeRunner()
        command = self.run_deploy(
            self.make_config(dry_run=True, migrate_command="pm2 restart app"), runner
        )

        self.assertEqual(runner.kinds, ["build", "rsync"])
        self.assertIn("--dry-run", runner.commands[1])
        statuses = {stage.stage: stage.status for stage in command.report.stages}
        self.assertEqual(
            statuses,
            {
                "build": StageStatus.SUCCESS,
                "backup": StageStatus.DRY_RUN,
                "sync": StageStatus.DRY_RUN,
                "permissions": StageStatus.DRY_RUN,
                "migrate": StageStatus.DRY_RUN,
            },
        )
        self.assertIn("Would back up", command.report.stages[1].message)

    def test_full_run_sequence(self) -> None:
        runner = FakeRunner()
        command = self.run_deploy(self.make_config(migrate_command="pm2 restart app"), runner)

        self.assertEqual(runner.kinds, ["build", "backup", "rsync", "chown", "migrate"])
        self.assertIn("backup_20240305_140709.tar.gz", runner.remote_commands[0])
        self.assertEqual(runner.remote_commands[-1], "cd /var/www/site && pm2 restart app")
        self.assertEqual(command.report.warnings, [])

    def test_no_migrate_command(self) -> None:
        runner = FakeRunner()
        self.run_deploy(self.make_config(), runner)
        self.assertEqual(runner.kinds, ["build", "backup", "rsync", "chown"])

    def test_backup_and_chown_failures_only_warn(self) -> None:
        runner = FakeRunner(returncodes={"tar -czf": 2, "chown": 1})
        command = self.run_deploy(self.make_config(migrate_command="pm2 restart app"), runner)

        self.assertEqual(runner.kinds, ["build", "backup", "rsync", "chown", "migrate"])
        self.assertEqual([w.stage for w in command.report.warnings], ["backup", "permissions"])

    def test_rerun_issues_same_sync(self) -> None:
        first, second = FakeRunner(), FakeRunner()
        self.run_deploy(self.make_config(), first)
        self.run_deploy(self.make_config(), second)
        self.assertEqual(first.commands, second.commands)


class TestDeployFailures(DeployCommandTestCase):
    def test_build_failure_issues_no_remote_command(self) -> None:
        runner = FakeRunner(returncodes={"npm run build": 1})
        self.assertExitCode(self.make_config(), runner, 3)
        self.assertEqual(runner.kinds, ["build"])

    def test_missing_build_output(self) -> None:
        runner = FakeRunner()
        config = self.make_config(build_dir=str(Path(self.tmp.name) / "missing"))
        self.assertExitCode(config, runner, 4)
        self.assertEqual(runner.kinds, ["build"])

    def test_sync_failure_skips_migrate(self) -> None:
        runner = FakeRunner(returncodes={"rsync": 23})
        self.assertExitCode(self.make_config(migrate_command="pm2 restart app"), runner, 5)
        self.assertEqual(runner.kinds, ["build", "backup", "rsync"])

    def test_migrate_failure(self) -> None:
        runner = FakeRunner(returncodes={"pm2": 1})
        self.assertExitCode(self.make_config(migrate_command="pm2 restart app"), runner, 6)
        self.assertEqual(runner.kinds[-1], "migrate")

    def test_missing_tool_aborts_before_build(self) -> None:
        from frontdeploy.exceptions import ToolNotFoundError

        self.check_tools.side_effect = ToolNotFoundError("rsync")
        runner = FakeRunner()
        self.assertExitCode(self.make_config(), runner, 1)
        self.assertEqual(runner.commands, [])

    def test_interrupt_exits_130(self) -> None:
        def interrupt(command):
            raise KeyboardInterrupt

        self.assertExitCode(self.make_config(), FakeRunner(on_run=interrupt), 130)


class TestConsoleOutput(DeployCommandTestCase):
    def deploy_with_output(self, config: DeployConfig, runner: FakeRunner, verbose: bool = False):
        output = io.StringIO()
        command = DeployCommand(
            config,
            verbose=verbose,
            runner=runner,
            console=Console(file=output, width=200),
            now=datetime(2024, 3, 5, 14, 7, 9),
        )
        try:
            command.run()
        finally:
            self.output = output.getvalue()
        return command

    def test_bracketed_values_printed_literally(self) -> None:
        for verbose in (False, True):
            runner = FakeRunner()
            config = self.make_config(
                migrate_command="echo [/done]", remote_path="/var/www/[site]"
            )
            self.deploy_with_output(config, runner, verbose=verbose)

            self.assertEqual(runner.kinds, ["build", "backup", "rsync", "chown", "migrate"])
            self.assertIn("echo [/done]", self.output)

    def test_bracketed_failure_keeps_exit_code(self) -> None:
        runner = FakeRunner(returncodes={"[/x]": 1})
        config = self.make_config(build_command="echo [/x] && false")
        with self.assertRaises(SystemExit) as cm:
            self.deploy_with_output(config, runner)
        self.assertEqual(cm.exception.code, 3)
        self.assertIn("echo [/x] && false", self.output)

    def test_error_before_logger_is_reported(self) -> None:
        runner = FakeRunner()
        with mock.patch(
            "frontdeploy.base.base_command.show_header", side_effect=RuntimeError("boom [/x]")
        ):
            with self.assertRaises(SystemExit) as cm:
                self.deploy_with_output(self.make_config(), runner)

        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(runner.commands, [])
        self.assertIn("RuntimeError: boom [/x]", self.output)


class TestDeployLogFile(DeployCommandTestCase):
    def test_log_file_written(self) -> None:
        log_dir = Path(self.tmp.name) / "logs"
        command = self.run_deploy(self.make_config(log_dir=str(log_dir)), FakeRunner())

        log_path = command.logger.log_path
        self.assertTrue(str(log_path).startswith(str(log_dir)))
        content = log_path.read_text()
        self.assertIn("Step: Building project", content)
        self.assertIn("Executing: npm ci && npm run build", content)
        self.assertIn("Status: SUCCESS", content)

    def test_failure_recorded_in_log(self) -> None:
        log_dir = Path(self.tmp.name) / "logs"
        runner = FakeRunner(returncodes={"rsync": 23})
        command = DeployCommand(
            self.make_config(log_dir=str(log_dir)),
            runner=runner,
            console=Console(file=io.StringIO()),
        )
        with self.assertRaises(SystemExit):
            command.run()

        content = command.logger.log_path.read_text()
        self.assertIn("ERROR OCCURRED", content)
        self.assertIn("Status: FAILED", content)


if __name__ == "__main__":
    unittest.main()
