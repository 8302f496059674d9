import io
import os
import unittest
from unittest import mock

import click
from click.testing import CliRunner
from rich.console import Console

from frontdeploy.main import cli, main
from tests.fakes import FakeRunner

REQUIRED = ["--host", "deploy@example.com", "--remote-path", "/var/www/site"]


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.cli_runner = CliRunner()
        self.fake = FakeRunner()

        patchers = [
            mock.patch("frontdeploy.commands.deploy.CommandRunner", side_effect=self._make_runner),
            mock.patch("frontdeploy.commands.deploy.check_tools"),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def _make_runner(self, logger=None):
        self.fake.logger = logger
        return self.fake

    def invoke(self, args, build_output=True):
        with self.cli_runner.isolated_filesystem():
            if build_output:
                os.mkdir("dist")
            return self.cli_runner.invoke(cli, args + ["--no-log-file"])

    def parse_error(self, args) -> str:
        with self.assertRaises(click.UsageError) as cm:
            cli.make_context("frontdeploy", args)
        return cm.exception.message


class TestOptionParsing(CliTestCase):
    def test_help(self) -> None:
        for flag in ("-h", "--help"):
            result = self.cli_runner.invoke(cli, [flag])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("--remote-path", result.output)
        self.assertEqual(self.fake.commands, [])

    def test_missing_host_or_path(self) -> None:
        for args in (
            ["--remote-path", "/var/www/site"],
            ["--host", "deploy@example.com"],
            [],
        ):
            result = self.invoke(args)
            self.assertEqual(result.exit_code, 2, args)
            self.assertIn("missing required option", result.output)
        self.assertEqual(self.fake.commands, [])

    def test_missing_value_at_end(self) -> None:
        for flag in ("--host", "--remote-path", "--build", "--build-dir", "--migrate"):
            self.assertEqual(self.parse_error(REQUIRED + [flag]), f"missing value for {flag}")

    def test_flag_as_value(self) -> None:
        message = self.parse_error(["--host", "--remote-path", "/var/www/site"])
        self.assertEqual(message, "missing value for --host")

        message = self.parse_error(REQUIRED + ["--migrate", "--dry-run"])
        self.assertEqual(message, "missing value for --migrate")

    def test_flag_as_value_launches_nothing(self) -> None:
        result = self.invoke(REQUIRED + ["--build", "--dry-run"])
        self.assertEqual(result.exit_code, 2)
        self.assertEqual(self.fake.commands, [])

    def test_unknown_option(self) -> None:
        self.assertEqual(self.parse_error(REQUIRED + ["--bogus"]), "unknown option --bogus")
        self.assertEqual(self.parse_error(REQUIRED + ["stray"]), "unknown option stray")

    def test_values_may_contain_flags_later_in_string(self) -> None:
        ctx = cli.make_context(
            "frontdeploy", REQUIRED + ["--migrate", "npm run migrate -- --force"]
        )
        self.assertEqual(ctx.params["migrate"], "npm run migrate -- --force")

    def test_empty_migrate_allowed(self) -> None:
        ctx = cli.make_context("frontdeploy", REQUIRED + ["--migrate", ""])
        self.assertEqual(ctx.params["migrate"], "")


class TestCliRuns(CliTestCase):
    def test_dry_run(self) -> None:
        result = self.invoke(REQUIRED + ["--dry-run"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.fake.kinds, ["build", "rsync"])
        self.assertIn("--dry-run", self.fake.commands[1])

    def test_full_run_with_migrate(self) -> None:
        result = self.invoke(REQUIRED + ["--migrate", "pm2 restart app"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.fake.kinds, ["build", "backup", "rsync", "chown", "migrate"])
        self.assertEqual(self.fake.remote_commands[-1], "cd /var/www/site && pm2 restart app")

    def test_custom_build_and_no_chown(self) -> None:
        result = self.invoke(
            REQUIRED + ["--build", "yarn build", "--build-dir", "dist", "--no-chown"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.fake.commands[0], "yarn build")
        self.assertNotIn("chown", self.fake.kinds)

    def test_sync_failure_exit_code(self) -> None:
        self.fake.returncodes = {"rsync": 23}
        result = self.invoke(REQUIRED + ["--migrate", "pm2 restart app"])
        self.assertEqual(result.exit_code, 5)
        self.assertNotIn("migrate", self.fake.kinds)

    def test_missing_build_output_exit_code(self) -> None:
        result = self.invoke(REQUIRED, build_output=False)
        self.assertEqual(result.exit_code, 4)
        self.assertEqual(self.fake.kinds, ["build"])

    def test_empty_build_dir_launches_nothing(self) -> None:
        result = self.invoke(REQUIRED + ["--build-dir", ""])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("--build-dir", result.output)
        self.assertEqual(self.fake.commands, [])

    def test_config_file(self) -> None:
        with self.cli_runner.isolated_filesystem():
            os.mkdir("dist")
            with open("frontdeploy.yml", "w") as f:
                f.write("host: deploy@example.com\nremote_path: /srv/site\nowner: ''\n")
            result = self.cli_runner.invoke(
                cli, ["--remote-path", "/var/www/site", "--no-log-file"]
            )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.fake.commands[2][-1], "deploy@example.com:/var/www/site/")
        self.assertNotIn("chown", self.fake.kinds)


class TestMainEntryPoint(unittest.TestCase):
    def test_unexpected_error_with_brackets(self) -> None:
        output = io.StringIO()
        with mock.patch("frontdeploy.main.console", Console(file=output)), mock.patch(
            "frontdeploy.main.cli", side_effect=RuntimeError("bad [/value]")
        ):
            with self.assertRaises(SystemExit) as cm:
                main()
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("bad [/value]", output.getvalue())


if __name__ == "__main__":
    unittest.main()
