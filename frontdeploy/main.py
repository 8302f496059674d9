#!/usr/bin/env python3
"""frontdeploy CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console
from rich.markup import escape

# Rich-Click: CLI help with colors
import rich_click as click
from click.exceptions import NoSuchOption

from frontdeploy import __version__
from frontdeploy.commands import DeployCommand
from frontdeploy.config_loader import build_config, load_config_file
from frontdeploy.constants import DEFAULT_BUILD_COMMAND, DEFAULT_BUILD_DIR, DEFAULT_OWNER
from frontdeploy.exceptions import UsageError

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.MAX_WIDTH = 100

# OPTIONS: Bold magenta
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"

# HEADERS: Bold cyan
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# HELP TEXT
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_HELPTEXT = ""
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_ERRORS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()


class StrictOptionCommand(click.RichCommand):
    """
    Command that rejects option values which are themselves flags.

    `--host --dry-run` is reported as a missing value rather than
    deploying to a host named "--dry-run". Unknown options and stray
    positional tokens are both reported as unknown options.
    """

    def value_option_names(self) -> set[str]:
        names = set()
        for param in self.params:
            if isinstance(param, click.Option) and not param.is_flag and not param.count:
                names.update(param.opts)
        return names

    def check_option_values(self, ctx: click.Context, args: list[str]) -> None:
        value_options = self.value_option_names()
        i = 0
        while i < len(args):
            token = args[i]
            if token == "--":
                return
            if token in value_options:
                if i + 1 >= len(args) or args[i + 1].startswith("--"):
                    raise click.UsageError(f"missing value for {token}", ctx=ctx)
                i += 2
                continue
            i += 1

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        self.check_option_values(ctx, args)
        try:
            rest = super().parse_args(ctx, args)
        except NoSuchOption as e:
            raise click.UsageError(f"unknown option {e.option_name}", ctx=ctx) from e
        if ctx.args:
            raise click.UsageError(f"unknown option {ctx.args[0]}", ctx=ctx)
        return rest


def handle_cli_errors(func):
    """Decorator to handle errors that escape click's own handling."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {escape(str(e))}\n")

            # Show traceback if DEBUG env var is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.command(
    name="frontdeploy",
    cls=StrictOptionCommand,
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_extra_args": True,
    },
)
@click.option("--host", "host", metavar="USER@SERVER", help="SSH host to deploy to (required)")
@click.option("--remote-path", "remote_path", metavar="PATH", help="Remote path to deploy to (required)")
@click.option("--build", "build", metavar="CMD", help=f'Build command (default: "{DEFAULT_BUILD_COMMAND}")')
@click.option("--build-dir", "build_dir", metavar="DIR", help=f"Build output directory (default: {DEFAULT_BUILD_DIR})")
@click.option("--migrate", "migrate", metavar="CMD", help="Command to run in the remote path after deploy")
@click.option("--dry-run", is_flag=True, help="Preview rsync without making changes")
@click.option("--owner", metavar="USER:GROUP", help=f"Remote owner after sync (default: {DEFAULT_OWNER})")
@click.option("--no-chown", is_flag=True, help="Skip the remote ownership change")
@click.option("--ssh-key", metavar="PATH", help="Private key for ssh and rsync")
@click.option("--ssh-port", type=int, metavar="PORT", help="SSH port")
@click.option("--config", "config_file", metavar="FILE", help="YAML config file (default: ./frontdeploy.yml if present)")
@click.option("--log-dir", metavar="DIR", help="Directory for run logs")
@click.option("--no-log-file", is_flag=True, help="Log to the console only")
@click.option("--verbose", "-v", is_flag=True, help="Show all log output")
@click.version_option(version=__version__, prog_name="frontdeploy")
@click.pass_context
def cli(
    ctx: click.Context,
    host,
    remote_path,
    build,
    build_dir,
    migrate,
    dry_run,
    owner,
    no_chown,
    ssh_key,
    ssh_port,
    config_file,
    log_dir,
    no_log_file,
    verbose,
):
    """
    Build a frontend project and sync it to a server over SSH

    \b
    Steps:
    1. Run the build command locally
    2. Archive the current remote directory into <remote-path>/backups/
    3. rsync the build directory (mirror, with --delete)
    4. chown the remote path (best effort)
    5. Run the migrate command in the remote path (if given)

    \b
    Examples:
      frontdeploy --host deploy@example.com --remote-path /var/www/site --dry-run
      frontdeploy --host deploy@example.com --remote-path /var/www/site \\
          --migrate "pm2 restart app"
    """
    try:
        file_values = load_config_file(config_file, explicit=config_file is not None)
        config = build_config(
            {
                "ssh_host": host,
                "remote_path": remote_path,
                "build_command": build,
                "build_dir": build_dir,
                "migrate_command": migrate,
                "owner": "" if no_chown else owner,
                "ssh_key": ssh_key,
                "ssh_port": ssh_port,
                "log_dir": "" if no_log_file else log_dir,
            },
            file_values,
            dry_run=dry_run,
        )
    except UsageError as e:
        raise click.UsageError(e.format_message(), ctx=ctx) from e

    DeployCommand(config, verbose=verbose).run()


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
