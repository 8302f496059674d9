"""
Base Command Class

Abstract base for frontdeploy commands.
Provides logger setup, header display and error-to-exit-code mapping.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from frontdeploy.exceptions import FrontDeployError
from frontdeploy.logger import DeployLogger
from frontdeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling
    - Consistent structure
    """

    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.verbose = verbose
        self.console = console or Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str, log_dir: Optional[str] = None) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            command_name: Command name, used in the log file name
            log_dir: Root directory for log files (None: console only)

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            command_name, log_dir=log_dir, verbose=self.verbose, output=self.console
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_log_location(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {escape(str(self.logger.log_path))}\n")

    def handle_error(self, error: Union[Exception, str], context: Optional[str] = None) -> None:
        """
        Handle error with consistent formatting.

        Args:
            error: Exception or message
            context: Optional context message
        """
        if self.logger:
            self.logger.log_error(str(error), context=context)
        else:
            self.print_error(str(error))
            if context:
                self.print_dim(f"Context: {context}")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Every failure ends in SystemExit with the code of its error kind.
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log("Interrupted by user", "ERROR")
                self.logger.has_errors = True
            self.print_log_location()
            raise SystemExit(130)
        except SystemExit:
            raise
        except FrontDeployError as e:
            self.handle_error(e.message, context=e.context)
            self.print_log_location()
            raise SystemExit(e.exit_code)
        except PermissionError as e:
            self.handle_error(f"Permission denied: {e}")
            self.print_dim("Try running with appropriate permissions")
            self.print_log_location()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.handle_error(f"{error_type}: {e}")
            self.print_log_location()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
