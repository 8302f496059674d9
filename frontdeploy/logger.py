"""
Logging system for frontdeploy
Writes a timestamped log file per run and keeps console output clean
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from frontdeploy.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()


class DeployLogger:
    """
    Manages logging for a deploy run
    - Writes all messages to a log file in real-time (when log_dir is set)
    - Shows clean step/success/warning UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        operation: str,
        log_dir: Optional[str] = None,
        verbose: bool = False,
        output: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'deploy')
            log_dir: Root directory for log files, None disables the file log
            verbose: If True, mirror every log line to the console
            output: Console to print to (defaults to the module console)
        """
        self.operation = operation
        self.verbose = verbose
        self.console = output or console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        if log_dir:
            # Structure: {log_dir}/{date}/{time}_{operation}.log
            now = datetime.now()
            logs_dir = Path(log_dir) / now.strftime(LOG_DATE_FORMAT)
            logs_dir.mkdir(parents=True, exist_ok=True)

            self.log_path = logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"
            self.log_file = open(self.log_path, "w", buffering=1)
            self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
frontdeploy Log
{"=" * 80}
Operation: {self.operation}
Working directory: {Path.cwd()}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{escape(message)}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{escape(message)}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{escape(message)}[/dim]")
            else:
                self.console.print(message, markup=False)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        if self.log_file:
            error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
            if context:
                error_block += f"\nContext: {context}\n"
            error_block += f"{'!' * 80}\n\n"

            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            self.console.print()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None
