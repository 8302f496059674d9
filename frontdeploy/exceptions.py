"""
frontdeploy Exception Hierarchy

Every fatal failure in a deploy run is one of these. Each kind carries the
process exit code the CLI terminates with.
"""

from typing import Optional


class FrontDeployError(Exception):
    """Base exception for all frontdeploy errors."""

    exit_code = 1

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class UsageError(FrontDeployError):
    """Raised when command-line input or the config file is invalid."""

    exit_code = 2


class ToolNotFoundError(FrontDeployError):
    """Raised when a required external tool is not on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(
            f"Required tool '{tool}' not found on PATH",
            context=f"Install {tool} and retry",
        )


class BuildError(FrontDeployError):
    """Raised when the build command exits non-zero."""

    exit_code = 3

    def __init__(self, command: str, returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Build failed with exit code {returncode}",
            context=f"Command: {command}",
        )


class MissingBuildOutputError(BuildError):
    """Raised when the build succeeded but left no output directory."""

    exit_code = 4

    def __init__(self, build_dir: str):
        self.build_dir = build_dir
        FrontDeployError.__init__(
            self,
            f"Build directory '{build_dir}' not found",
            context="The build command exited 0 but produced no output",
        )


class SyncError(FrontDeployError):
    """Raised when rsync exits non-zero."""

    exit_code = 5

    def __init__(self, target: str, returncode: int):
        self.target = target
        self.returncode = returncode
        super().__init__(
            f"Sync to {target} failed with exit code {returncode}",
            context="Remote files may be partially updated; re-run to converge",
        )


class MigrateError(FrontDeployError):
    """Raised when the remote post-deploy command exits non-zero."""

    exit_code = 6

    def __init__(self, command: str, returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Migration command failed with exit code {returncode}",
            context=f"Command: {command} (remote files are already updated)",
        )
