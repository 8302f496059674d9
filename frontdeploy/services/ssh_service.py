"""SSH service for executing commands on the deploy target."""

import shlex
from typing import Optional

from frontdeploy.models.results import ExecutionResult
from frontdeploy.models.ssh import SSHConnection
from frontdeploy.services.runner import CommandRunner


class SSHService:
    """Service for SSH operations."""

    def __init__(self, connection: SSHConnection, runner: CommandRunner):
        """
        Initialize SSH service.

        Args:
            connection: Target host and transport options
            runner: Launcher used for the ssh process
        """
        self.connection = connection
        self.runner = runner

    def execute_command(self, command: str, cwd: Optional[str] = None) -> ExecutionResult:
        """
        Execute command on the remote host via SSH.

        The command string is handed to the remote shell as-is.

        Args:
            command: Remote shell command
            cwd: Remote directory to change into first

        Returns:
            ExecutionResult with the ssh exit status
        """
        if cwd:
            command = f"cd {shlex.quote(cwd)} && {command}"
        return self.runner.run(self.connection.build_command(command))
