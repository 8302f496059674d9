"""Subprocess launcher shared by every pipeline stage."""

import subprocess
import time
from typing import Optional, Union

from frontdeploy.constants import TERMINATE_GRACE_SECONDS
from frontdeploy.logger import DeployLogger
from frontdeploy.models.results import ExecutionResult


class CommandRunner:
    """
    Runs external commands to completion with inherited stdio.

    A string command goes through the platform shell; a list is executed
    directly. On KeyboardInterrupt the child is terminated (then killed)
    before the interrupt propagates.
    """

    def __init__(self, logger: Optional[DeployLogger] = None):
        self.logger = logger

    def run(self, command: Union[str, list[str]]) -> ExecutionResult:
        """
        Run command and wait for it to exit.

        Args:
            command: Shell string or argv list

        Returns:
            ExecutionResult with the exit status
        """
        shell = isinstance(command, str)
        if self.logger:
            self.logger.log_command(command if shell else " ".join(command))

        start_time = time.time()
        process = subprocess.Popen(command, shell=shell)
        try:
            returncode = process.wait()
        except KeyboardInterrupt:
            self._terminate(process)
            raise

        return ExecutionResult(
            returncode=returncode,
            command=command,
            duration_seconds=time.time() - start_time,
        )

    def _terminate(self, process: subprocess.Popen) -> None:
        """Stop an in-flight child so it is not orphaned."""
        if process.poll() is not None:
            return

        if self.logger:
            self.logger.log(f"Terminating child process {process.pid}", "WARNING")

        process.terminate()
        try:
            process.wait(timeout=TERMINATE_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
