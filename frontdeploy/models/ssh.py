"""
SSH Connection Model

Builds the ssh argv shared by remote commands and rsync's transport.
"""

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from frontdeploy.constants import SSH_OPTIONS


@dataclass(frozen=True)
class SSHConnection:
    """SSH connection details for the deploy target."""

    host: str
    key_path: Optional[str] = None
    port: Optional[int] = None

    @property
    def key_path_expanded(self) -> Optional[Path]:
        """Get expanded key path (resolves ~)."""
        if self.key_path:
            return Path(self.key_path).expanduser()
        return None

    @property
    def transport_args(self) -> list[str]:
        """ssh arguments without the destination."""
        args = ["ssh", *SSH_OPTIONS]
        if self.key_path_expanded:
            args.extend(["-i", str(self.key_path_expanded)])
        if self.port:
            args.extend(["-p", str(self.port)])
        return args

    @property
    def ssh_command_prefix(self) -> list[str]:
        """Get SSH command prefix for subprocess."""
        return self.transport_args + [self.host]

    @property
    def rsync_shell(self) -> str:
        """Value for rsync's -e option."""
        return shlex.join(self.transport_args)

    def build_command(self, remote_command: str) -> list[str]:
        """Build full SSH command with remote command."""
        return self.ssh_command_prefix + [remote_command]

    def __repr__(self) -> str:
        return f"SSHConnection(host={self.host}, port={self.port or 22})"
