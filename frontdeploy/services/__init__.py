"""
frontdeploy Services Layer

One service per pipeline stage, all launching processes through CommandRunner.
"""

from .backup_service import BackupService
from .build_service import BuildService
from .migrate_service import MigrateService
from .runner import CommandRunner
from .ssh_service import SSHService
from .sync_service import SyncService

__all__ = [
    "BackupService",
    "BuildService",
    "CommandRunner",
    "MigrateService",
    "SSHService",
    "SyncService",
]
