"""
frontdeploy Domain Models

Dataclass-based models for configuration, connections and results.
"""

from .config import DeployConfig
from .results import (
    DeployReport,
    ExecutionResult,
    StageResult,
    StageStatus,
    ValidationResult,
)
from .ssh import SSHConnection

__all__ = [
    # Config
    "DeployConfig",
    # Results
    "DeployReport",
    "ExecutionResult",
    "StageResult",
    "StageStatus",
    "ValidationResult",
    # SSH
    "SSHConnection",
]
