"""
Result Models

Dataclass models for subprocess results and per-stage outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class StageStatus(Enum):
    """Outcome of one pipeline stage."""

    SUCCESS = "success"
    WARNING = "warning"
    SKIPPED = "skipped"
    DRY_RUN = "dry-run"


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation has errors."""
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)})"


@dataclass
class ExecutionResult:
    """Result of a command execution (local shell, ssh, rsync)."""

    returncode: int
    command: Union[str, list[str]] = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    @property
    def command_line(self) -> str:
        if isinstance(self.command, str):
            return self.command
        return " ".join(self.command)

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command_line[:50]}...')"


@dataclass
class StageResult:
    """Outcome of a single pipeline stage."""

    stage: str
    status: StageStatus
    message: str = ""

    @property
    def is_warning(self) -> bool:
        return self.status == StageStatus.WARNING


@dataclass
class DeployReport:
    """Ordered record of every stage a run went through."""

    host: str
    remote_path: str
    dry_run: bool = False
    stages: list[StageResult] = field(default_factory=list)

    def record(self, result: StageResult) -> StageResult:
        self.stages.append(result)
        return result

    @property
    def warnings(self) -> list[StageResult]:
        return [stage for stage in self.stages if stage.is_warning]

    @property
    def stage_names(self) -> list[str]:
        return [stage.stage for stage in self.stages]

    def __repr__(self) -> str:
        return f"DeployReport(host={self.host}, stages={len(self.stages)}, warnings={len(self.warnings)})"
