"""Local build step."""

from pathlib import Path

from frontdeploy.exceptions import BuildError, MissingBuildOutputError
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import StageResult, StageStatus
from frontdeploy.services.runner import CommandRunner


class BuildService:
    """Runs the build command and checks that it produced output."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def build(self, config: DeployConfig) -> StageResult:
        """
        Run the build command in the current working directory.

        Raises:
            BuildError: If the command exits non-zero
            MissingBuildOutputError: If build_dir is empty or absent afterwards
        """
        result = self.runner.run(config.build_command)
        if result.is_failure:
            raise BuildError(config.build_command, result.returncode)

        if not config.build_dir.strip() or not Path(config.build_dir).is_dir():
            raise MissingBuildOutputError(config.build_dir)

        return StageResult(
            stage="build",
            status=StageStatus.SUCCESS,
            message=f"Build output ready in {config.build_dir}/ ({result.duration_seconds:.1f}s)",
        )
