"""Configuration loading: YAML file, CLI flags and built-in defaults."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from frontdeploy.constants import DEFAULT_BUILD_DIR, DEFAULT_CONFIG_FILE
from frontdeploy.exceptions import UsageError
from frontdeploy.models.config import DeployConfig
from frontdeploy.models.results import ValidationResult

# config file key -> DeployConfig field
CONFIG_KEYS = {
    "host": "ssh_host",
    "remote_path": "remote_path",
    "build": "build_command",
    "build_dir": "build_dir",
    "migrate": "migrate_command",
    "owner": "owner",
    "ssh_key": "ssh_key",
    "ssh_port": "ssh_port",
    "log_dir": "log_dir",
}

# DeployConfig field -> CLI flag, for error messages
FIELD_FLAGS = {
    "ssh_host": "--host",
    "remote_path": "--remote-path",
}


def load_config_file(path: Optional[str], explicit: bool = False) -> Dict[str, Any]:
    """
    Load the YAML config file and map its keys to DeployConfig fields.

    Args:
        path: File path, None means the default file in the working directory
        explicit: True when the user named the file; a missing file is then an error

    Returns:
        Dict of DeployConfig field values (empty when there is no file)

    Raises:
        UsageError: If the file is missing (when explicit), unreadable or invalid
    """
    config_path = Path(path or DEFAULT_CONFIG_FILE)
    if not config_path.exists():
        if explicit:
            raise UsageError(f"Config file not found: {config_path}")
        return {}

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise UsageError(f"Invalid YAML in {config_path}", context=str(e))

    result = validate_config_data(data)
    if result.has_errors:
        raise UsageError(
            f"Invalid config file {config_path}", context="; ".join(result.errors)
        )

    return {CONFIG_KEYS[key]: value for key, value in data.items()}


def validate_config_data(data: Any) -> ValidationResult:
    """Check config file structure and value types."""
    result = ValidationResult(is_valid=True)

    if not isinstance(data, dict):
        result.add_error("top level must be a mapping")
        return result

    for key, value in data.items():
        if key not in CONFIG_KEYS:
            result.add_error(f"unknown key '{key}'")
        elif key == "ssh_port":
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                result.add_error("'ssh_port' must be an integer")
        elif value is not None and not isinstance(value, str):
            result.add_error(f"'{key}' must be a string")

    return result


def build_config(
    cli_values: Dict[str, Any],
    file_values: Optional[Dict[str, Any]] = None,
    dry_run: bool = False,
) -> DeployConfig:
    """
    Merge CLI flags over file values over defaults, then validate.

    A CLI value of None means the flag was not given.

    Raises:
        UsageError: If a required option is missing or a value is malformed
    """
    merged: Dict[str, Any] = {}
    for source in (file_values or {}, cli_values):
        merged.update({key: value for key, value in source.items() if value is not None})

    for field_name in ("ssh_host", "remote_path"):
        if not merged.get(field_name):
            raise UsageError(
                f"missing required option {FIELD_FLAGS[field_name]}",
                context="--host and --remote-path are required",
            )

    build_dir = merged.get("build_dir", DEFAULT_BUILD_DIR)
    if not str(build_dir).strip():
        raise UsageError("invalid --build-dir, expected a non-empty directory")

    result = validate_target(merged["ssh_host"], merged["remote_path"])
    if result.has_errors:
        raise UsageError(result.errors[0])

    return DeployConfig(dry_run=dry_run, **merged)


def validate_target(ssh_host: str, remote_path: str) -> ValidationResult:
    """Check the user@host and absolute-path shapes."""
    result = ValidationResult(is_valid=True)

    user, sep, host = ssh_host.partition("@")
    if not sep or not user or not host or "@" in host:
        result.add_error(f"invalid --host '{ssh_host}', expected user@host")

    if not remote_path.startswith("/"):
        result.add_error(f"invalid --remote-path '{remote_path}', expected an absolute path")

    return result
