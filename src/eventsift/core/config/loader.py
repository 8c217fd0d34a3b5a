"""
Configuration and input file loading.

Loads and validates YAML configuration into Pydantic models, and reads the
venue directory and raw field maps the CLI feeds into the pipeline.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..match.base import Venue
from .models import AppConfig

DEFAULT_APP_CONFIG = Path("configs/app.yaml")

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or validation error."""

    def __init__(self, message: str, path: Path | None = None, details: str | None = None):
        self.path = path
        self.details = details
        super().__init__(message)


def _load_yaml_file(path: Path) -> Any:
    """Load a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML contents ({} for an empty file)

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data is not None else {}
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {path}",
            path=path,
            details=str(e),
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read {path}",
            path=path,
            details=str(e),
        ) from e


def _load_json_file(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"File not found: {path}", path=path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path}",
            path=path,
            details=str(e),
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read {path}",
            path=path,
            details=str(e),
        ) from e


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in string values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2) or ""
        return os.environ.get(var_name, default)

    if isinstance(data, str):
        return _ENV_PATTERN.sub(replacer, data)
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


def load_app_config(
    path: Path | str | None = None,
    expand_env: bool = True,
) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        path: Path to app.yaml (default: configs/app.yaml)
        expand_env: Whether to expand environment variables

    Returns:
        Validated AppConfig instance; defaults when the file is absent

    Raises:
        ConfigError: If configuration is invalid
    """
    path = DEFAULT_APP_CONFIG if path is None else Path(path)

    if not path.exists():
        return AppConfig()

    data = _load_yaml_file(path)

    if expand_env:
        data = _expand_env_vars(data)

    if not isinstance(data, dict):
        raise ConfigError(f"App configuration in {path} must be a mapping", path=path)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid app configuration in {path}",
            path=path,
            details=str(e),
        ) from e


def load_venues(path: Path | str) -> list[Venue]:
    """Load a venue directory from YAML or JSON.

    The file holds either a list of venues or a mapping with a ``venues``
    list. Keys a Venue does not know are ignored.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        data = _load_json_file(path)
    else:
        data = _load_yaml_file(path)

    if isinstance(data, dict):
        data = data.get("venues", [])

    if not isinstance(data, list):
        raise ConfigError(f"Venue file {path} must contain a list of venues", path=path)

    venues: list[Venue] = []
    for index, entry in enumerate(data):
        try:
            venues.append(Venue.model_validate(entry))
        except ValidationError as e:
            raise ConfigError(
                f"Invalid venue #{index} in {path}",
                path=path,
                details=str(e),
            ) from e

    return venues


def load_raw_fields(path: Path | str) -> dict[str, Any]:
    """Load a raw field map (a JSON object) from disk.

    Raises:
        ConfigError: If the file is missing, unparseable or not an object
    """
    path = Path(path)
    data = _load_json_file(path)

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object", path=path)

    return data
