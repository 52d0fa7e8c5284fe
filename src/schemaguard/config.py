"""Configuration management for schemaguard."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from schemaguard.exceptions import ConfigError

SCHEMAGUARD_DIR = ".schemaguard"
CONFIG_FILE = "config.json"

OutputFormat = Literal["text", "markdown", "json"]


class ProjectConfig(BaseModel):
    """Full project configuration."""

    # Placeholder handed to the changelog parser for dbms-scoped properties.
    # No connection is ever made.
    database: str = "postgresql"
    fail_on_breaking: bool = False
    report_all: bool = False
    output_format: OutputFormat = "text"
    changelog_suffixes: list[str] = Field(default_factory=lambda: [".xml"])
    exclude_patterns: list[str] = Field(
        default_factory=lambda: [
            ".git",
            ".schemaguard",
            "node_modules",
            "target",
            "build",
        ]
    )


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .schemaguard directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / SCHEMAGUARD_DIR).is_dir():
            return current
        current = current.parent
    if (current / SCHEMAGUARD_DIR).is_dir():
        return current
    return None


def get_schemaguard_dir(root: Path) -> Path:
    """Get the .schemaguard directory for a project root."""
    return root / SCHEMAGUARD_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .schemaguard/config.json, or return defaults."""
    config_path = get_schemaguard_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return ProjectConfig()
    try:
        data = json.loads(config_path.read_text())
        return ProjectConfig(**data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .schemaguard/config.json."""
    sg_dir = get_schemaguard_dir(root)
    sg_dir.mkdir(parents=True, exist_ok=True)
    config_path = sg_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'fail_on_breaking')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e
