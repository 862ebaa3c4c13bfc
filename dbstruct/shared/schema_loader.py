"""YAML loading utilities for schema snapshots and configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError, OutputError


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a YAML document whose root must be a mapping.

    Args:
        schema_path: Path to the YAML file.

    Returns:
        The parsed mapping.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read file: {e}", str(schema_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(schema_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Document root must be a mapping", str(schema_path))

    return data


def dump_schema(schema_path: Path, data: dict[str, Any]) -> None:
    """Write a mapping as YAML, keeping key order."""
    try:
        schema_path.parent.mkdir(parents=True, exist_ok=True)
        schema_path.write_text(
            yaml.safe_dump(data, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
    except OSError as e:
        raise OutputError(f"Failed to write YAML ({e})", str(schema_path)) from e
