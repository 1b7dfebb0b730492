"""Configuration file parsing utilities."""

import contextlib
import json
import os
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Error loading or parsing configuration."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


def load_json(path: Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON as a dictionary

    Raises:
        ConfigError: If the file cannot be read, parsed, or is not an object
    """
    if not path.exists():
        raise ConfigError(f"File not found: {path}", path)

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}", path) from e

    if not content.strip():
        return {}

    try:
        result = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", path) from e

    if not isinstance(result, dict):
        raise ConfigError(f"JSON file must contain an object: {path}", path)
    return result


def load_json_or_empty(path: Path) -> dict[str, Any]:
    """Load a JSON file, returning an empty dict if it doesn't exist.

    Raises:
        ConfigError: If the file exists but is invalid
    """
    if not path.exists():
        return {}
    return load_json(path)


def save_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Save data to a JSON file.

    Data is written to a sibling temporary file which then replaces the
    target, so a failed write leaves any existing file untouched.

    Args:
        path: Path to write to
        data: Data to serialize
        indent: JSON indentation level

    Raises:
        ConfigError: If the file cannot be written
    """
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, default=str)
            f.write("\n")
        os.replace(tmp_path, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Cannot write {path}: {e}", path) from e
