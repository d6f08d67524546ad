"""Data handler module for serialization of migration data.

This module provides a consistent interface for saving data as JSON,
with special handling for Pydantic models.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from c2w import config
from c2w.models.migration_error import MigrationError


def _json_default(value: Any) -> Any:
    """Best-effort encoder for non-JSON-native objects.

    - Convert pathlib.Path to str
    - Convert Pydantic models to dict
    - Fallback to string representation for unknown objects
    """
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    return str(value)


def save(
    data: Any,
    filepath: str | Path,
    indent: int = 2,
    ensure_ascii: bool = False,
) -> Path:
    """Save data to a JSON file, automatically handling Pydantic models.

    Args:
        data: The data to save (Pydantic model or any JSON-serializable data)
        filepath: Destination file; parent directories are created
        indent: JSON indentation level
        ensure_ascii: Whether to escape non-ASCII characters

    Returns:
        The path that was written

    Raises:
        MigrationError: If saving fails

    """
    filepath = Path(filepath)

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, mode="json")

        with filepath.open("w", encoding="utf-8") as f:
            json.dump(
                data,
                f,
                indent=indent,
                ensure_ascii=ensure_ascii,
                default=_json_default,
            )

        config.logger.info("Saved data to %s", filepath)
    except Exception as e:
        msg = f"Failed to save data to {filepath}"
        raise MigrationError(msg) from e

    return filepath


def load_json(filepath: str | Path) -> Any:
    """Load a JSON document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MigrationError: If the file cannot be parsed

    """
    filepath = Path(filepath)
    try:
        with filepath.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        msg = f"Failed to parse JSON from {filepath}"
        raise MigrationError(msg) from e
