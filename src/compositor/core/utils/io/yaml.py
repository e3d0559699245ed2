"""YAML file reading."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns ``default`` if the file is missing, empty or invalid, unless
    ``raise_on_error`` is True.

    Args:
        path: YAML file path to read
        default: Value to return if the file is missing or invalid
        raise_on_error: If True, propagate exceptions instead of returning default

    Examples:
        >>> config = read_yaml(Path("compositor.yaml"), default={})
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


__all__ = ["read_yaml"]
