"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from compositor.core.composition import Compositor
from compositor.core.config import ConfigManager
from compositor.core.exceptions import InvalidRequestError
from compositor.core.utils.io import read_yaml


def load_config(args: argparse.Namespace) -> Dict[str, Any]:
    return ConfigManager(getattr(args, "config_paths", None) or []).load_config()


def extend_import_path(args: argparse.Namespace) -> None:
    """Make role modules under --import-path directories importable."""
    for raw in reversed(getattr(args, "import_paths", None) or []):
        path = str(Path(raw).resolve())
        if path not in sys.path:
            sys.path.insert(0, path)


def build_compositor(args: argparse.Namespace) -> Compositor:
    """Create a compositor from config, honouring a --basename override."""
    config = load_config(args)
    section = dict(config.get("compositor") or {})
    if getattr(args, "basename", None):
        section["basename"] = args.basename
    extend_import_path(args)
    return Compositor.from_config(section)


def _request_item(raw: Any, path: Path) -> Any:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict) and "role" in raw:
        return (raw["role"], raw.get("moniker") or raw["role"], raw.get("parameters") or {})
    raise InvalidRequestError(
        f"Invalid request item in {path}: {raw!r}",
        context={"path": str(path), "item": repr(raw)},
    )


def read_request_items(args: argparse.Namespace) -> List[Any]:
    """Collect request items from positional roles and the --request file."""
    items: List[Any] = list(getattr(args, "roles", None) or [])
    request_file = getattr(args, "request_file", None)
    if request_file:
        path = Path(request_file)
        try:
            data = read_yaml(path, default=[], raise_on_error=True)
        except FileNotFoundError as exc:
            raise InvalidRequestError(f"Request file not found: {path}", context={"path": str(path)}) from exc
        if not isinstance(data, list):
            raise InvalidRequestError(
                f"Request file {path} must contain a list of items",
                context={"path": str(path)},
            )
        items.extend(_request_item(raw, path) for raw in data)
    return items


__all__ = ["build_compositor", "extend_import_path", "load_config", "read_request_items"]
