"""Import objects by dotted path.

Accepts both ``package.module:Name`` and ``package.module.Name``. For the
dotted form the longest importable module prefix is used, so nested
attributes (``package.module.Outer.Inner``) resolve too.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any, List

logger = logging.getLogger(__name__)


def _walk(obj: Any, attrs: List[str], path: str) -> Any:
    for attr in attrs:
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise ImportError(f"'{path}' has no attribute '{attr}'") from exc
    return obj


def import_object(path: str) -> Any:
    """Import and return the object named by ``path``.

    Raises:
        ImportError: If no module prefix imports or an attribute is missing
    """
    if not path or not isinstance(path, str):
        raise ImportError(f"Invalid import path: {path!r}")

    if ":" in path:
        module_path, _, attr_path = path.partition(":")
        module = importlib.import_module(module_path)
        return _walk(module, [a for a in attr_path.split(".") if a], path)

    parts = path.split(".")
    for i in range(len(parts), 0, -1):
        module_path = ".".join(parts[:i])
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as exc:
            # Only swallow "this prefix is not a module"; errors raised while
            # executing an existing module must propagate.
            if exc.name is not None and not module_path.startswith(exc.name):
                raise
            logger.debug("No module %s while importing %s", module_path, path)
            continue
        return _walk(module, parts[i:], path)
    raise ImportError(f"No importable module found for '{path}'")


__all__ = ["import_object"]
