"""stdlib logging setup for command-line use.

Library code only ever calls ``logging.getLogger(__name__)``; handlers are
installed here by the CLI.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_INSTALLED_HANDLER: Optional[logging.Handler] = None


def level_from_name(name: str) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Handler:
    """Install one handler on the ``compositor`` logger.

    Logs go to stderr (stdout stays clean for ``--json`` output) or to
    ``log_path`` when given. Calling again replaces the previously installed
    handler, so repeated CLI invocations in one process do not duplicate
    output.
    """
    global _INSTALLED_HANDLER

    logger = logging.getLogger("compositor")
    logger.setLevel(level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    _INSTALLED_HANDLER = handler
    return handler


__all__ = ["LOG_FORMAT", "configure_logging", "level_from_name"]
