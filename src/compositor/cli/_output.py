"""Unified CLI output formatting utilities.

Every command prints either human-readable text or, with ``--json``, a
single JSON document on stdout. Errors go to stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from compositor.core.exceptions import CompositorError


class OutputFormatter:
    """Output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str) -> None:
        """Print ``data`` as JSON, or ``message`` in text mode."""
        if self.json_mode:
            print(json.dumps({"status": "success", **data}, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, CompositorError):
                payload = {"status": "error", **error.to_json_error()}
            else:
                payload = {"status": "error", "code": type(error).__name__, "message": msg}
            print(json.dumps(payload, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
