"""
Compositor key command.

SUMMARY: Print the memoization key of a request

Requests with the same key compose to the same class. Nothing is loaded or
built, so roles do not need to be importable.
"""

from __future__ import annotations

import argparse

from compositor.cli import OutputFormatter, add_json_flag, add_request_args, read_request_items
from compositor.core.composition import memoization_key
from compositor.core.exceptions import CompositorError

SUMMARY = "Print the memoization key of a request"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_request_args(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        key = memoization_key(read_request_items(args))
    except CompositorError as exc:
        formatter.error(exc)
        return 1
    formatter.success({"key": key}, key)
    return 0
