"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --config flag (later files override earlier ones)."""
    parser.add_argument(
        "--config",
        dest="config_paths",
        action="append",
        default=[],
        metavar="FILE",
        help="YAML config file to merge over the bundled defaults (repeatable)",
    )


def add_request_args(parser: argparse.ArgumentParser) -> None:
    """Add positional role identifiers plus --request for parameterized roles."""
    parser.add_argument(
        "roles",
        nargs="*",
        metavar="ROLE",
        help="Role identifier (expanded with the configured prefix map)",
    )
    parser.add_argument(
        "--request",
        dest="request_file",
        metavar="FILE",
        help="YAML file listing request items (strings or {role, moniker, parameters})",
    )


def add_import_path_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--import-path",
        dest="import_paths",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory to search for role modules (repeatable)",
    )


__all__ = ["add_config_flag", "add_import_path_flag", "add_json_flag", "add_request_args"]
