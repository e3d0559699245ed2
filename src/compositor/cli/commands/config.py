"""
Compositor config command.

SUMMARY: Show the merged configuration

Displays the configuration merged from bundled defaults, --config files and
COMPOSITOR_* environment variables, after schema validation.
"""

from __future__ import annotations

import argparse

import yaml

from compositor.cli import OutputFormatter, add_config_flag, add_json_flag, load_config
from compositor.core.exceptions import CompositorError

SUMMARY = "Show the merged configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Dotted key to show (e.g. 'compositor.basename')",
    )
    add_config_flag(parser)
    add_json_flag(parser)


def _lookup(config: dict, dotted: str):
    value = config
    for part in [p for p in dotted.split(".") if p]:
        if not isinstance(value, dict) or part not in value:
            raise KeyError(dotted)
        value = value[part]
    return value


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_config(args)
    except CompositorError as exc:
        formatter.error(exc)
        return 1

    value = config
    if args.key:
        try:
            value = _lookup(config, args.key)
        except KeyError as exc:
            formatter.error(exc, f"Unknown configuration key: {args.key}")
            return 1

    if formatter.json_mode:
        formatter.success({"config": value} if not args.key else {"key": args.key, "value": value}, "")
    elif isinstance(value, (dict, list)):
        formatter.text(yaml.safe_dump(value, sort_keys=False, default_flow_style=False).rstrip())
    else:
        formatter.text(str(value))
    return 0
