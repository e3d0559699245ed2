"""
Auto-discovery CLI dispatcher for the compositor.

Scans ``compositor/cli/commands`` and registers every public module as a
subcommand. Adding a command = adding a .py file with ``SUMMARY``,
``register_args`` and ``main``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from compositor.core.config import ConfigManager
from compositor.core.exceptions import CompositorError
from compositor.core.utils.log_config import configure_logging
from compositor.core.utils.profiling import Profiler, enable_profiler, span


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Import every command module under cli/commands.

    Returns:
        Dict mapping command name to its module, summary, register_args and main
    """
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        with span("cli.discover.import", module=f"compositor.cli.commands.{cmd_name}"):
            module = importlib.import_module(f"compositor.cli.commands.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="compositor",
        description="Class Compositor - build classes from roles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print timing spans for config loading, resolution and composition to stderr.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for compositor loggers (default: logging.level from config)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr (default: logging.path from config)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    """Apply --log-level/--log-file, falling back to the logging config section."""
    level, log_file = args.log_level, args.log_file
    if level is None or log_file is None:
        cfg = ConfigManager(getattr(args, "config_paths", None) or []).load_config()
        logging_cfg = cfg.get("logging") or {}
        level = level or logging_cfg.get("level") or "WARNING"
        log_file = log_file or logging_cfg.get("path")
    configure_logging(level=level, log_path=Path(log_file) if log_file else None)


def _get_version() -> str:
    from compositor import __version__

    return __version__


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the compositor CLI.

    Returns:
        Exit code (0 for success, 1 for compositor errors; argparse exits 2 on usage errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    profiler = Profiler() if args.profile else None
    ctx = enable_profiler(profiler) if profiler else nullcontext()

    with ctx:
        with span("cli.total", command=args.command):
            try:
                _configure_logging(args)
                result = int(args._func(args) or 0)
            except CompositorError as exc:
                # Commands report their own errors; this covers ones that did not.
                print(f"Error: {exc}", file=sys.stderr)
                result = 1

    if profiler is not None:
        print(profiler.format_summary(), file=sys.stderr)
    return result


if __name__ == "__main__":
    sys.exit(main())
