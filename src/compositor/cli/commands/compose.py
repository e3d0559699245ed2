"""
Compositor compose command.

SUMMARY: Compose a class from roles and describe it

Builds the class for the given request with the configured basename, prefix
map and post-composition transforms, then prints its identifier, the roles
applied and its attributes.
"""

from __future__ import annotations

import argparse

from compositor.cli import (
    OutputFormatter,
    add_config_flag,
    add_import_path_flag,
    add_json_flag,
    add_request_args,
    build_compositor,
    read_request_items,
)
from compositor.core.exceptions import CompositorError

SUMMARY = "Compose a class from roles and describe it"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_request_args(parser)
    parser.add_argument(
        "--basename",
        help="Override compositor.basename from config",
    )
    add_config_flag(parser)
    add_import_path_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        compositor = build_compositor(args)
        items = read_request_items(args)
        cls = compositor.class_for(*items)
    except CompositorError as exc:
        formatter.error(exc)
        return 1

    identifier = cls.__qualname__
    roles = [role.__qualname__ for role in cls.__roles__]
    attributes = {
        name: {"required": attr.required, "readonly": attr.readonly}
        for name, attr in cls.__attributes__.items()
    }
    data = {
        "class": identifier,
        "key": compositor.memoization_key(*items),
        "roles": roles,
        "attributes": attributes,
        "transforms": [str(t) for t in compositor.post_transforms],
    }

    if formatter.json_mode:
        formatter.success(data, identifier)
        return 0

    formatter.text(identifier)
    formatter.text_kv("roles", ", ".join(roles) or "(none)")
    for name, info in attributes.items():
        flags = ["required" if info["required"] else "optional", "ro" if info["readonly"] else "rw"]
        formatter.text_kv(f"attribute {name}", ", ".join(flags))
    return 0
