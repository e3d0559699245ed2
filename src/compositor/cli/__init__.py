"""
Compositor CLI package.

Commands live in ``compositor/cli/commands`` and are discovered at startup.
Each command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""
from ._output import OutputFormatter
from ._args import add_config_flag, add_import_path_flag, add_json_flag, add_request_args
from ._utils import build_compositor, extend_import_path, load_config, read_request_items

__all__ = [
    "OutputFormatter",
    "add_config_flag",
    "add_import_path_flag",
    "add_json_flag",
    "add_request_args",
    "build_compositor",
    "extend_import_path",
    "load_config",
    "read_request_items",
]
