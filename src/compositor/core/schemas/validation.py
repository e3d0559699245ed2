"""Shared schema validation utilities.

Schemas are stored as YAML files under ``compositor/data/schemas`` (named
``<name>.schema.yaml``) and validated with jsonschema's Draft 2020-12
validator so every error is reported, not just the first.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from compositor.core.exceptions import ConfigurationError
from compositor.data import get_data_path, read_yaml


class SchemaValidationError(ConfigurationError):
    """Raised when a payload does not match its schema."""


def load_schema(schema_name: str) -> Dict[str, Any]:
    filename = f"{schema_name}.schema.yaml"
    if not get_data_path("schemas", filename).exists():
        raise ConfigurationError(f"Unknown schema '{schema_name}'", context={"schema": schema_name})
    return read_yaml("schemas", filename)


def _format_error(error: Any) -> str:
    location = "/".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate ``payload`` against the bundled schema ``schema_name``.

    Raises:
        SchemaValidationError: Listing every violation found
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = [
        _format_error(e) for e in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    ]
    if errors:
        raise SchemaValidationError(
            f"Invalid {schema_name} configuration:\n  " + "\n  ".join(errors),
            context={"schema": schema_name, "errors": errors},
        )


__all__ = ["SchemaValidationError", "load_schema", "validate_payload"]
