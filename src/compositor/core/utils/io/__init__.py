"""File I/O helpers."""

from .yaml import read_yaml

__all__ = ["read_yaml"]
