"""Configuration loading for the compositor."""

from .manager import ENV_PREFIX, ConfigManager

__all__ = ["ConfigManager", "ENV_PREFIX"]
