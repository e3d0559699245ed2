"""Top-level compositor commands."""
