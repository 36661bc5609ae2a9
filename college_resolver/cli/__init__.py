"""CLI entry points for the college resolver."""

from .resolve import main as resolve_main

__all__ = ["resolve_main"]
