"""CLI commands for mythic-scribe."""

from . import inspect

__all__ = ["inspect"]
