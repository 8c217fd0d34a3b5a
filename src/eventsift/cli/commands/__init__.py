"""CLI command modules."""

from . import events, tools

__all__ = [
    "events",
    "tools",
]
