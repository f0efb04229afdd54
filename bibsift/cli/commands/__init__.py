"""CLI commands module."""

from . import convert, project, search

__all__ = [
    "convert",
    "project",
    "search",
]
