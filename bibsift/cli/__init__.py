"""Bibsift CLI.

Command-line interface for building projects from library exports,
converting their PDFs, and searching the converted text. Built with Click
and Rich.
"""

from bibsift.cli.main import cli

__all__ = ["cli"]
