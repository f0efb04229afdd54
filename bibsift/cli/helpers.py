"""CLI helper functions."""

from __future__ import annotations

from pathlib import Path

import click

from bibsift.cli.config import get_setting
from bibsift.storage.project import Project


def project_option(func):
    """Add the ``--project/-p`` option to a command."""
    return click.option(
        "--project",
        "-p",
        "project_path",
        type=click.Path(path_type=Path),
        help="Project file (defaults to the configured project)",
    )(func)


def load_project(ctx: click.Context, project_path: Path | None) -> Project:
    """Load the project named on the command line or in the configuration.

    Raises:
        click.UsageError: No project was given either way.
        ProjectError: The project file cannot be loaded.
    """
    if project_path is None:
        configured = get_setting(ctx.obj.config, "project")
        if not configured:
            raise click.UsageError(
                "No project given. Use --project or set 'project' in the config."
            )
        project_path = Path(configured)

    return Project.load(project_path)


def configured_languages(ctx: click.Context, languages: tuple[str, ...]) -> list[str]:
    """Get the import languages, falling back to the configuration.

    ``all`` keeps records in every language.
    """
    if not languages:
        languages = tuple(get_setting(ctx.obj.config, "languages", ["eng"]) or ())
    if any(lang.lower() == "all" for lang in languages):
        return []
    return list(languages)
