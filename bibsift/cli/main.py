"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
from click.exceptions import Exit
from rich.console import Console
from rich.markup import escape

from bibsift import __version__
from bibsift.cli.commands import convert, project, search
from bibsift.cli.config import load_config


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    config: dict[str, Any] = field(default_factory=dict)
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class BibsiftGroup(click.Group):
    """Custom group that reports errors and handles KeyboardInterrupt."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {escape(str(e))}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=BibsiftGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(
    version=__version__, prog_name="bibsift", message="bibsift version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """Full-text search over a bibliography's PDFs.

    Import an EndNote XML export into a project, convert the referenced
    PDFs to searchable text, then search it by phrase or regular
    expression.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    console = create_console(no_color=no_color)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error loading config file:[/red] {escape(str(e))}")
        ctx.exit(1)

    ctx.obj = Context(console=console, config=config_data, debug=debug)


cli.add_command(project.create)
cli.add_command(project.show)
cli.add_command(project.list_values)
cli.add_command(convert.convert)
cli.add_command(search.search)


def main() -> None:
    """Main entry point for the CLI."""
    cli(prog_name="bibsift")


if __name__ == "__main__":
    main()
