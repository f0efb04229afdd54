"""Full-text search command."""

from pathlib import Path

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from bibsift.cli.config import get_setting
from bibsift.cli.formatters import FORMATS, render_results
from bibsift.cli.helpers import load_project, project_option
from bibsift.core.models import MAX_YEAR
from bibsift.search import SearchConfig, SearchEngine, SearchResult


def _run_search(
    console: Console, engine: SearchEngine, config: SearchConfig
) -> list[SearchResult]:
    """Run a search, showing a spinner on interactive terminals only.

    Stopping a live display writes to the console, which would corrupt
    piped output.
    """
    if not console.is_terminal:
        return engine.search(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Searching {len(engine.index)} entries...", total=None)
        return engine.search(config)


@click.command()
@project_option
@click.option("--term", "-t", "terms", multiple=True, help="Search for this phrase")
@click.option(
    "--regexp",
    "-r",
    "regexps",
    multiple=True,
    help="Search for this regular expression",
)
@click.option("--from", "start", type=int, help="Earliest publication year")
@click.option("--to", "end", type=int, help="Latest publication year")
@click.option(
    "--author",
    "-a",
    "authors",
    multiple=True,
    help="Only search entries by this author",
)
@click.option(
    "--publication",
    "-P",
    "publications",
    multiple=True,
    help="Only search entries in this publication",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    help="Output format",
)
@click.option(
    "--output",
    "-o",
    "outfile",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write results to this file instead of stdout",
)
@click.pass_context
def search(
    ctx: click.Context,
    project_path: Path | None,
    terms: tuple[str, ...],
    regexps: tuple[str, ...],
    start: int | None,
    end: int | None,
    authors: tuple[str, ...],
    publications: tuple[str, ...],
    output_format: str | None,
    outfile: Path | None,
) -> None:
    """Search the converted text of a project's entries.

    Terms match whole words after punctuation is dropped, so
    "deep learning" does not match "deep learnings". Every term and
    regular expression is reported separately for each entry it occurs in.
    """
    config = ctx.obj.config
    if not terms and not regexps:
        raise click.UsageError("Give at least one --term or --regexp.")

    search_config = SearchConfig(
        terms=list(terms),
        regexps=list(regexps),
        authors=list(authors),
        publications=list(publications),
        start=start if start is not None else get_setting(config, "search.start", 1),
        end=end if end is not None else get_setting(config, "search.end", MAX_YEAR),
    )
    output_format = output_format or get_setting(config, "format", "pretty")

    project = load_project(ctx, project_path)
    index = project.build_index()

    results = _run_search(ctx.obj.console, SearchEngine(index), search_config)

    output = render_results(results, output_format)

    if outfile is not None:
        outfile.write_text(output, encoding="utf-8")
        ctx.obj.console.print(
            f"[green]✓[/green] Wrote {len(results)} results to {outfile}"
        )
    else:
        click.echo(output, nl=False)
