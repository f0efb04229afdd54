"""PDF conversion command."""

from pathlib import Path

import click

from bibsift.cli.config import get_setting
from bibsift.cli.helpers import load_project, project_option
from bibsift.conversion import Converter
from bibsift.search.resolver import EntrySpecifier


def build_specifiers(
    titles: tuple[str, ...],
    authors: tuple[str, ...],
    publications: tuple[str, ...],
    years: tuple[int, ...],
    hashes: tuple[str, ...],
) -> list[EntrySpecifier]:
    """Build one specifier per value given on the command line."""
    return [
        *(EntrySpecifier(title=value) for value in titles),
        *(EntrySpecifier(author=value) for value in authors),
        *(EntrySpecifier(publication=value) for value in publications),
        *(EntrySpecifier(year=value) for value in years),
        *(EntrySpecifier(hash=value) for value in hashes),
    ]


@click.command()
@project_option
@click.option(
    "--title", "titles", multiple=True, help="Convert entries with this title"
)
@click.option(
    "--author", "authors", multiple=True, help="Convert entries by this author"
)
@click.option(
    "--publication",
    "publications",
    multiple=True,
    help="Convert entries in this publication",
)
@click.option(
    "--year", "years", type=int, multiple=True, help="Convert entries from this year"
)
@click.option(
    "--hash", "hashes", multiple=True, help="Convert the entry with this record hash"
)
@click.option("--ocr", is_flag=True, help="Skip text scraping and always use OCR")
@click.option("--force", is_flag=True, help="Reconvert already converted PDFs")
@click.pass_context
def convert(
    ctx: click.Context,
    project_path: Path | None,
    titles: tuple[str, ...],
    authors: tuple[str, ...],
    publications: tuple[str, ...],
    years: tuple[int, ...],
    hashes: tuple[str, ...],
    ocr: bool,
    force: bool,
) -> None:
    """Convert a project's PDFs to searchable text.

    Without selection options every entry is converted. Each --title,
    --author, --publication, --year and --hash selects the entries it
    matches.
    """
    console = ctx.obj.console
    project = load_project(ctx, project_path)

    converter = Converter(
        project,
        ocr_languages=get_setting(ctx.obj.config, "ocr_languages", "eng"),
    )
    specifiers = build_specifiers(titles, authors, publications, years, hashes)
    entries = converter.convert(specifiers, force_ocr=ocr, force=force)

    converted = sum(1 for entry in entries if entry.is_converted)
    console.print(f"[green]✓[/green] Converted {converted} of {len(entries)} entries")
