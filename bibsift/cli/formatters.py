"""Search result formatters."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable

import msgspec
from rich.console import Console
from rich.table import Table

from bibsift.search.results import SearchResult

AUTHOR_SEPARATOR = " / "

CSV_HEADER = ["Query", "Occurrences", "Year", "Publication", "Author(s)", "Title"]

FORMATS = ("pretty", "csv", "csv-no-hdr", "json", "table")


def format_pretty(result: SearchResult, eol: str = "\n") -> str:
    """Format a result as an indented text block followed by a blank line."""
    record = result.record
    return (
        f"Query: {result.query}{eol}"
        f"   Occurrences: {result.occurrences}{eol}"
        f"   Year:        {record.year}{eol}"
        f"   Publication: {record.publication}{eol}"
        f"   Author(s):   {AUTHOR_SEPARATOR.join(record.authors)}{eol}"
        f"   Title:       {record.title}{eol}"
        f"{eol}"
    )


def format_csv(
    results: Iterable[SearchResult],
    header: bool = True,
    sep: str = ",",
    eol: str = "\n",
) -> str:
    """Format results as CSV with every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(
        buffer, delimiter=sep, lineterminator=eol, quoting=csv.QUOTE_ALL
    )

    if header:
        writer.writerow(CSV_HEADER)

    for result in results:
        record = result.record
        writer.writerow(
            [
                result.query,
                result.occurrences,
                record.year,
                record.publication,
                AUTHOR_SEPARATOR.join(record.authors),
                record.title,
            ]
        )

    return buffer.getvalue()


def format_json(results: Iterable[SearchResult], indent: int = 2) -> str:
    """Format results as a JSON list."""
    data = msgspec.to_builtins(list(results))
    return json.dumps(data, indent=indent) + "\n"


def format_table(results: Iterable[SearchResult]) -> Table:
    """Build a Rich table of results."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Query", style="magenta")
    table.add_column("Hits", justify="right")
    table.add_column("Year", justify="right", width=6)
    table.add_column("Publication", style="green")
    table.add_column("Author(s)", style="cyan")
    table.add_column("Title", style="white")

    for result in results:
        record = result.record
        table.add_row(
            result.query,
            str(result.occurrences),
            str(record.year),
            record.publication,
            AUTHOR_SEPARATOR.join(record.authors),
            record.title,
        )

    return table


def render_results(results: list[SearchResult], output_format: str) -> str:
    """Render results in one of ``FORMATS``.

    Raises:
        ValueError: Unknown format.
    """
    output_format = output_format.lower()

    if output_format == "pretty":
        return "".join(format_pretty(result) for result in results)
    if output_format == "csv":
        return format_csv(results, header=True)
    if output_format == "csv-no-hdr":
        return format_csv(results, header=False)
    if output_format == "json":
        return format_json(results)
    if output_format == "table":
        buffer = io.StringIO()
        Console(file=buffer, width=160).print(format_table(results))
        return buffer.getvalue()

    raise ValueError(f"Invalid result format: {output_format}")
