"""Full-text search over converted records.

The engine walks the year range of a search, filters each year's entries by
publication and author, and counts query matches in every converted text
file of the remaining entries. Results are hit counts, not relevance scores,
and come back in year, entry, file, and query order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import TextFileError, YearRangeError
from bibsift.core.models import ProjectEntry
from bibsift.core.strings import reduce

from .index import ProjectIndex
from .query import CompiledSearch, SearchConfig, compile_search
from .results import SearchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchFilter:
    """Publication and author restrictions of a compiled search.

    An empty set places no restriction on its field.
    """

    publications: frozenset[str] = frozenset()
    authors: frozenset[str] = frozenset()

    @classmethod
    def from_compiled(cls, compiled: CompiledSearch) -> SearchFilter:
        return cls(publications=compiled.publications, authors=compiled.authors)

    def matches(self, entry: ProjectEntry) -> bool:
        """Check whether ``entry`` passes both restrictions."""
        record = entry.record

        if self.publications and reduce(record.publication) not in self.publications:
            return False

        if self.authors:
            return any(reduce(author) in self.authors for author in record.authors)

        return True


class SearchEngine:
    """Execute searches against a project index."""

    def __init__(
        self, index: ProjectIndex, diagnostics: DiagnosticsSink | None = None
    ) -> None:
        self.index = index
        self._log = diagnostics or logger

    def search(self, config: SearchConfig) -> list[SearchResult]:
        """Run ``config`` against every matching entry.

        Raises:
            QueryCompileError: A term or regular expression is invalid.
            FilterError: An author or publication filter is invalid.
            YearRangeError: ``config.start`` is after ``config.end``.
            TextFileError: A converted text file cannot be read.
        """
        compiled = compile_search(config)

        if config.start > config.end:
            raise YearRangeError(config.start, config.end)

        search_filter = SearchFilter.from_compiled(compiled)
        results: list[SearchResult] = []

        for year in range(config.start, config.end + 1):
            for entry in self.index.by_year(year):
                if not search_filter.matches(entry):
                    continue
                self._log.debug(f"Filter matched record: {entry.record}")
                results.extend(self.search_entry(compiled, entry))

        return results

    def search_entry(
        self, compiled: CompiledSearch, entry: ProjectEntry
    ) -> list[SearchResult]:
        """Count query matches in each converted text file of ``entry``."""
        if not entry.mini_files:
            self._log.warning(f"No converted text available for: {entry.record}")
            return []

        self._log.debug(f"Searching: {entry.record}")
        results = []

        for filename in entry.mini_files:
            text = self._read_text(filename)
            self._log.debug(f"     Loaded: {filename}")

            for number, query in enumerate(compiled.queries, start=1):
                self._log.debug(
                    f"       Executing query {number} of {len(compiled.queries)}: "
                    f'"{query.label}"'
                )
                occurrences = query.count(text)
                self._log.debug(f"         Found {occurrences} occurrences")
                if occurrences:
                    results.append(
                        SearchResult(
                            query=query.label,
                            occurrences=occurrences,
                            record=entry.record,
                        )
                    )

        return results

    @staticmethod
    def _read_text(filename: str) -> str:
        try:
            return Path(filename).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise TextFileError(filename, str(e)) from e


def search(
    index: ProjectIndex,
    config: SearchConfig,
    diagnostics: DiagnosticsSink | None = None,
) -> list[SearchResult]:
    """Search ``index`` with ``config``; see :meth:`SearchEngine.search`."""
    return SearchEngine(index, diagnostics).search(config)
