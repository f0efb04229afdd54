"""Search configuration and query compilation.

A :class:`SearchConfig` is compiled once into a :class:`CompiledSearch`
before any text is scanned, so terms are cleaned and patterns compiled a
single time per search run.

Search terms are matched against minified text, which is lowercase, free of
most punctuation, and single-spaced. A term is cleaned the same way and
wrapped so that it only matches whole words::

    "Hello,  World"  ->  (^| )hello world( |$)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bibsift.core.exceptions import FilterError, QueryCompileError
from bibsift.core.models import MAX_YEAR
from bibsift.core.strings import reduce

logger = logging.getLogger(__name__)

_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9 ]+")
_EXTRA_SPACE = re.compile(r" +")


@dataclass
class SearchConfig:
    """Caller-provided search request.

    The year range is inclusive on both ends.
    """

    terms: list[str] = field(default_factory=list)
    regexps: list[str] = field(default_factory=list)
    authors: list[str] = field(default_factory=list)
    publications: list[str] = field(default_factory=list)
    start: int = 1
    end: int = MAX_YEAR


@dataclass(frozen=True)
class Query:
    """A compiled query and the label reported with its results."""

    label: str
    pattern: re.Pattern[str]

    def count(self, text: str) -> int:
        """Count non-overlapping matches in ``text``.

        An empty match directly after the previous match is not counted.
        """
        total = 0
        last_end = -1
        for match in self.pattern.finditer(text):
            if match.start() == match.end() == last_end:
                continue
            total += 1
            last_end = match.end()
        return total


@dataclass(frozen=True)
class CompiledSearch:
    """A search configuration ready for execution."""

    queries: tuple[Query, ...]
    authors: frozenset[str] = frozenset()
    publications: frozenset[str] = frozenset()


def clean_term(term: str) -> str:
    """Reduce a search term to the form it takes in minified text."""
    text = _NON_ALNUM_SPACE.sub("", term.lower())
    return _EXTRA_SPACE.sub(" ", text).strip()


def term_pattern(term: str) -> str:
    """Build the whole-word pattern for an already cleaned term."""
    return f"(^| ){term}( |$)"


def compile_regexp(pattern: str) -> Query:
    """Compile a raw regular expression query.

    Raises:
        QueryCompileError: The pattern is not a valid regular expression.
    """
    logger.debug(f'Compiling regexp pattern "{pattern}"')
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise QueryCompileError(pattern, str(e)) from e
    return Query(label=f"regexp{{{pattern}}}", pattern=compiled)


def compile_term(term: str) -> Query:
    """Compile a free-text term or phrase.

    Raises:
        QueryCompileError: Nothing searchable is left after cleaning.
    """
    cleaned = clean_term(term)
    if not cleaned:
        raise QueryCompileError(term, "no searchable characters")

    pattern = term_pattern(cleaned)
    logger.debug(f'Converting search term "{term}" -> regexp{{{pattern}}}')
    return Query(label=cleaned, pattern=re.compile(pattern))


def _reduce_filters(kind: str, values: list[str]) -> frozenset[str]:
    reduced = set()
    for value in values:
        key = reduce(value)
        if not key:
            raise FilterError(kind, value)
        reduced.add(key)
    return frozenset(reduced)


def compile_search(config: SearchConfig) -> CompiledSearch:
    """Compile ``config`` into executable queries and filters.

    Regular expressions come before terms in the compiled query order.

    Raises:
        QueryCompileError: A regular expression or term is invalid.
        FilterError: An author or publication filter reduces to nothing.
    """
    queries = [compile_regexp(pattern) for pattern in config.regexps]
    queries.extend(compile_term(term) for term in config.terms)

    return CompiledSearch(
        queries=tuple(queries),
        authors=_reduce_filters("author", config.authors),
        publications=_reduce_filters("publication", config.publications),
    )
