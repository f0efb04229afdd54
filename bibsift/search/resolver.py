"""Resolve entry specifiers to project entries.

A specifier names a record by title, author, publication, year, or record
hash. Fields are tried in exactly that order and the first field that
matches at least one entry wins; the remaining fields of the specifier are
ignored. Matches from all specifiers are merged in order without repeats.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import ResolutionError
from bibsift.core.hashing import RecordHash
from bibsift.core.models import ProjectEntry

from .index import ProjectIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntrySpecifier:
    """Criteria naming one or more project entries.

    Empty strings and a zero year mean "not given".
    """

    title: str = ""
    author: str = ""
    publication: str = ""
    year: int = 0
    hash: str = ""

    def __str__(self) -> str:
        return (
            f'Title:"{self.title}", Author:"{self.author}", '
            f'Publication:"{self.publication}" Year:{self.year} Hash:"{self.hash}"'
        )


def _hash_positions(index: ProjectIndex, value: str) -> list[int]:
    position = index.position_by_hash(RecordHash.from_string(value))
    return [] if position is None else [position]


# (field name, lookup) pairs in resolution priority order
FIELD_PRIORITY: tuple[tuple[str, Callable[[ProjectIndex, object], list[int]]], ...] = (
    ("title", lambda index, value: index.positions_by_title(value)),
    ("author", lambda index, value: index.positions_by_author(value)),
    ("publication", lambda index, value: index.positions_by_publication(value)),
    ("year", lambda index, value: index.positions_by_year(value)),
    ("hash", _hash_positions),
)


class EntryResolver:
    """Resolve specifiers against a project index."""

    def __init__(
        self, index: ProjectIndex, diagnostics: DiagnosticsSink | None = None
    ) -> None:
        self.index = index
        self._log = diagnostics or logger

    def match(self, specifier: EntrySpecifier) -> list[int]:
        """Get entry positions for a single specifier.

        Returns:
            Positions matched by the highest-priority field that matches
            anything, or an empty list.

        Raises:
            ReductionError: A given text field reduces to an empty key.
            InvalidHashError: The given hash is malformed.
        """
        for field_name, lookup in FIELD_PRIORITY:
            value = getattr(specifier, field_name)
            if not value:
                continue

            positions = lookup(self.index, value)
            if positions:
                self._log.debug(
                    f"Matched {len(positions)} entries by {field_name}: {value}"
                )
                return positions

        return []

    def resolve(self, specifiers: Iterable[EntrySpecifier]) -> list[ProjectEntry]:
        """Resolve ``specifiers`` to a merged list of entries.

        Raises:
            ResolutionError: A specifier matches no entry. Nothing is
                returned in that case, even if earlier specifiers matched.
        """
        seen: set[int] = set()
        positions: list[int] = []

        for specifier in specifiers:
            matched = self.match(specifier)
            if not matched:
                raise ResolutionError(str(specifier))

            for position in matched:
                record = self.index.entry(position).record
                if position in seen:
                    self._log.debug(f"Previously aggregated {record}")
                    continue
                seen.add(position)
                positions.append(position)
                self._log.debug(f"Aggregated record: {record}")

        return self.index.resolve_positions(positions)
