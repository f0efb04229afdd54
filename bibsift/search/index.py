"""Multi-key lookup index over a project's entries.

The index is built once per project load and is read-only afterwards.
Entries are addressed by their position in the project's entry list, so
every lookup structure shares the same entry objects: a conversion result
written into an entry is visible through every lookup.

Lookup structures:
- hash: record hash -> single entry
- year: publication year -> entries
- title, author, publication: reduced string -> entries

Entries whose PDFs are missing from disk are left out of every lookup
structure but stay in the project's entry list, so saving the project keeps
them.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import HashCollisionError
from bibsift.core.hashing import RecordHash
from bibsift.core.models import ProjectEntry
from bibsift.core.strings import ReducedStr

logger = logging.getLogger(__name__)

# Converted text at or below this size usually means pdftotext only scraped a
# cover page (e.g. interlibrary loan info) from an otherwise scanned document.
SHORT_TEXT_THRESHOLD = 2000

K = TypeVar("K", bound=Hashable)
D = TypeVar("D")


class KeyedBuckets(Generic[K, D]):
    """Ordered buckets of entry positions sharing a key.

    Also remembers the distinct keys in first-seen order, each with the
    display value of its first occurrence.
    """

    def __init__(self) -> None:
        self._buckets: dict[K, list[int]] = {}
        self._seen: list[D] = []

    def add(self, key: K, display: D, position: int) -> bool:
        """Append ``position`` to the bucket for ``key``.

        Returns:
            True if the key was seen for the first time.
        """
        bucket = self._buckets.get(key)
        if bucket is not None:
            bucket.append(position)
            return False

        self._buckets[key] = [position]
        self._seen.append(display)
        return True

    def get(self, key: K) -> list[int]:
        """Get positions stored under ``key`` (empty if unknown)."""
        return list(self._buckets.get(key, ()))

    def keys(self) -> list[D]:
        """Get display values of distinct keys in first-seen order."""
        return list(self._seen)

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)


class ProjectIndex:
    """Lookup structures over a list of project entries."""

    def __init__(
        self,
        entries: Sequence[ProjectEntry],
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        """Create an empty index over ``entries``.

        Use :meth:`build` to create a populated index.
        """
        self._entries = entries
        self._log = diagnostics or logger

        self._indexed: list[int] = []
        self._hashes: dict[RecordHash, int] = {}
        self._hash_order: list[RecordHash] = []
        self._years: KeyedBuckets[int, int] = KeyedBuckets()
        self._titles: KeyedBuckets[str, ReducedStr] = KeyedBuckets()
        self._authors: KeyedBuckets[str, ReducedStr] = KeyedBuckets()
        self._publications: KeyedBuckets[str, ReducedStr] = KeyedBuckets()

    @classmethod
    def build(
        cls,
        entries: Sequence[ProjectEntry],
        diagnostics: DiagnosticsSink | None = None,
    ) -> ProjectIndex:
        """Build the index in a single pass over ``entries``.

        Raises:
            ReductionError: A title, author, or publication reduces to an
                empty key.
            HashCollisionError: Two distinct indexed entries share a hash.
        """
        index = cls(entries, diagnostics)
        for position, entry in enumerate(entries):
            index._add(position, entry)
        return index

    def _add(self, position: int, entry: ProjectEntry) -> None:
        record = entry.record

        missing = [pdf for pdf in record.files if not Path(pdf).exists()]
        if missing:
            self._log.error(f"PDF does not exist: {missing[0]}")
            self._log.debug(f" `- Skipping record: {record}")
            return

        self._check_mini_files(entry)

        self._log.debug(f"Loading entry for {record}")

        # Reduce everything up front so a malformed record leaves no
        # partial bucket state behind.
        title = ReducedStr.of(record.title)
        publication = ReducedStr.of(record.publication)
        authors = [ReducedStr.of(author) for author in record.authors]
        record_hash = record.hash()

        if record_hash in self._hashes:
            other = self._entries[self._hashes[record_hash]].record
            raise HashCollisionError(str(record_hash), str(other), str(record))

        self._indexed.append(position)
        self._hashes[record_hash] = position
        self._hash_order.append(record_hash)

        if self._years.add(record.year, record.year, position):
            self._log.debug(f"Created year bucket: {record.year}")

        if self._titles.add(title.reduced, title, position):
            self._log.debug(f"Created title bucket: {title.reduced}")

        for author in authors:
            if self._authors.add(author.reduced, author, position):
                self._log.debug(f"Created author bucket: {author.reduced}")

        if self._publications.add(publication.reduced, publication, position):
            self._log.debug(f"Created publication bucket: {publication.reduced}")

    def _check_mini_files(self, entry: ProjectEntry) -> None:
        """Warn about converted text that is suspiciously short."""
        for mini_file in entry.mini_files:
            try:
                size = Path(mini_file).stat().st_size
            except OSError:
                continue
            if size <= SHORT_TEXT_THRESHOLD:
                self._log.warning(
                    "Minified file is suspiciously small. Consider forcing a "
                    "reconversion using OCR for:"
                )
                self._log.warning(
                    f" Title: {entry.record.title}  / Hash: {entry.hash}"
                )

    # Entry access

    def entry(self, position: int) -> ProjectEntry:
        """Get the entry at ``position`` in the project's entry list."""
        return self._entries[position]

    def resolve_positions(self, positions: Iterable[int]) -> list[ProjectEntry]:
        """Map entry positions to entries, preserving order."""
        return [self._entries[position] for position in positions]

    @property
    def entries(self) -> list[ProjectEntry]:
        """Get indexed entries in project order."""
        return self.resolve_positions(self._indexed)

    def __len__(self) -> int:
        return len(self._indexed)

    def __contains__(self, entry: object) -> bool:
        return any(self._entries[position] is entry for position in self._indexed)

    # Position lookups

    def position_by_hash(self, record_hash: RecordHash) -> int | None:
        """Get the position of the entry with ``record_hash``."""
        return self._hashes.get(record_hash)

    def positions_by_year(self, year: int) -> list[int]:
        """Get positions of entries published in ``year``."""
        return self._years.get(year)

    def positions_by_title(self, title: str) -> list[int]:
        """Get positions of entries whose reduced title matches ``title``."""
        return self._titles.get(ReducedStr.of(title).reduced)

    def positions_by_author(self, author: str) -> list[int]:
        """Get positions of entries with an author matching ``author``."""
        return self._authors.get(ReducedStr.of(author).reduced)

    def positions_by_publication(self, publication: str) -> list[int]:
        """Get positions of entries whose publication matches ``publication``."""
        return self._publications.get(ReducedStr.of(publication).reduced)

    # Entry lookups

    def by_hash(self, record_hash: RecordHash) -> ProjectEntry | None:
        """Get the entry with ``record_hash``, if indexed."""
        position = self.position_by_hash(record_hash)
        return None if position is None else self._entries[position]

    def by_year(self, year: int) -> list[ProjectEntry]:
        """Get entries published in ``year``."""
        return self.resolve_positions(self.positions_by_year(year))

    def by_title(self, title: str) -> list[ProjectEntry]:
        """Get entries whose title matches ``title`` after reduction."""
        return self.resolve_positions(self.positions_by_title(title))

    def by_author(self, author: str) -> list[ProjectEntry]:
        """Get entries with an author matching ``author`` after reduction."""
        return self.resolve_positions(self.positions_by_author(author))

    def by_publication(self, publication: str) -> list[ProjectEntry]:
        """Get entries whose publication matches after reduction."""
        return self.resolve_positions(self.positions_by_publication(publication))

    # Enumeration

    def years(self) -> list[int]:
        """Get distinct years in first-seen order."""
        return self._years.keys()

    def titles(self) -> list[str]:
        """Get distinct titles (first spelling seen) in first-seen order."""
        return [title.original for title in self._titles.keys()]

    def authors(self) -> list[str]:
        """Get distinct authors (first spelling seen) in first-seen order."""
        return [author.original for author in self._authors.keys()]

    def publications(self) -> list[str]:
        """Get distinct publications (first spelling seen) in first-seen order."""
        return [pub.original for pub in self._publications.keys()]

    def hashes(self) -> list[str]:
        """Get record hashes of indexed entries in project order."""
        return [str(record_hash) for record_hash in self._hash_order]
