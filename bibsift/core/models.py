"""Core data models for library records.

Key components:
- Record: Immutable bibliographic record with paths to its full-text PDFs
- ProjectEntry: A record tracked by a project, with its converted text files
"""

from collections.abc import Iterable

import msgspec

from .hashing import RecordHash, compute_record_hash

# Upper bound on plausible publication years, shared by importers and search
MAX_YEAR = 3030


class Record(msgspec.Struct, frozen=True, kw_only=True):
    """Bibliographic metadata for one publication.

    A record is immutable once extracted. ``language`` may be empty, in which
    case it matches any language filter.
    """

    title: str
    publication: str
    year: int
    authors: tuple[str, ...] = ()
    language: str = ""
    files: tuple[str, ...] = ()

    def is_complete(self) -> tuple[bool, str]:
        """Check that every field needed to index the record is present.

        Returns:
            ``(True, "")`` when complete, otherwise ``(False, field)`` naming
            the first missing field.
        """
        if not self.title:
            return False, "Title"
        if not self.publication:
            return False, "Publication"
        if self.year <= 0:
            return False, "Year"
        if not self.authors:
            return False, "Authors"
        if not self.files:
            return False, "PDFs"
        return True, ""

    def is_written_in(self, languages: Iterable[str]) -> bool:
        """Check whether the record matches one of ``languages``.

        Records without a language, and empty language filters, always match.
        Comparison is case-insensitive.
        """
        wanted = {lang.lower() for lang in languages}
        if not self.language or not wanted:
            return True
        return self.language.lower() in wanted

    def hash(self) -> RecordHash:
        """Compute this record's content hash."""
        return compute_record_hash(self)

    def hash_string(self) -> str:
        """Compute this record's content hash as lowercase hex."""
        return str(compute_record_hash(self))

    def __str__(self) -> str:
        authors = ", ".join(self.authors)
        return f'"{self.title}" [{authors}] ({self.publication} {self.year})'


class ProjectEntry(msgspec.Struct, kw_only=True):
    """A record tracked by a project.

    ``mini_files`` lists the minified text files produced by conversion and
    is empty until the record's PDFs have been converted.
    """

    record: Record
    hash: str
    mini_files: list[str] = msgspec.field(default_factory=list)

    @classmethod
    def from_record(cls, record: Record) -> "ProjectEntry":
        """Create an unconverted entry for ``record``."""
        return cls(record=record, hash=record.hash_string())

    @property
    def is_converted(self) -> bool:
        """Check if converted text is available."""
        return bool(self.mini_files)
