"""EndNote XML importer.

Developed against EndNote X7 exports. Only the fields needed to index and
convert a record are read: titles, authors, year, language, and links to
PDFs stored inside the EndNote library's data directory.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path, PurePath
from urllib.parse import unquote

from bibsift.core.exceptions import RecordImportError, ReductionError
from bibsift.core.models import MAX_YEAR, Record

logger = logging.getLogger(__name__)

INTERNAL_PDF_PREFIX = "internal-pdf://"

# These fields inconsistently hold journal names or their abbreviations, so
# the longest one is taken as the publication.
PUBLICATION_FIELDS = ("publication", "secondary-title", "alt-title", "full-title")


def _text(element: ET.Element | None) -> str:
    """Collect text of an element, including nested <style> runs."""
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _tag(element: ET.Element) -> str:
    return element.tag.rsplit("}", 1)[-1].lower()


def _find(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _tag(child) == name:
            return child
    return None


def _find_all(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element.iter() if _tag(child) == name]


class EndnoteXmlImporter:
    """Import records from an EndNote XML export."""

    def __init__(self, languages: Iterable[str] = ("eng",)):
        """Initialize importer.

        Args:
            languages: Keep only records written in one of these languages.
                Records without a language are always kept. An empty list
                keeps everything.
        """
        self.languages = [lang.lower() for lang in languages]

    def import_file(self, path: str | Path) -> list[Record]:
        """Import complete, deduplicated records from ``path``.

        Raises:
            RecordImportError: The file cannot be read or is not valid XML,
                or a record's title or publication reduces to nothing.
        """
        try:
            with open(path, "rb") as f:
                return self._import_stream(f)
        except OSError as e:
            raise RecordImportError(f"Failed to read {path}: {e}") from e
        except ET.ParseError as e:
            raise RecordImportError(f"Invalid XML in {path}: {e}") from e

    def import_text(self, text: str) -> list[Record]:
        """Import records from XML text.

        Raises:
            RecordImportError: The text is not valid XML, or a record cannot
                be hashed.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise RecordImportError(f"Invalid XML: {e}") from e
        return self._collect(_find_all(root, "record"))

    def _import_stream(self, stream) -> list[Record]:
        def records():
            # Processed records are detached so the tree stays small
            parents: list[ET.Element] = []
            for event, element in ET.iterparse(stream, events=("start", "end")):
                if event == "start":
                    parents.append(element)
                    continue
                parents.pop()
                if _tag(element) == "record":
                    yield element
                    if parents:
                        parents[-1].remove(element)

        return self._collect(records())

    def _collect(self, elements: Iterable[ET.Element]) -> list[Record]:
        records: list[Record] = []
        seen: set[str] = set()

        for element in elements:
            record = self.parse_record(element)
            element.clear()
            if record is None:
                continue

            if not record.is_written_in(self.languages):
                logger.debug(
                    f"Not including due to Language={record.language}: {record}"
                )
                continue

            try:
                record_hash = record.hash_string()
            except ReductionError as e:
                raise RecordImportError(f"Unresolvable record {record}: {e}") from e

            if record_hash in seen:
                logger.debug(f"Not including potential duplicate: {record}")
                continue

            seen.add(record_hash)
            records.append(record)
            logger.debug(f"Loaded record: {record}")

        return records

    def parse_record(self, element: ET.Element) -> Record | None:
        """Parse one <record> element.

        Returns:
            The record, or None if it is incomplete or malformed.
        """
        library = self._library_path(element)
        if library is None:
            return None

        titles = _find(element, "titles")
        title = _text(_find(titles, "title")) if titles is not None else ""
        publication = ""
        if titles is not None:
            for child in titles:
                if _tag(child) in PUBLICATION_FIELDS:
                    candidate = _text(child)
                    if len(candidate) > len(publication):
                        publication = candidate

        # Only primary authors; secondary and tertiary authors are editors
        contributors = _find(element, "contributors")
        primary = _find(contributors, "authors") if contributors is not None else None
        authors: list[str] = []
        if primary is not None:
            names = (_text(author) for author in _find_all(primary, "author"))
            authors = [name for name in names if name]

        year = self._year(element)
        if year is None:
            return None

        urls = _find(element, "urls")
        files = []
        if urls is not None:
            for url in _find_all(urls, "url"):
                pdf = self._pdf_path(library, _text(url))
                if pdf:
                    files.append(pdf)

        record = Record(
            title=title,
            publication=publication,
            year=year,
            authors=tuple(authors),
            language=_text(_find(element, "language")),
            files=tuple(files),
        )

        complete, missing = record.is_complete()
        if not complete:
            if missing == "Title":
                logger.debug("Not including incomplete record - missing Title")
            else:
                logger.debug(
                    f'Not including incomplete record "{record.title}" '
                    f"- missing {missing}"
                )
            return None

        if not record.language:
            logger.debug(f"No language specified for: {record}")

        return record

    def _library_path(self, element: ET.Element) -> str | None:
        """Get the EndNote library base path from the <database> element."""
        database = _find(element, "database")
        if database is None:
            logger.debug("No database in the current record. Skipping it.")
            return None

        path = database.get("path", "")
        name = database.get("name", "")
        if not path:
            logger.debug("No database path in the current record. Skipping it.")
            return None
        if not name:
            logger.debug("No database name in the current record. Skipping it.")
            return None

        return str(PurePath(path).parent / name.replace(".enl", ""))

    def _year(self, element: ET.Element) -> int | None:
        dates = _find(element, "dates")
        year_element = _find(dates, "year") if dates is not None else None
        if year_element is None:
            return 0

        try:
            year = int(_text(year_element))
        except ValueError:
            year = -1

        if not 1 <= year <= MAX_YEAR:
            logger.debug("Invalid date encountered. Skipping the current record.")
            return None
        return year

    @staticmethod
    def _pdf_path(library: str, url: str) -> str | None:
        """Map an internal-pdf:// link to a file in the library's data directory."""
        if not url.startswith(INTERNAL_PDF_PREFIX):
            return None
        # unquote() leaves '+' alone, which matters for file names
        relative = unquote(url[len(INTERNAL_PDF_PREFIX) :])
        return str(PurePath(f"{library}.Data") / "PDF" / relative)
