"""Distinct attribute values across imported records."""

from collections.abc import Iterable

from bibsift.core.models import Record

NOT_SPECIFIED = "<Not Specified>"

ATTRIBUTE_ALIASES = {
    "year": "year",
    "years": "year",
    "pub": "publication",
    "publication": "publication",
    "publications": "publication",
    "title": "title",
    "titles": "title",
    "author": "author",
    "authors": "author",
    "lang": "language",
    "language": "language",
    "languages": "language",
    "pdf": "pdf",
    "pdfs": "pdf",
}


def distinct(values: Iterable[str], case_insensitive: bool = True) -> list[str]:
    """Deduplicate ``values`` keeping the first spelling of each.

    Returns:
        Sorted distinct values.
    """
    seen: dict[str, str] = {}
    for value in values:
        key = value.lower() if case_insensitive else value
        seen.setdefault(key, value)
    return sorted(seen.values())


def attribute_values(records: Iterable[Record], attribute: str) -> list[str]:
    """List the distinct values of ``attribute`` over ``records``.

    Args:
        records: Records to scan
        attribute: One of the names in ``ATTRIBUTE_ALIASES``

    Raises:
        ValueError: Unknown attribute name.
    """
    name = ATTRIBUTE_ALIASES.get(attribute.lower())
    records = list(records)

    if name == "year":
        return [str(year) for year in sorted({r.year for r in records})]
    if name == "publication":
        return distinct(r.publication for r in records)
    if name == "title":
        return distinct(r.title for r in records)
    if name == "author":
        return distinct(author for r in records for author in r.authors)
    if name == "language":
        return [
            value or NOT_SPECIFIED for value in distinct(r.language for r in records)
        ]
    if name == "pdf":
        pdfs = (pdf for r in records for pdf in r.files)
        return distinct(pdfs, case_insensitive=False)

    raise ValueError(f"Invalid attribute: {attribute}")
