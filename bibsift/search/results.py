"""Search result model."""

import msgspec

from bibsift.core.models import Record


class SearchResult(msgspec.Struct, frozen=True):
    """Occurrences of one query within one converted text file of a record."""

    query: str
    occurrences: int
    record: Record
