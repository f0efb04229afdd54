"""Record index, entry resolution, and full-text search.

- **ProjectIndex**: hash, year, title, author and publication lookups
- **EntryResolver**: first-match-wins resolution of entry specifiers
- **Query compilation**: terms and regular expressions to patterns
- **SearchEngine**: year-bounded, filtered occurrence counting
"""

from .engine import SearchEngine, SearchFilter, search
from .index import SHORT_TEXT_THRESHOLD, KeyedBuckets, ProjectIndex
from .query import (
    CompiledSearch,
    Query,
    SearchConfig,
    clean_term,
    compile_regexp,
    compile_search,
    compile_term,
)
from .resolver import FIELD_PRIORITY, EntryResolver, EntrySpecifier
from .results import SearchResult

__all__ = [
    # Index
    "ProjectIndex",
    "KeyedBuckets",
    "SHORT_TEXT_THRESHOLD",
    # Resolution
    "EntryResolver",
    "EntrySpecifier",
    "FIELD_PRIORITY",
    # Queries
    "SearchConfig",
    "CompiledSearch",
    "Query",
    "clean_term",
    "compile_regexp",
    "compile_term",
    "compile_search",
    # Execution
    "SearchEngine",
    "SearchFilter",
    "SearchResult",
    "search",
]
