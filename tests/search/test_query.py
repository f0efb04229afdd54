"""Tests for compiling search queries."""

import pytest

from bibsift.core.exceptions import FilterError, QueryCompileError
from bibsift.search.query import (
    SearchConfig,
    clean_term,
    compile_regexp,
    compile_search,
    compile_term,
)


class TestCleanTerm:
    """Test term cleaning."""

    def test_punctuation_and_case(self):
        """Cleaned terms match minified text."""
        assert clean_term("Hello,  World") == "hello world"

    def test_strips_ends(self):
        """Leading and trailing spaces are dropped."""
        assert clean_term("  deep learning ") == "deep learning"

    def test_nothing_left(self):
        """Punctuation-only terms clean to nothing."""
        assert clean_term("?!") == ""


class TestCompileTerm:
    """Test term compilation."""

    def test_whole_phrase_match(self):
        """Terms match whole words only."""
        query = compile_term("Hello,  World")

        assert query.label == "hello world"
        assert query.count("say hello world now") == 1
        assert query.count("hello worldwide") == 0
        assert query.count("othello world") == 0

    def test_matches_at_boundaries(self):
        """Terms match at the start and end of the text."""
        query = compile_term("deep")

        assert query.count("deep") == 1
        assert query.count("deep water and the deep") == 2

    def test_empty_term(self):
        """Terms with nothing searchable are rejected."""
        with pytest.raises(QueryCompileError):
            compile_term("...")


class TestCompileRegexp:
    """Test regular expression compilation."""

    def test_label(self):
        """Regex results are labelled with the pattern."""
        query = compile_regexp(r"neur\w+")

        assert query.label == r"regexp{neur\w+}"
        assert query.count("neural neurons") == 2

    def test_empty_match_after_match_not_counted(self):
        """An empty match abutting the previous match is skipped."""
        query = compile_regexp("a*")

        assert query.count("baaa") == 2
        assert query.count("") == 1

    def test_invalid(self):
        """Invalid patterns are rejected."""
        with pytest.raises(QueryCompileError):
            compile_regexp("(unclosed")


class TestCompileSearch:
    """Test compiling a whole search configuration."""

    def test_regexps_before_terms(self):
        """Regular expressions come first in the query order."""
        compiled = compile_search(SearchConfig(terms=["alpha"], regexps=["beta"]))

        assert [query.label for query in compiled.queries] == ["regexp{beta}", "alpha"]

    def test_filters_reduced(self):
        """Author and publication filters use reduced keys."""
        compiled = compile_search(
            SearchConfig(authors=["Smith, J."], publications=["Nature Physics"])
        )

        assert compiled.authors == frozenset({"smithj"})
        assert compiled.publications == frozenset({"naturephysics"})

    def test_invalid_author_filter(self):
        """Filters that reduce to nothing are rejected."""
        with pytest.raises(FilterError, match="author"):
            compile_search(SearchConfig(authors=["--"]))

    def test_invalid_publication_filter(self):
        """Publication filters are checked too."""
        with pytest.raises(FilterError, match="publication"):
            compile_search(SearchConfig(publications=["()"]))

    def test_defaults(self):
        """Default year range covers every plausible year."""
        config = SearchConfig()

        assert config.start == 1
        assert config.end == 3030
