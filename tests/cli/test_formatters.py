"""Tests for search result formatters."""

import json

import pytest

from bibsift.cli.formatters import (
    format_csv,
    format_json,
    format_pretty,
    render_results,
)
from bibsift.search.results import SearchResult


@pytest.fixture
def results(make_record):
    return [
        SearchResult(
            query="deep learning",
            occurrences=3,
            record=make_record(authors=("Smith", "Jones")),
        ),
        SearchResult(
            query="regexp{neur.*}",
            occurrences=1,
            record=make_record(title='A "quoted" title', year=2018),
        ),
    ]


class TestFormatters:
    """Test each output format."""

    def test_pretty(self, results):
        text = format_pretty(results[0])

        assert text.splitlines() == [
            "Query: deep learning",
            "   Occurrences: 3",
            "   Year:        2015",
            "   Publication: Nature",
            "   Author(s):   Smith / Jones",
            "   Title:       Deep Learning",
            "",
        ]

    def test_csv(self, results):
        lines = format_csv(results).splitlines()

        assert lines[0] == '"Query","Occurrences","Year","Publication","Author(s)","Title"'
        assert lines[1] == (
            '"deep learning","3","2015","Nature","Smith / Jones","Deep Learning"'
        )
        assert lines[2].endswith('"A ""quoted"" title"')

    def test_csv_without_header(self, results):
        assert len(format_csv(results, header=False).splitlines()) == 2

    def test_json(self, results):
        data = json.loads(format_json(results))

        assert data[0]["record"]["authors"] == ["Smith", "Jones"]
        assert data[1]["query"] == "regexp{neur.*}"

    def test_table(self, results):
        text = render_results(results, "table")

        assert "deep learning" in text
        assert "Smith / Jones" in text

    def test_unknown_format(self, results):
        with pytest.raises(ValueError, match="Invalid result format"):
            render_results(results, "xml")

    def test_empty(self):
        assert render_results([], "pretty") == ""
        assert render_results([], "json") == "[]\n"
