"""Pytest configuration and fixtures."""

from itertools import count

import pytest

from bibsift.core.models import ProjectEntry, Record


class RecordingSink:
    """Diagnostics sink that keeps every message for later assertions."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def _record(self, level, msg, args):
        self.messages.append((level, msg % args if args else msg))

    def debug(self, msg, *args):
        self._record("debug", msg, args)

    def info(self, msg, *args):
        self._record("info", msg, args)

    def warning(self, msg, *args):
        self._record("warning", msg, args)

    def error(self, msg, *args):
        self._record("error", msg, args)

    def at(self, level: str) -> list[str]:
        """Get messages logged at ``level``."""
        return [msg for lvl, msg in self.messages if lvl == level]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables for each test.

    Keeps a developer's own configuration out of the tests.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.delenv("BIBSIFT_PROJECT", raising=False)
    monkeypatch.delenv("BIBSIFT_FORMAT", raising=False)


@pytest.fixture
def sink():
    """A recording diagnostics sink."""
    return RecordingSink()


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""

    def _make(
        title="Deep Learning",
        publication="Nature",
        year=2015,
        authors=("Smith",),
        language="",
        files=("/tmp/none.pdf",),
    ):
        return Record(
            title=title,
            publication=publication,
            year=year,
            authors=tuple(authors),
            language=language,
            files=tuple(files),
        )

    return _make


@pytest.fixture
def make_entry(tmp_path, make_record):
    """Factory for project entries backed by files under ``tmp_path``.

    A PDF is created for the entry unless ``pdf_exists`` is false. When
    ``text`` is given a converted text file holding it is created as well.
    """
    numbers = count(1)
    library = tmp_path / "Library.Data" / "PDF"

    def _make(text=None, pdf_exists=True, **fields):
        number = next(numbers)
        pdf = library / str(number) / f"paper{number}.pdf"
        if pdf_exists:
            pdf.parent.mkdir(parents=True, exist_ok=True)
            pdf.write_bytes(b"%PDF-1.4\n")

        entry = ProjectEntry.from_record(make_record(files=(str(pdf),), **fields))

        if text is not None:
            mini = tmp_path / "data" / str(number) / f"paper{number}.pdf.txt"
            mini.parent.mkdir(parents=True, exist_ok=True)
            mini.write_text(text)
            entry.mini_files = [str(mini)]

        return entry

    return _make


@pytest.fixture
def long_text():
    """Converted text long enough not to be flagged as suspicious."""
    filler = "lorem ipsum dolor sit amet " * 100
    return f"{filler}deep learning methods {filler}"


RECORD_TEMPLATE = """
<record>
  <database name="My Library.enl" path="/home/user/My Library.enl">My Library.enl</database>
  <ref-type name="Journal Article">17</ref-type>
  <contributors>
    <authors>{authors}</authors>
    <secondary-authors><author><style face="normal">Editor, E.</style></author></secondary-authors>
  </contributors>
  <titles>
    <title><style face="normal" font="default" size="100%">{title}</style></title>
    <secondary-title><style face="normal">{publication}</style></secondary-title>
    <alt-title><style face="normal">Abbr.</style></alt-title>
  </titles>
  {dates}
  {language}
  <urls><pdf-urls>{urls}</pdf-urls></urls>
</record>
"""


def render_record(
    title="Deep Learning",
    publication="Nature",
    year="2015",
    authors=("Smith, J.",),
    language="eng",
    pdfs=("internal-pdf://1234567890/Smith%202015.pdf",),
):
    """Render one EndNote XML <record>."""
    return RECORD_TEMPLATE.format(
        title=title,
        publication=publication,
        dates=f"<dates><year><style>{year}</style></year></dates>" if year else "",
        authors="".join(f"<author><style>{name}</style></author>" for name in authors),
        language=f"<language>{language}</language>" if language else "",
        urls="".join(f"<url>{pdf}</url>" for pdf in pdfs),
    )


def render_xml(*records):
    """Wrap records in an EndNote XML document."""
    body = "".join(records)
    return f'<?xml version="1.0" encoding="UTF-8" ?><xml><records>{body}</records></xml>'


@pytest.fixture
def endnote_record():
    """Factory rendering one EndNote XML <record>."""
    return render_record


@pytest.fixture
def endnote_xml():
    """Factory wrapping records in an EndNote XML document."""
    return render_xml


@pytest.fixture
def endnote_file(tmp_path):
    """Write an EndNote XML export and return its path."""

    def _write(*records, name="library.xml"):
        path = tmp_path / name
        path.write_text(render_xml(*records), encoding="utf-8")
        return path

    return _write
