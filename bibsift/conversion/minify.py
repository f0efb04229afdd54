"""Minified text.

Text extracted from a PDF is reduced to a single lowercase line with
references, URLs, and the punctuation and quotes that would get in the way
of phrase searches removed. Search terms are cleaned to match this form.
"""

import re

_HYPHENATION = re.compile(r"-\s*\r?\n\s")
_NEWLINES = re.compile(r"\r?\n")
_REFERENCES = re.compile(r"\[[0-9]+\]")
_URLS = re.compile(r"(https?://|www\.)[a-zA-Z0-9./]+")
_PUNCTUATION = re.compile(r"[.:;,()]")
_QUOTES = re.compile(r"[\"'‘’]")
_EXTRA_SPACE = re.compile(r" +")


def minify(text: str) -> str:
    """Minify extracted document text for searching."""
    text = _HYPHENATION.sub("", text)
    text = _NEWLINES.sub(" ", text)
    text = _REFERENCES.sub("", text)
    text = _URLS.sub("", text)
    text = _PUNCTUATION.sub("", text)
    text = _QUOTES.sub("", text)
    text = _EXTRA_SPACE.sub(" ", text)
    return text.lower()
