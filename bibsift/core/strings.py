"""Reduced strings for fuzzy lookups.

Records exported from different libraries (or duplicated within one) often
differ only in case, whitespace, punctuation, or bracketing. Lookups keyed
on titles, authors, and publications therefore use a *reduced* form of the
string: lowercase, with everything outside ``[a-z0-9]`` removed.

Reduction is lossy on purpose. Two genuinely different titles that only
differ in punctuation will share a key.
"""

import re

import msgspec

from .exceptions import ReductionError

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def reduce(text: str) -> str:
    """Lowercase ``text`` and strip every non-alphanumeric character.

    Non-ASCII letters are stripped as well, so ``reduce`` is idempotent:
    ``reduce(reduce(s)) == reduce(s)``.
    """
    return _NON_ALNUM.sub("", text.lower())


class ReducedStr(msgspec.Struct, frozen=True):
    """An original string paired with its reduced lookup key."""

    original: str
    reduced: str

    @classmethod
    def of(cls, text: str) -> "ReducedStr":
        """Reduce ``text``.

        Raises:
            ReductionError: ``text`` is non-empty but reduces to nothing,
                e.g. a title made only of punctuation.
        """
        reduced = reduce(text)
        if text and not reduced:
            raise ReductionError(text)
        return cls(original=text, reduced=reduced)

    def __str__(self) -> str:
        return self.original
