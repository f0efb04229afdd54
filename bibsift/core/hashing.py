"""Content hashes used to identify and deduplicate records.

A record hash covers the record's reduced title, the first character of its
reduced publication, its year, and its author count. It is meant to catch
duplicates whose capitalization or abbreviations differ between exports, and
accepts the occasional false-positive merge as the price for that.
"""

from __future__ import annotations

import hashlib
import struct
from typing import TYPE_CHECKING

import msgspec

from .exceptions import InvalidHashError, ReductionError
from .strings import reduce

if TYPE_CHECKING:
    from .models import Record

HASH_SIZE = 16
FIELD_SEPARATOR = b"|"


class RecordHash(msgspec.Struct, frozen=True):
    """A 16-byte record fingerprint."""

    digest: bytes

    def __post_init__(self):
        if len(self.digest) != HASH_SIZE:
            raise InvalidHashError(
                self.digest.hex(), f"expected {HASH_SIZE} bytes, got {len(self.digest)}"
            )

    def __str__(self) -> str:
        return self.digest.hex()

    @classmethod
    def from_string(cls, value: str) -> RecordHash:
        """Parse the hexadecimal form produced by ``str(hash)``.

        Raises:
            InvalidHashError: ``value`` is not 32 hexadecimal characters.
        """
        text = value.strip()
        if len(text) != HASH_SIZE * 2:
            raise InvalidHashError(value, f"expected {HASH_SIZE * 2} hex digits")
        try:
            digest = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidHashError(value, str(e)) from e
        return cls(digest=digest)


def _hash_input(record: Record) -> bytes:
    title = reduce(record.title)
    if not title:
        raise ReductionError(record.title)

    publication = reduce(record.publication)
    if not publication:
        raise ReductionError(record.publication)

    return FIELD_SEPARATOR.join(
        [
            title.encode("ascii"),
            publication[0].encode("ascii"),
            struct.pack("<H", record.year & 0xFFFF),
            struct.pack("<B", len(record.authors) & 0xFF),
            b"",
        ]
    )


def compute_record_hash(record: Record) -> RecordHash:
    """Compute the record hash of ``record``.

    MD5 is used as a fingerprint only; it carries no security property.
    """
    digest = hashlib.md5(_hash_input(record), usedforsecurity=False).digest()
    return RecordHash(digest=digest)
