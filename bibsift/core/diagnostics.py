"""Diagnostics sink injected into indexing, resolution, search and conversion.

Components report data-integrity problems (missing PDFs, unconverted
records, suspiciously short text) through a sink rather than raising. Any
object with leveled ``debug``/``info``/``warning``/``error`` methods will
do. Components fall back to their module :class:`logging.Logger`.
"""

from typing import Any, Protocol


class DiagnosticsSink(Protocol):
    """Leveled message sink."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...
