"""Record importers for library export formats.

- **EndNote XML**: EndNote X7 exports with internal PDF links
"""

from .endnote import EndnoteXmlImporter

__all__ = [
    "EndnoteXmlImporter",
]
