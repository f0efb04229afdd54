"""Project persistence and record import.

Projects are stored as JSON files next to a data directory holding the
converted text of each record. Records enter a project through importers.
"""

from .importers import EndnoteXmlImporter
from .listing import ATTRIBUTE_ALIASES, attribute_values, distinct
from .project import Project, ProjectFile

__all__ = [
    "Project",
    "ProjectFile",
    "EndnoteXmlImporter",
    "ATTRIBUTE_ALIASES",
    "attribute_values",
    "distinct",
]
