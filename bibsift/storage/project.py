"""Project files.

A project file is a JSON document holding the records imported from a
library export, the hash of each record, and the minified text files
produced by conversion. Converted text lives under the project's data
directory. The lookup index is rebuilt from the entry list on every load
and is never written to disk.
"""

from __future__ import annotations

import json
import logging
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import msgspec

from bibsift import __version__
from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import ProjectError
from bibsift.core.models import ProjectEntry, Record
from bibsift.search.index import ProjectIndex

logger = logging.getLogger(__name__)


class ProjectFile(msgspec.Struct, kw_only=True):
    """On-disk layout of a project file."""

    created_at: str
    version: str
    data_dir: str
    entries: list[ProjectEntry] = msgspec.field(default_factory=list)


@dataclass
class Project:
    """A set of tracked records and the location of their converted text.

    ``path`` is the file the project was loaded from or last saved to.
    """

    created_at: str
    version: str
    data_dir: str
    entries: list[ProjectEntry] = field(default_factory=list)
    path: Path | None = field(default=None, compare=False)

    @classmethod
    def create(cls, data_dir: str | Path, records: Iterable[Record]) -> Project:
        """Create a project tracking ``records``.

        A relative ``data_dir`` is resolved against the working directory.
        """
        return cls(
            created_at=datetime.now().isoformat(),
            version=__version__,
            data_dir=str(Path(data_dir).absolute()),
            entries=[ProjectEntry.from_record(record) for record in records],
        )

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    def to_dict(self) -> dict:
        """Convert to the JSON-compatible project file layout."""
        return msgspec.to_builtins(
            ProjectFile(
                created_at=self.created_at,
                version=self.version,
                data_dir=self.data_dir,
                entries=self.entries,
            )
        )

    def save(self, path: str | Path | None = None) -> Path:
        """Write the project file atomically.

        Creates the project file's directory and the data directory when
        missing. Defaults to the path the project was loaded from.

        Returns:
            The path written.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ProjectError("No project file path given")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self.data_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProjectError(f"Failed to create project directories: {e}") from e

        self.created_at = datetime.now().isoformat()

        temp_fd, temp_path = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
                f.write("\n")
            Path(temp_path).replace(target)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

        self.path = target
        logger.debug(f"Saved project file: {target}")
        return target

    @classmethod
    def load(cls, path: str | Path) -> Project:
        """Load a project file.

        Raises:
            ProjectError: The file cannot be read or decoded, or the data
                directory it refers to does not exist.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ProjectError(f"Failed to read project file {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ProjectError(f"Project file {path} is not UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ProjectError(f"Invalid JSON in project file {path}: {e}") from e

        try:
            decoded = msgspec.convert(data, ProjectFile)
        except msgspec.ValidationError as e:
            raise ProjectError(f"Invalid project file {path}: {e}") from e

        project = cls(
            created_at=decoded.created_at,
            version=decoded.version,
            data_dir=decoded.data_dir,
            entries=decoded.entries,
        )

        if not project.data_path.is_dir():
            raise ProjectError(f"Data directory does not exist: {project.data_dir}")

        project.path = path
        logger.debug(f"Loaded {len(project.entries)} entries from {path}")
        return project

    def build_index(self, diagnostics: DiagnosticsSink | None = None) -> ProjectIndex:
        """Build the lookup index over this project's entries."""
        return ProjectIndex.build(self.entries, diagnostics)

    def mini_file_path(self, pdf: str | Path) -> Path:
        """Get where the minified text of ``pdf`` is stored.

        Text files are grouped by the name of the PDF's parent directory.
        """
        pdf = Path(pdf)
        return self.data_path / pdf.parent.name / f"{pdf.name}.txt"
