"""Tests for project files."""

import json

import pytest

from bibsift import __version__
from bibsift.core.exceptions import ProjectError
from bibsift.storage.project import Project


@pytest.fixture
def project(tmp_path, make_record):
    """Unsaved project with two records."""
    records = [make_record(title="First"), make_record(title="Second", year=2016)]
    return Project.create(tmp_path / "data", records)


class TestProjectCreate:
    """Test creating projects."""

    def test_entries(self, project):
        """Each record becomes an unconverted entry with its hash."""
        assert [entry.record.title for entry in project.entries] == ["First", "Second"]
        assert all(not entry.is_converted for entry in project.entries)
        assert project.entries[0].hash == project.entries[0].record.hash_string()

    def test_metadata(self, project):
        """New projects carry the tool version."""
        assert project.version == __version__
        assert project.created_at
        assert project.path is None

    def test_relative_data_dir(self, tmp_path, monkeypatch):
        """Relative data directories are made absolute."""
        monkeypatch.chdir(tmp_path)
        project = Project.create("data", [])

        assert project.data_path == tmp_path / "data"


class TestProjectPersistence:
    """Test saving and loading."""

    def test_round_trip(self, project, tmp_path):
        """A saved project loads back unchanged."""
        project.entries[0].mini_files = [str(tmp_path / "data" / "1" / "a.pdf.txt")]
        path = project.save(tmp_path / "project.json")

        loaded = Project.load(path)

        assert loaded == project
        assert loaded.path == path

    def test_save_creates_directories(self, project, tmp_path):
        """Saving creates the project and data directories."""
        path = tmp_path / "nested" / "project.json"
        project.save(path)

        assert path.exists()
        assert project.data_path.is_dir()

    def test_save_format(self, project, tmp_path):
        """Project files are readable JSON."""
        path = project.save(tmp_path / "project.json")
        data = json.loads(path.read_text())

        assert set(data) == {"created_at", "version", "data_dir", "entries"}
        assert data["entries"][0]["record"]["title"] == "First"
        assert data["entries"][0]["mini_files"] == []

    def test_save_defaults_to_loaded_path(self, project, tmp_path):
        """Saving again writes to the same file."""
        path = project.save(tmp_path / "project.json")
        project.entries[1].mini_files = ["/x.txt"]
        project.save()

        assert Project.load(path).entries[1].mini_files == ["/x.txt"]

    def test_save_without_path(self, project):
        """An unsaved project needs a path."""
        with pytest.raises(ProjectError):
            project.save()

    def test_no_temp_files_left(self, project, tmp_path):
        """Atomic saves clean up after themselves."""
        project.save(tmp_path / "project.json")

        assert list(tmp_path.glob("*.tmp")) == []

    def test_load_missing(self, tmp_path):
        """Missing files raise a project error."""
        with pytest.raises(ProjectError, match="Failed to read"):
            Project.load(tmp_path / "missing.json")

    def test_load_bad_json(self, tmp_path):
        """Invalid JSON raises a project error."""
        path = tmp_path / "project.json"
        path.write_text("{not json")

        with pytest.raises(ProjectError, match="Invalid JSON"):
            Project.load(path)

    def test_load_not_utf8(self, tmp_path):
        """Undecodable bytes raise a project error."""
        path = tmp_path / "project.json"
        path.write_bytes(b'{"created_at": "\xff\xfe"}')

        with pytest.raises(ProjectError, match="not UTF-8"):
            Project.load(path)

    def test_non_ascii_round_trip(self, tmp_path, make_record):
        """Non-ASCII record fields survive a save and load."""
        record = make_record(title="Über Lernen", authors=("Müller",))
        project = Project.create(tmp_path / "data", [record])
        path = project.save(tmp_path / "project.json")

        assert Project.load(path).entries[0].record.title == "Über Lernen"

    def test_load_bad_layout(self, tmp_path):
        """Files with the wrong layout raise a project error."""
        path = tmp_path / "project.json"
        path.write_text(json.dumps({"entries": "nope"}))

        with pytest.raises(ProjectError, match="Invalid project file"):
            Project.load(path)

    def test_load_missing_data_dir(self, project, tmp_path):
        """The data directory must exist."""
        path = project.save(tmp_path / "project.json")
        project.data_path.rmdir()

        with pytest.raises(ProjectError, match="Data directory"):
            Project.load(path)


class TestProjectHelpers:
    """Test project helpers."""

    def test_mini_file_path(self, project):
        """Text files are grouped by the PDF's parent directory name."""
        path = project.mini_file_path("/lib/My.Data/PDF/12345/paper.pdf")

        assert path == project.data_path / "12345" / "paper.pdf.txt"

    def test_build_index(self, tmp_path, make_entry, sink):
        """The index covers entries whose PDFs exist."""
        present = make_entry(title="Present")
        missing = make_entry(title="Missing", pdf_exists=False)
        project = Project.create(tmp_path / "data", [])
        project.entries = [present, missing]

        index = project.build_index(sink)

        assert index.entries == [present]
