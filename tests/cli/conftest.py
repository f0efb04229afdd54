"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from bibsift.cli.main import cli
from bibsift.storage.project import Project


@pytest.fixture
def cli_runner():
    """Click CLI test runner bound to the bibsift command group."""

    class BibsiftCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore[override]
            return super().invoke(cli, args, catch_exceptions=False, **kwargs)

    return BibsiftCliRunner()


@pytest.fixture
def project_file(tmp_path, make_entry, long_text):
    """Saved project with two converted entries and one unconverted entry."""
    project = Project.create(tmp_path / "data", [])
    project.entries = [
        make_entry(
            title="Deep Learning",
            publication="Nature",
            year=2015,
            authors=("Smith",),
            text=long_text,
        ),
        make_entry(
            title="Graph Networks",
            publication="Science",
            year=2018,
            authors=("Jones", "Lee"),
            text="graph networks " * 200,
        ),
        make_entry(title="Unconverted Paper", publication="Cell", year=2020),
    ]
    return project.save(tmp_path / "project.json")
