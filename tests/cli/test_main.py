"""Tests for the main CLI entry point and application setup."""

import logging

import click

from bibsift.cli.main import BibsiftGroup, Context, cli, create_console, setup_logging


class TestCLIEntryPoint:
    """Test the main CLI entry point."""

    def test_cli_help(self, cli_runner):
        """Help lists the commands."""
        result = cli_runner.invoke(["--help"])

        assert result.exit_code == 0
        for command in ("create", "show", "convert", "search", "list"):
            assert command in result.output

    def test_cli_version_flag(self, cli_runner):
        """Test --version flag."""
        result = cli_runner.invoke(["--version"])

        assert result.exit_code == 0
        assert "bibsift version" in result.output

    def test_cli_with_invalid_config_file(self, cli_runner, tmp_path, project_file):
        """Unparseable config files are reported."""
        bad_config = tmp_path / "bad_config.yaml"
        bad_config.write_text("invalid: yaml: content:")

        result = cli_runner.invoke(
            ["--config", str(bad_config), "list", "-p", str(project_file), "years"]
        )

        assert result.exit_code == 1
        assert "Error loading config file" in result.output

    def test_library_errors_reported(self, cli_runner, tmp_path):
        """Errors from commands are printed without a traceback."""
        result = cli_runner.invoke(["list", "-p", str(tmp_path / "none.json"), "years"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" not in result.output

    def test_context_initialization(self, cli_runner):
        """Commands receive the shared context."""

        @click.command("show-context")
        @click.pass_context
        def show_context(ctx):
            assert isinstance(ctx.obj, Context)
            assert ctx.obj.console is not None
            assert ctx.obj.config["format"] == "pretty"
            click.echo("Context OK")

        cli.add_command(show_context)
        try:
            result = cli_runner.invoke(["show-context"])
        finally:
            cli.commands.pop("show-context")

        assert result.exit_code == 0
        assert "Context OK" in result.output

    def test_group_class(self):
        """The command group handles errors itself."""
        assert isinstance(cli, BibsiftGroup)


class TestSetup:
    """Test logging and console setup."""

    def test_logging_levels(self):
        """Flags select the root logging level."""
        setup_logging(quiet=True)
        assert logging.getLogger().level == logging.WARNING

        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_console_no_color(self):
        """Consoles can be created without color."""
        console = create_console(no_color=True)

        assert console.no_color
        assert console.width == 120
