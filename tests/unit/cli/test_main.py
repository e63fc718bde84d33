"""Unit tests for the main CLI application."""

import logging

from longpath import __version__
from longpath.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"longpath version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """Top-level help lists the commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.output
        assert "config" in result.output

    def test_verbose_sets_debug_level(self, sample_tree) -> None:
        """--verbose enables debug logging."""
        result = runner.invoke(app, ["--verbose", "scan", str(sample_tree), "-f", "csv"])

        assert result.exit_code == 0
        assert logging.getLogger("longpath").level == logging.DEBUG

    def test_quiet_sets_error_level(self, sample_tree) -> None:
        """--quiet only logs errors."""
        result = runner.invoke(app, ["--quiet", "scan", str(sample_tree), "-f", "csv"])

        assert result.exit_code == 0
        assert logging.getLogger("longpath").level == logging.ERROR
