"""Tests for durafmt.cli.main module."""

from __future__ import annotations

import re

from typer.testing import CliRunner

from durafmt import __version__
from durafmt.cli.main import app

runner = CliRunner()

# Pattern to strip ANSI escape codes from output
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_PATTERN.sub("", text)


class TestCLIHelp:
    """Test CLI help functionality."""

    def test_help_exits_successfully(self):
        """Test that --help exits with code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0

    def test_help_shows_app_name(self):
        """Test that --help output contains the app name."""
        result = runner.invoke(app, ["--help"])
        assert "durafmt" in result.output

    def test_help_shows_description(self):
        """Test that --help output contains the app description."""
        result = runner.invoke(app, ["--help"])
        assert "human-entered durations" in strip_ansi(result.output).lower()

    def test_help_shows_available_commands(self):
        """Test that --help lists available commands."""
        result = runner.invoke(app, ["--help"])
        assert "parse" in result.output
        assert "render" in result.output
        assert "units" in result.output

    def test_help_shows_version_option(self):
        """Test that --help mentions the version option."""
        result = runner.invoke(app, ["--help"])
        # Strip ANSI codes as Rich may insert them between characters
        assert "--version" in strip_ansi(result.output)


class TestCLIVersion:
    """Test CLI version functionality."""

    def test_version_exits_successfully(self):
        """Test that --version exits with code 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0

    def test_version_shows_version_number(self):
        """Test that --version displays the version number."""
        result = runner.invoke(app, ["--version"])
        assert __version__ in result.output

    def test_version_short_flag(self):
        """Test that -v works as a short flag for version."""
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCLINoArgs:
    """Test CLI behavior with no arguments."""

    def test_no_args_shows_help(self):
        """Test that running without arguments shows help."""
        result = runner.invoke(app, [])
        # App is configured with no_args_is_help=True
        assert result.exit_code == 2
        assert "Usage" in result.output


class TestCommandHelp:
    """Test help output of each command."""

    def test_parse_help(self):
        """Test that parse --help lists its options."""
        result = runner.invoke(app, ["parse", "--help"])
        output = strip_ansi(result.output)
        assert result.exit_code == 0
        assert "--mode" in output
        assert "--precision" in output
        assert "--labels" in output

    def test_render_help(self):
        """Test that render --help lists the unit option."""
        result = runner.invoke(app, ["render", "--help"])
        assert result.exit_code == 0
        assert "--unit" in strip_ansi(result.output)

    def test_unknown_command(self):
        """Test that an unknown command exits with code 2."""
        result = runner.invoke(app, ["convert", "1h"])
        assert result.exit_code == 2


class TestDebugLogging:
    """Test the global --debug flag."""

    def test_debug_flag_accepted(self):
        """Test that --debug runs the command normally."""
        result = runner.invoke(app, ["--debug", "parse", "2 days"])
        assert result.exit_code == 0
        assert "2 days" in result.output
