"""Tests for CLI option consistency across all commands."""

import re

from typer.testing import CliRunner

from gh_release_cache.cli.main import app

READ_COMMANDS = ["stable", "nightly", "pull-requests"]


class TestOptionConsistency:
    """Test that CLI options are consistent across commands."""

    def setup_method(self):
        """Set up test runner."""
        self.runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})

    def test_help_shorthand_works_on_all_commands(self):
        """Test that -h works for --help on all commands."""
        commands_to_test = [
            ["-h"],
            ["latest", "-h"],
            ["stable", "-h"],
            ["nightly", "-h"],
            ["pull-requests", "-h"],
            ["event", "-h"],
            ["version", "-h"],
        ]

        for cmd in commands_to_test:
            result = self.runner.invoke(app, cmd)
            assert result.exit_code == 0, (
                f"Command {' '.join(cmd)} failed: {result.stdout}"
            )
            assert "Usage:" in result.stdout, (
                f"No help text in {' '.join(cmd)}: {result.stdout}"
            )

    def test_read_commands_share_paging_options(self):
        """Test that every paged read command takes the same paging options."""
        for command in READ_COMMANDS:
            result = self.runner.invoke(app, [command, "--help"])
            assert result.exit_code == 0, f"Command {command} failed"
            for option in ("--offset", "-o", "--page-size", "-p", "--table", "-t"):
                assert option in result.stdout, f"No {option} in {command}"

    def test_no_conflicting_shorthand_options(self):
        """Test that no command has conflicting shorthand options."""
        for command in READ_COMMANDS + ["event"]:
            result = self.runner.invoke(app, [command, "--help"])
            assert result.exit_code == 0

            short_options = re.findall(r"\s-([a-zA-Z])\s", result.stdout)

            assert len(short_options) == len(set(short_options)), (
                f"Duplicate shorthand options in {command}: {short_options}"
            )
