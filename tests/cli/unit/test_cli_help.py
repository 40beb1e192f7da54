"""CLI smoke tests."""

from click.testing import CliRunner
from simple_spec_runner.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "list" in result.output
    assert "run" in result.output


def test_run_help_lists_filter_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    for option in ("--suite", "--test", "--include", "--exclude", "--stop-on-failure"):
        assert option in result.output
