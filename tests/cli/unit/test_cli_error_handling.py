"""CLI error-handling tests."""

from __future__ import annotations

from simple_spec_runner.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["list"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--suite" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_run_without_suites_reports_a_domain_error(capsys) -> None:
    exit_code = main(["run"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "No suites to run" in captured.err
    assert "Traceback" not in captured.err
