"""Configuration loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from simple_spec_runner.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "spec-runner.yaml",
        """
suites:
  - "specs.stack_spec:suite"
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.suites == ("specs.stack_spec:suite",)
    assert configuration.filter.include is None
    assert configuration.filter.exclude == ()
    assert configuration.run.test_name is None
    assert configuration.run.stop_on_failure is False
    assert configuration.report.workbook is None


def test_loads_every_section(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "spec-runner.yaml",
        """
suites:
  - "specs.stack_spec:suite"
  - "specs.queue_spec:build_suite"
filter:
  include: ["fast", "db"]
  exclude: slow
run:
  test_name: "A Stack should be empty"
  stop_on_failure: true
report:
  workbook: "out/results.xlsx"
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.suites == ("specs.stack_spec:suite", "specs.queue_spec:build_suite")
    assert configuration.filter.include == ("fast", "db")
    assert configuration.filter.exclude == ("slow",)
    assert configuration.run.test_name == "A Stack should be empty"
    assert configuration.run.stop_on_failure is True
    assert configuration.report.workbook == (tmp_path / "out" / "results.xlsx").resolve()


def test_empty_file_is_an_empty_configuration(tmp_path: Path) -> None:
    configuration = load_configuration(_write_file(tmp_path / "empty.yaml", ""))

    assert configuration.suites == ()


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- just\n- a list\n", "root must be a mapping"),
        ("suites: 3\n", "suites must be a string or list"),
        ("suites: ['not a target!']\n", "must look like"),
        ("filter: []\n", "'filter' must be a mapping"),
        ("filter:\n  include: []\n", "at least one tag"),
        ("filter:\n  exclude: [1]\n", "entries must be strings"),
        ("run:\n  stop_on_failure: 'yes'\n", "must be a boolean"),
        ("report:\n  workbook: results.csv\n", ".xlsx"),
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "bad.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)
