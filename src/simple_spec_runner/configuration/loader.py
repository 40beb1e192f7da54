"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import FilterSettings, ReportSettings, RunConfiguration, RunSettings

_SUITE_TARGET_PATTERN = re.compile(r"^[A-Za-z_][\w.]*(:[A-Za-z_][\w.]*)?$")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> RunConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return RunConfiguration(
        path=path,
        suites=_parse_suites(parsed.get("suites")),
        filter=_parse_filter_section(parsed.get("filter")),
        run=_parse_run_section(parsed.get("run")),
        report=_parse_report_section(parsed.get("report"), path.parent),
    )


def validate_suite_target(value: Any, field_name: str = "suites") -> str:
    """Validate one `package.module:attribute` suite target."""
    target = _require_non_empty_string(value, f"{field_name} entry")
    if not _SUITE_TARGET_PATTERN.fullmatch(target):
        raise ConfigurationError(
            f"{field_name} entry '{target}' must look like 'package.module:attribute'."
        )
    return target


def _parse_suites(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (validate_suite_target(value),)
    if not isinstance(value, Sequence):
        raise ConfigurationError("suites must be a string or list of strings.")
    return tuple(validate_suite_target(item) for item in value)


def _parse_filter_section(value: Any) -> FilterSettings:
    section = _optional_mapping(value, "filter")
    include_raw = section.get("include")
    include = (
        None if include_raw is None else _normalize_string_sequence(include_raw, "filter.include")
    )
    if include is not None and not include:
        raise ConfigurationError("filter.include must contain at least one tag when given.")
    exclude = _normalize_string_sequence(section.get("exclude"), "filter.exclude")
    return FilterSettings(include=include, exclude=exclude)


def _parse_run_section(value: Any) -> RunSettings:
    section = _optional_mapping(value, "run")
    test_name = _optional_string(section.get("test_name"), "run.test_name")
    stop_on_failure = _require_bool(section.get("stop_on_failure", False), "run.stop_on_failure")
    return RunSettings(test_name=test_name, stop_on_failure=stop_on_failure)


def _parse_report_section(value: Any, base_path: Path) -> ReportSettings:
    section = _optional_mapping(value, "report")
    workbook = _optional_string(section.get("workbook"), "report.workbook")
    if workbook is None:
        return ReportSettings(workbook=None)
    if not workbook.lower().endswith(".xlsx"):
        raise ConfigurationError("report.workbook must point to an .xlsx file.")
    return ReportSettings(workbook=_resolve_path(base_path, workbook))


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
