"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, validate_suite_target
from .runtime_settings import FilterSettings, ReportSettings, RunConfiguration, RunSettings

__all__ = [
    "RunConfiguration",
    "FilterSettings",
    "ReportSettings",
    "RunSettings",
    "ConfigurationError",
    "load_configuration",
    "validate_suite_target",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
