"""Resolve `package.module:attribute` targets into suites."""

from __future__ import annotations

import importlib
import logging

from simple_spec_runner.suite_dsl.suite import Suite
from simple_spec_runner.test_registration.registration_errors import RegistrationError

_LOGGER = logging.getLogger(__name__)


class SuiteDiscoveryError(Exception):
    """Raised when a suite target cannot be resolved into a suite."""


def load_suite_target(target: str) -> Suite:
    """Import the module named by `target` and return the suite it points at.

    The attribute may be a `Suite` instance or a zero-argument callable
    returning one; a callable is invoked on every load so each run sees a
    freshly registered suite. Without `:attribute`, the module must expose
    a `suite` attribute.
    """
    module_name, _, attribute_path = target.partition(":")
    module_name = module_name.strip()
    attribute_path = attribute_path.strip() or "suite"
    if not module_name:
        raise SuiteDiscoveryError(f"Suite target '{target}' does not name a module.")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SuiteDiscoveryError(f"Cannot import module '{module_name}': {exc}") from exc

    candidate: object = module
    for part in attribute_path.split("."):
        try:
            candidate = getattr(candidate, part)
        except AttributeError as exc:
            raise SuiteDiscoveryError(
                f"Module '{module_name}' has no attribute '{attribute_path}'."
            ) from exc

    if isinstance(candidate, Suite):
        return candidate
    if isinstance(candidate, type) or not callable(candidate):
        raise SuiteDiscoveryError(
            f"Suite target '{target}' is neither a Suite nor a factory returning one."
        )

    _LOGGER.debug("Building suite from factory %s", target)
    try:
        built = candidate()
    except RegistrationError as exc:
        raise SuiteDiscoveryError(f"Suite target '{target}' failed to register: {exc}") from exc
    if not isinstance(built, Suite):
        raise SuiteDiscoveryError(
            f"Suite factory '{target}' returned {type(built).__name__}, not a Suite."
        )
    return built


def load_suite_targets(targets: tuple[str, ...] | list[str]) -> list[Suite]:
    """Load every target in order."""
    return [load_suite_target(target) for target in targets]
