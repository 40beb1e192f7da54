"""Suite discovery exports."""

from .suite_loader import SuiteDiscoveryError, load_suite_target, load_suite_targets

__all__ = [
    "SuiteDiscoveryError",
    "load_suite_target",
    "load_suite_targets",
]
