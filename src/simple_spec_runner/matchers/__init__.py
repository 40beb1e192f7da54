"""Matchers and pass/fail signaling exports."""

from .assertions import TestFailedError, TestPendingError, fail, intercept, pending
from .capabilities import (
    MUST_MATCHERS,
    SHOULD_MATCHERS,
    MatcherCapability,
    MustExpectation,
    ShouldExpectation,
    check,
    must,
    should,
)
from .matcher_algebra import (
    Matcher,
    MatchResult,
    be,
    be_a,
    be_empty,
    be_property,
    contain,
    equal,
    have_length,
    have_size,
    not_,
)
from .property_registry import (
    DEFAULT_PROPERTY_REGISTRY,
    PropertyRegistry,
    PropertyResolutionError,
)

__all__ = [
    "TestFailedError",
    "TestPendingError",
    "fail",
    "intercept",
    "pending",
    "MUST_MATCHERS",
    "SHOULD_MATCHERS",
    "MatcherCapability",
    "MustExpectation",
    "ShouldExpectation",
    "check",
    "must",
    "should",
    "Matcher",
    "MatchResult",
    "be",
    "be_a",
    "be_empty",
    "be_property",
    "contain",
    "equal",
    "have_length",
    "have_size",
    "not_",
    "DEFAULT_PROPERTY_REGISTRY",
    "PropertyRegistry",
    "PropertyResolutionError",
]
