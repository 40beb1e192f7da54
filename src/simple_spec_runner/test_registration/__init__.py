"""Test registration domain exports."""

from .nesting_guard import (
    NestingGuard,
    RegistrationAction,
    RegistrationAttempt,
    RegistrationPhase,
)
from .registration_errors import (
    DuplicateTestNameError,
    NullTagError,
    NullTestNameError,
    RegistrationClosedError,
    RegistrationError,
    UnknownTestNameError,
)
from .registry import Branch, InfoLeaf, TestCase, TestLeaf, TestRegistry
from .tags import IGNORE_TAG, IGNORE_TAG_NAME, Tag, TagMap, normalize_tags

__all__ = [
    "Branch",
    "InfoLeaf",
    "TestCase",
    "TestLeaf",
    "TestRegistry",
    "NestingGuard",
    "RegistrationAction",
    "RegistrationAttempt",
    "RegistrationPhase",
    "RegistrationError",
    "DuplicateTestNameError",
    "NullTagError",
    "NullTestNameError",
    "RegistrationClosedError",
    "UnknownTestNameError",
    "IGNORE_TAG",
    "IGNORE_TAG_NAME",
    "Tag",
    "TagMap",
    "normalize_tags",
]
