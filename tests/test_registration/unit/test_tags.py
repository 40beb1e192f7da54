"""Tag helper tests."""

from __future__ import annotations

import pytest
from simple_spec_runner.test_registration.registration_errors import NullTagError
from simple_spec_runner.test_registration.tags import Tag, TagMap, normalize_tags


def test_tags_and_strings_normalize_to_the_same_identifiers() -> None:
    assert normalize_tags([Tag("slow"), "slow", "db"]) == frozenset({"slow", "db"})


def test_none_tag_is_rejected() -> None:
    with pytest.raises(NullTagError):
        normalize_tags(["ok", None])


def test_tag_name_must_not_be_blank() -> None:
    with pytest.raises(ValueError):
        Tag("  ")


def test_tag_map_drops_empty_tag_sets() -> None:
    tag_map = TagMap({"a": frozenset({"x"}), "b": frozenset()})

    assert list(tag_map) == ["a"]
    assert len(tag_map) == 1
