"""Tag entities and tag-map helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .registration_errors import NullTagError

IGNORE_TAG_NAME = "simple_spec_runner.Ignore"


@dataclass(frozen=True)
class Tag:
    """Label attachable to a test case for filtering and grouping."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Tag name must be a non-empty string.")


IGNORE_TAG = Tag(IGNORE_TAG_NAME)

TagLike = Tag | str


def tag_name(tag: TagLike) -> str:
    """Return the identifier of a tag given as `Tag` or plain string."""
    if isinstance(tag, Tag):
        return tag.name
    if isinstance(tag, str) and tag.strip():
        return tag
    raise ValueError(f"Unsupported tag value: {tag!r}")


def normalize_tags(tags: Iterable[TagLike | None]) -> frozenset[str]:
    """Normalize tags to a set of identifiers.

    A `None` entry anywhere fails the whole call, not just that one tag.
    """
    collected = tuple(tags)
    if any(tag is None for tag in collected):
        raise NullTagError("a test tag was None")
    return frozenset(tag_name(tag) for tag in collected)  # type: ignore[arg-type]


class TagMap(Mapping[str, frozenset[str]]):
    """Read-only view from test name to its tag identifiers.

    Only tests carrying at least one tag have an entry.
    """

    def __init__(self, entries: Mapping[str, frozenset[str]] | None = None) -> None:
        self._entries = {name: tags for name, tags in (entries or {}).items() if tags}

    def __getitem__(self, name: str) -> frozenset[str]:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TagMap({self._entries!r})"
