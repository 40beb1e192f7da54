"""Include/exclude tag filtering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from simple_spec_runner.test_registration.registry import TestRegistry
from simple_spec_runner.test_registration.tags import IGNORE_TAG_NAME, TagLike, normalize_tags


@dataclass(frozen=True)
class FilterDecision:
    """Whether a test is filtered out and, if not, whether it is ignored."""

    filtered_out: bool
    ignored: bool


class TagFilter:
    """Selects tests by tag.

    A test is kept when `include` is None or shares a tag with it, and it shares
    no tag with `exclude`. An excluded tag wins over the ignore tag, so such a
    test is not reported at all. Kept tests carrying the ignore tag are ignored.
    """

    def __init__(
        self,
        include: Iterable[TagLike] | None = None,
        exclude: Iterable[TagLike] = (),
    ) -> None:
        if include is not None:
            include_set = normalize_tags(include)
            if not include_set:
                raise ValueError("include was given, but contained no tags")
            self.include: frozenset[str] | None = include_set
        else:
            self.include = None
        self.exclude = normalize_tags(exclude) - {IGNORE_TAG_NAME}

    def decide(self, tags: frozenset[str]) -> FilterDecision:
        if self.include is not None and not tags & self.include:
            return FilterDecision(filtered_out=True, ignored=False)
        if tags & self.exclude:
            return FilterDecision(filtered_out=True, ignored=False)
        return FilterDecision(filtered_out=False, ignored=IGNORE_TAG_NAME in tags)

    def runnable_count(self, registry: TestRegistry) -> int:
        """Number of tests that would run; ignored and filtered tests are not counted."""
        total = 0
        for test_case in registry:
            decision = self.decide(test_case.tags)
            if not decision.filtered_out and not decision.ignored:
                total += 1
        return total

    def __repr__(self) -> str:
        include = sorted(self.include) if self.include is not None else None
        return f"TagFilter(include={include!r}, exclude={sorted(self.exclude)!r})"


DEFAULT_TAG_FILTER = TagFilter()
