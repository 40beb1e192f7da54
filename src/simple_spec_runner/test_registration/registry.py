"""Ordered, duplicate-checked registry of test cases."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import count

from .registration_errors import (
    DuplicateTestNameError,
    NullTestNameError,
    RegistrationClosedError,
    UnknownTestNameError,
)
from .tags import IGNORE_TAG_NAME, TagLike, TagMap, normalize_tags

TestBody = Callable[[], object]


@dataclass(eq=False)
class Branch:
    """Grouping node; the trunk is the branch without text."""

    text: str | None = None
    child_prefix: str | None = None
    parent: Branch | None = None
    children: list[Node] = field(default_factory=list)

    @property
    def is_trunk(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        """Number of description branches above and including this one."""
        level = 0
        node = self
        while node.parent is not None:
            level += 1
            node = node.parent
        return level

    def name_prefix(self) -> str:
        if self.parent is None:
            return ""
        label = self.text or ""
        if self.child_prefix:
            label = f"{label} {self.child_prefix}"
        return f"{self.parent.name_prefix()} {label}".strip()

    def display_text(self) -> str:
        label = self.text or ""
        if self.child_prefix:
            return f"{label} {self.child_prefix}"
        return label


@dataclass(frozen=True)
class TestCase:  # pylint: disable=too-many-instance-attributes
    """Uniquely named, deferred unit of executable verification."""

    __test__ = False

    name: str
    text: str
    tags: frozenset[str]
    body: TestBody
    registration_order: int
    pending: bool = False
    parent: Branch | None = field(default=None, compare=False, repr=False)

    @property
    def is_ignored(self) -> bool:
        return IGNORE_TAG_NAME in self.tags

    @property
    def depth(self) -> int:
        return self.parent.depth if self.parent is not None else 0


@dataclass(frozen=True)
class TestLeaf:
    """Tree node holding one registered test case."""

    __test__ = False

    test_case: TestCase


@dataclass(frozen=True)
class InfoLeaf:
    """Tree node holding an info message given during registration."""

    message: str
    depth: int


Node = Branch | TestLeaf | InfoLeaf


class TestRegistry:
    """Collects test cases in registration order and rejects duplicates.

    Iteration order is depth-first declaration order, which is also the order
    returned by `all_names`.
    """

    __test__ = False

    def __init__(self) -> None:
        self._trunk = Branch()
        self._current = self._trunk
        self._cases: dict[str, TestCase] = {}
        self._order: list[str] = []
        self._orders = count()
        self._sealed = False

    @property
    def trunk(self) -> Branch:
        return self._trunk

    @property
    def current_branch(self) -> Branch:
        return self._current

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Close the registration phase; the registry is read-only afterwards."""
        self._sealed = True
        self._current = self._trunk

    # pylint: disable=too-many-arguments
    def register(
        self,
        text: str | None,
        body: TestBody,
        tags: tuple[TagLike | None, ...] | list[TagLike | None] = (),
        *,
        pending: bool = False,
        extra_tags: frozenset[str] = frozenset(),
    ) -> TestCase:
        """Append a test case with the next registration order."""
        if text is None or not str(text).strip():
            raise NullTestNameError("test name was None or empty")
        tag_names = normalize_tags(tags) | extra_tags
        self._ensure_open()
        if not callable(body):
            raise TypeError(f"Test body for '{text}' must be callable.")

        name = f"{self._current.name_prefix()} {text}".strip()
        if name in self._cases:
            raise DuplicateTestNameError(name)

        test_case = TestCase(
            name=name,
            text=text,
            tags=tag_names,
            body=body,
            registration_order=next(self._orders),
            pending=pending,
            parent=self._current,
        )
        self._cases[name] = test_case
        self._order.append(name)
        self._current.children.append(TestLeaf(test_case))
        return test_case

    # pylint: enable=too-many-arguments

    def register_ignored(
        self,
        text: str | None,
        body: TestBody,
        tags: tuple[TagLike | None, ...] | list[TagLike | None] = (),
    ) -> TestCase:
        """Register a test that additionally carries the reserved ignore tag."""
        return self.register(text, body, tags, extra_tags=frozenset({IGNORE_TAG_NAME}))

    def open_branch(self, text: str | None, child_prefix: str | None = None) -> Branch:
        if text is None:
            raise NullTestNameError("description text was None")
        self._ensure_open()
        branch = Branch(text=text, child_prefix=child_prefix, parent=self._current)
        self._current.children.append(branch)
        self._current = branch
        return branch

    def close_branch(self, branch: Branch) -> None:
        if branch is not self._current or branch.parent is None:
            raise RuntimeError("Branches must be closed in the order they were opened.")
        self._current = branch.parent

    @contextmanager
    def branch(self, text: str | None, child_prefix: str | None = None) -> Iterator[Branch]:
        opened = self.open_branch(text, child_prefix)
        try:
            yield opened
        finally:
            self.close_branch(opened)

    def open_flat_branch(self, text: str | None) -> Branch:
        """Start a new branch directly off the trunk and make it current."""
        if text is None:
            raise NullTestNameError("subject text was None")
        self._ensure_open()
        branch = Branch(text=text, parent=self._trunk)
        self._trunk.children.append(branch)
        self._current = branch
        return branch

    def record_info(self, message: str) -> None:
        self._ensure_open()
        self._current.children.append(InfoLeaf(message=message, depth=self._current.depth))

    def all_names(self) -> tuple[str, ...]:
        return tuple(self._order)

    def tags_for(self, name: str) -> frozenset[str]:
        test_case = self._cases.get(name)
        return test_case.tags if test_case is not None else frozenset()

    def tag_map(self) -> TagMap:
        return TagMap({name: case.tags for name, case in self._cases.items()})

    def get(self, name: str) -> TestCase:
        try:
            return self._cases[name]
        except KeyError as exc:
            raise UnknownTestNameError(name) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[TestCase]:
        return (self._cases[name] for name in self._order)

    def _ensure_open(self) -> None:
        if self._sealed:
            raise RegistrationClosedError(
                "Tests and groups can only be registered while the suite is being constructed."
            )
