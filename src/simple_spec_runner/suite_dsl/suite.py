"""Suite builder: registration phase, test styles and the run bracket."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from simple_spec_runner.event_reporting.emitter import EventEmitter
from simple_spec_runner.event_reporting.events import NameInfo, Tracker
from simple_spec_runner.event_reporting.informer import (
    ExecutionContext,
    Informer,
    InformerSlot,
    RegistrationInformer,
    SuiteInformer,
    ZombieInformer,
)
from simple_spec_runner.event_reporting.reporters import (
    NeverStop,
    Reporter,
    Stopper,
    wrap_reporter_if_necessary,
)
from simple_spec_runner.matchers.capabilities import (
    SHOULD_MATCHERS,
    MatcherCapability,
    MustExpectation,
    ShouldExpectation,
)
from simple_spec_runner.run_execution.execution_engine import (
    ABORTING_ERRORS,
    ExecutionEngine,
    elapsed_millis,
)
from simple_spec_runner.run_execution.tag_filter import DEFAULT_TAG_FILTER, TagFilter
from simple_spec_runner.test_registration.nesting_guard import (
    NestingGuard,
    RegistrationAction,
    RegistrationAttempt,
)
from simple_spec_runner.test_registration.registry import TestBody, TestRegistry
from simple_spec_runner.test_registration.tags import TagLike, TagMap

from .shared_behavior import BehaviorProvider, SharedBehaviorRegistry

_LOGGER = logging.getLogger(__name__)

Body = TypeVar("Body", bound=Callable[[], object])
TagList = Sequence[TagLike | None]
SuiteDefinition = Callable[["Suite"], None]


class Suite:  # pylint: disable=too-many-public-methods,too-many-instance-attributes
    """A test-bearing unit built once by a registration phase and run any number of times.

    `definition` is called with the new suite during construction; everything it
    registers lands in the suite's registry in declaration order. Registration
    errors propagate out of the constructor. Calls registering tests or groups
    from inside a running test do not raise; they fail the running test.

    Example::

        def stack_spec(spec: Suite) -> None:
            with spec.describe("A Stack"):

                @spec.it("should be empty when created")
                def _() -> None:
                    spec.expect(Stack()).should(be_empty())

        suite = Suite("StackSpec", stack_spec)
        suite.run(reporter=EventRecorder())
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        name: str,
        definition: SuiteDefinition,
        *,
        shared_behaviors: SharedBehaviorRegistry | None = None,
        matchers: MatcherCapability = SHOULD_MATCHERS,
        suite_class_name: str | None = None,
        suite_id: str | None = None,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Suite name must be a non-empty string.")
        self.name = name
        self.suite_id = suite_id or name
        self.suite_class_name = suite_class_name or _qualified_name(definition)
        self._matchers = matchers
        self._shared_behaviors = shared_behaviors or SharedBehaviorRegistry()
        self._registry = TestRegistry()
        self._guard = NestingGuard()
        self._informers = InformerSlot(RegistrationInformer(self._registry.record_info))
        self._engine = ExecutionEngine(self._registry, self._guard, self._informers)

        definition(self)
        self._registry.seal()

    # pylint: enable=too-many-arguments

    # -- introspection -----------------------------------------------------

    @property
    def registry(self) -> TestRegistry:
        return self._registry

    @property
    def matchers(self) -> MatcherCapability:
        return self._matchers

    def test_names(self) -> tuple[str, ...]:
        return self._registry.all_names()

    def tags(self) -> TagMap:
        return self._registry.tag_map()

    def expected_test_count(self, tag_filter: TagFilter | None = None) -> int:
        return (tag_filter or DEFAULT_TAG_FILTER).runnable_count(self._registry)

    def current_name_info(self) -> NameInfo | None:
        """Scope of the caller: None off the executing thread and outside a run."""
        context: ExecutionContext | None = getattr(self._informers.current, "context", None)
        if context is None:
            return None
        return context.name_info_for_caller()

    # -- informer ----------------------------------------------------------

    @property
    def info(self) -> Informer:
        """Informer for the current phase; keeps delegating if held past the run."""
        return self._informers

    def given(self, text: str) -> None:
        self._informers(f"Given {text}")

    def when_(self, text: str) -> None:
        self._informers(f"When {text}")

    def then(self, text: str) -> None:
        self._informers(f"Then {text}")

    def and_(self, text: str) -> None:
        self._informers(f"And {text}")

    def expect(self, left: object) -> ShouldExpectation | MustExpectation:
        return self._matchers.expect(left)

    # -- registration: fun style -------------------------------------------

    def test(
        self,
        name: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(name, body, tags, pending=pending)

    def ignore(
        self, name: str, body: TestBody | None = None, *, tags: TagList = ()
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(name, body, tags, ignored=True)

    # -- registration: spec style ------------------------------------------

    @contextmanager
    def describe(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text) as attempt:
            yield attempt

    def it(
        self,
        text: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(text, body, tags, pending=pending)

    they = it

    def ignore_it(
        self, text: str, body: TestBody | None = None, *, tags: TagList = ()
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(text, body, tags, ignored=True)

    # -- registration: word style ------------------------------------------

    @contextmanager
    def when(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text, "when") as attempt:
            yield attempt

    @contextmanager
    def should(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text, "should") as attempt:
            yield attempt

    @contextmanager
    def must(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text, "must") as attempt:
            yield attempt

    @contextmanager
    def can(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text, "can") as attempt:
            yield attempt

    @contextmanager
    def that(self, text: str) -> Iterator[RegistrationAttempt]:
        with self._group(text, "that") as attempt:
            yield attempt

    def in_(
        self,
        text: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(text, body, tags, pending=pending)

    def ignore_in(
        self, text: str, body: TestBody | None = None, *, tags: TagList = ()
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(text, body, tags, ignored=True)

    # -- registration: flat style ------------------------------------------

    def subject(self, text: str) -> RegistrationAttempt:
        """Start a new flat subject; following `it_*` calls attach to it."""
        attempt = self._guard.check_registration(RegistrationAction.GROUP)
        if attempt.accepted:
            self._registry.open_flat_branch(text)
        return attempt

    def it_should(
        self,
        text: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(_verb_text("should", text), body, tags, pending=pending)

    def it_must(
        self,
        text: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(_verb_text("must", text), body, tags, pending=pending)

    def it_can(
        self,
        text: str,
        body: TestBody | None = None,
        *,
        tags: TagList = (),
        pending: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(_verb_text("can", text), body, tags, pending=pending)

    def ignore_should(
        self, text: str, body: TestBody | None = None, *, tags: TagList = ()
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        return self._test_or_decorator(_verb_text("should", text), body, tags, ignored=True)

    # -- shared behavior ---------------------------------------------------

    def behaves_like(self, behavior: str | BehaviorProvider) -> RegistrationAttempt:
        """Register the tests of a shared behavior into the current group."""
        attempt = self._guard.check_registration(RegistrationAction.SHARED_BEHAVIOR)
        if not attempt.accepted:
            return attempt
        provider = (
            self._shared_behaviors.lookup(behavior) if isinstance(behavior, str) else behavior
        )
        provider(self)
        return attempt

    # -- running -----------------------------------------------------------

    def run(
        self,
        test_name: str | None = None,
        *,
        reporter: Reporter,
        stopper: Stopper | None = None,
        tag_filter: TagFilter | None = None,
        tracker: Tracker | None = None,
    ) -> None:
        """Run the suite, bracketing its events with suite starting and completed/aborted."""
        emitter = EventEmitter(
            wrap_reporter_if_necessary(reporter),
            tracker or Tracker(),
            NameInfo(
                suite_name=self.name,
                suite_id=self.suite_id,
                suite_class_name=self.suite_class_name,
            ),
        )
        started = time.monotonic()
        emitter.suite_starting()
        suite_informer = SuiteInformer(
            ExecutionContext(emitter.name_info_for(None)), emitter.info_provided
        )
        self._informers.install(suite_informer)
        try:
            try:
                self._engine.run_tests(
                    test_name,
                    emitter=emitter,
                    stopper=stopper or NeverStop(),
                    tag_filter=tag_filter or DEFAULT_TAG_FILTER,
                )
            finally:
                self._informers.restore(suite_informer, ZombieInformer(self.name))
        except ABORTING_ERRORS + (KeyboardInterrupt, SystemExit) as exc:
            emitter.suite_aborted(_abort_message(exc), exc, elapsed_millis(started))
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            _LOGGER.warning("Suite %s aborted: %s", self.name, exc)
            emitter.suite_aborted(_abort_message(exc), exc, elapsed_millis(started))
            return
        emitter.suite_completed(elapsed_millis(started))

    # -- internals ---------------------------------------------------------

    @contextmanager
    def _group(self, text: str, child_prefix: str | None = None) -> Iterator[RegistrationAttempt]:
        attempt = self._guard.check_registration(RegistrationAction.GROUP)
        if not attempt.accepted:
            yield attempt
            return
        with self._registry.branch(text, child_prefix):
            yield attempt

    def _test_or_decorator(
        self,
        text: str | None,
        body: TestBody | None,
        tags: TagList,
        *,
        pending: bool = False,
        ignored: bool = False,
    ) -> Callable[[Body], Body] | RegistrationAttempt:
        if body is not None:
            return self._register(text, body, tags, pending=pending, ignored=ignored)

        def decorate(function: Body) -> Body:
            self._register(text, function, tags, pending=pending, ignored=ignored)
            return function

        return decorate

    def _register(
        self,
        text: str | None,
        body: TestBody,
        tags: TagList,
        *,
        pending: bool,
        ignored: bool,
    ) -> RegistrationAttempt:
        action = RegistrationAction.IGNORED_TEST if ignored else RegistrationAction.TEST
        attempt = self._guard.check_registration(action)
        if not attempt.accepted:
            return attempt
        if ignored:
            self._registry.register_ignored(text, body, list(tags))
        else:
            self._registry.register(text, body, list(tags), pending=pending)
        return attempt

    def __repr__(self) -> str:
        return f"Suite({self.name!r}, tests={len(self._registry)})"


def _verb_text(verb: str, text: str | None) -> str | None:
    if text is None:
        return None
    return f"{verb} {text}"


def _abort_message(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__


def _qualified_name(definition: SuiteDefinition) -> str | None:
    qualname = getattr(definition, "__qualname__", None)
    module = getattr(definition, "__module__", None)
    if qualname is None:
        return None
    return f"{module}.{qualname}" if module else qualname
