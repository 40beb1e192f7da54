"""End-to-end event stream tests for suite runs."""

from __future__ import annotations

import threading

import pytest
from simple_spec_runner.event_reporting import (
    EventKind,
    EventRecorder,
    InfoProvided,
    InformerClosedError,
    NameInfo,
    SuiteAborted,
    TestFailed,
    TestPending,
    TestSucceeded,
)
from simple_spec_runner.matchers import fail, pending
from simple_spec_runner.suite_dsl import Suite
from simple_spec_runner.test_registration import Tag

SLOW_AS_MOLASSES = Tag("SlowAsMolasses")


def _run(suite: Suite, test_name: str | None = None) -> EventRecorder:
    recorder = EventRecorder()
    suite.run(test_name, reporter=recorder)
    return recorder


def _index_of(recorder: EventRecorder, kind: EventKind, test_name: str | None = None) -> int:
    for index, event in enumerate(recorder.events):
        if event.kind is not kind:
            continue
        if test_name is None or getattr(event, "test_name", None) == test_name:
            return index
    raise AssertionError(f"No {kind} event for {test_name!r}")


def test_end_to_end_event_order_with_an_ignored_test() -> None:
    def definition(spec: Suite) -> None:
        spec.test("A", lambda: None)
        spec.ignore("B", lambda: None, tags=[SLOW_AS_MOLASSES])

    recorder = _run(Suite("EndToEnd", definition))

    assert recorder.kinds() == [
        EventKind.SUITE_STARTING,
        EventKind.TEST_STARTING,
        EventKind.TEST_SUCCEEDED,
        EventKind.TEST_IGNORED,
        EventKind.SUITE_COMPLETED,
    ]
    assert [getattr(event, "test_name", None) for event in recorder.events[1:4]] == [
        "A",
        "A",
        "B",
    ]
    ordinals = [event.ordinal for event in recorder.events]
    assert ordinals == sorted(ordinals)


def test_ignored_body_never_executes() -> None:
    executed = []

    def definition(spec: Suite) -> None:
        spec.ignore("test that", lambda: executed.append(True))

    recorder = _run(Suite("IgnoreSpec", definition))

    assert executed == []
    assert EventKind.TEST_IGNORED in recorder.kinds()


def test_explicit_selection_runs_an_ignored_test() -> None:
    executed = []

    def definition(spec: Suite) -> None:
        spec.test("test other", lambda: None)
        spec.ignore("test this", lambda: executed.append(True))

    recorder = _run(Suite("SelectSpec", definition), "test this")

    assert executed == [True]
    assert EventKind.TEST_IGNORED not in recorder.kinds()
    assert recorder.kinds() == [
        EventKind.SUITE_STARTING,
        EventKind.TEST_STARTING,
        EventKind.TEST_SUCCEEDED,
        EventKind.SUITE_COMPLETED,
    ]


def test_unknown_selected_name_aborts_the_suite() -> None:
    recorder = _run(Suite("UnknownSpec", lambda spec: spec.test("real", lambda: None)), "fake")

    aborted = recorder.of_kind(EventKind.SUITE_ABORTED)
    assert len(aborted) == 1
    assert isinstance(aborted[0], SuiteAborted)
    assert "fake" in aborted[0].message


def test_info_inside_a_test_follows_its_outcome() -> None:
    def definition(spec: Suite) -> None:
        @spec.test("talks")
        def _() -> None:
            spec.info("said inside")

    recorder = _run(Suite("InfoSpec", definition))

    info_index = _index_of(recorder, EventKind.INFO_PROVIDED)
    assert info_index > _index_of(recorder, EventKind.TEST_SUCCEEDED, "talks")
    info = recorder.events[info_index]
    assert isinstance(info, InfoProvided)
    assert info.name_info is not None
    assert info.name_info.test_name == "talks"
    assert info.level == 2


def test_info_given_while_registering_precedes_the_first_test() -> None:
    def definition(spec: Suite) -> None:
        spec.info("before any test")
        spec.test("first", lambda: None)

    recorder = _run(Suite("EarlyInfoSpec", definition))

    assert _index_of(recorder, EventKind.INFO_PROVIDED) < _index_of(
        recorder, EventKind.TEST_STARTING, "first"
    )
    info = recorder.of_kind(EventKind.INFO_PROVIDED)[0]
    assert isinstance(info, InfoProvided)
    assert info.level == 1


def test_nested_registration_fails_only_that_test() -> None:
    def definition(spec: Suite) -> None:
        spec.test("before", lambda: None)

        @spec.test("nests")
        def _() -> None:
            spec.test("inner", lambda: None)

        spec.test("after", lambda: None)

    suite = Suite("NestingSpec", definition)
    recorder = _run(suite)

    failed = recorder.of_kind(EventKind.TEST_FAILED)
    assert [event.test_name for event in failed if isinstance(event, TestFailed)] == ["nests"]
    assert isinstance(failed[0], TestFailed)
    assert "nested" in failed[0].message
    succeeded = recorder.of_kind(EventKind.TEST_SUCCEEDED)
    succeeded_names = [
        event.test_name for event in succeeded if isinstance(event, TestSucceeded)
    ]
    assert succeeded_names == ["before", "after"]
    assert "inner" not in suite.test_names()
    assert EventKind.SUITE_COMPLETED in recorder.kinds()


def test_nested_registration_fails_the_test_even_when_it_then_goes_pending() -> None:
    def definition(spec: Suite) -> None:
        @spec.test("nests then pends")
        def _() -> None:
            spec.test("inner", lambda: None)
            pending()

    recorder = _run(Suite("NestingPendingSpec", definition))

    assert recorder.kinds() == [
        EventKind.SUITE_STARTING,
        EventKind.TEST_STARTING,
        EventKind.TEST_FAILED,
        EventKind.SUITE_COMPLETED,
    ]
    failed = recorder.events[2]
    assert isinstance(failed, TestFailed)
    assert "nested" in failed.message


def test_completed_tests_always_carry_a_non_negative_duration() -> None:
    def definition(spec: Suite) -> None:
        spec.test("passes", lambda: None)
        spec.test("fails", lambda: fail("broken"))
        spec.test("pends", pending)

    recorder = _run(Suite("DurationSpec", definition))

    outcomes = [
        event
        for event in recorder.events
        if isinstance(event, (TestSucceeded, TestFailed, TestPending))
    ]
    assert [type(event) for event in outcomes] == [TestSucceeded, TestFailed, TestPending]
    for event in outcomes:
        assert event.duration is not None
        assert event.duration >= 0


    assert EventKind.SUITE_COMPLETED in recorder.kinds()


def test_other_thread_sees_no_current_context_while_a_test_runs() -> None:
    seen: list[NameInfo | None] = []
    holder: list[Suite] = []

    def definition(spec: Suite) -> None:
        @spec.test("spawns")
        def _() -> None:
            seen.append(holder[0].current_name_info())
            worker = threading.Thread(target=lambda: seen.append(holder[0].current_name_info()))
            worker.start()
            worker.join()

    holder.append(Suite("ThreadSpec", definition))
    _run(holder[0])

    assert seen[0] is not None
    assert seen[0].test_name == "spawns"
    assert seen[1] is None


def test_info_from_another_thread_fires_immediately_without_name_info() -> None:
    def definition(spec: Suite) -> None:
        @spec.test("spawns")
        def _() -> None:
            worker = threading.Thread(target=lambda: spec.info("from worker"))
            worker.start()
            worker.join()

    recorder = _run(Suite("ThreadInfoSpec", definition))

    info = recorder.of_kind(EventKind.INFO_PROVIDED)[0]
    assert isinstance(info, InfoProvided)
    assert info.name_info is None
    assert _index_of(recorder, EventKind.INFO_PROVIDED) < _index_of(
        recorder, EventKind.TEST_SUCCEEDED, "spawns"
    )


def test_informer_held_past_the_run_is_closed() -> None:
    held = []

    def definition(spec: Suite) -> None:
        @spec.test("keeps informer")
        def _() -> None:
            held.append(spec.info)

    _run(Suite("ZombieSpec", definition))

    with pytest.raises(InformerClosedError):
        held[0]("too late")


def test_scopes_bracket_the_tests_of_a_description() -> None:
    def definition(spec: Suite) -> None:
        with spec.describe("A Stack"):
            spec.it("works", lambda: None)

    recorder = _run(Suite("ScopeSpec", definition))

    assert recorder.kinds() == [
        EventKind.SUITE_STARTING,
        EventKind.SCOPE_OPENED,
        EventKind.TEST_STARTING,
        EventKind.TEST_SUCCEEDED,
        EventKind.SCOPE_CLOSED,
        EventKind.SUITE_COMPLETED,
    ]


def test_suite_can_run_more_than_once() -> None:
    calls = []
    suite = Suite("RerunSpec", lambda spec: spec.test("counts", lambda: calls.append(1)))

    _run(suite)
    _run(suite)

    assert calls == [1, 1]
