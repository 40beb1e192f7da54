"""Informer lifecycle tests."""

from __future__ import annotations

import threading

import pytest
from simple_spec_runner.event_reporting.events import NameInfo
from simple_spec_runner.event_reporting.informer import (
    ConcurrentInformerModificationError,
    ExecutionContext,
    InformerClosedError,
    InformerSlot,
    MessageRecordingInformer,
    NullMessageError,
    RegistrationInformer,
    SuiteInformer,
    ZombieInformer,
)

_NAME_INFO = NameInfo(suite_name="Spec", suite_id="Spec", test_name="Spec works")


class _Fired:
    def __init__(self) -> None:
        self.calls: list[tuple[str, NameInfo | None, int, bool]] = []

    def __call__(self, message: str, name_info: NameInfo | None, level: int, pending: bool):
        self.calls.append((message, name_info, level, pending))


def _in_other_thread(function) -> None:
    worker = threading.Thread(target=function)
    worker.start()
    worker.join()


def test_registration_informer_records_messages() -> None:
    recorded: list[str] = []
    informer = RegistrationInformer(recorded.append)

    informer("hello")

    assert recorded == ["hello"]


def test_none_message_is_rejected() -> None:
    informer = RegistrationInformer(lambda message: None)

    with pytest.raises(NullMessageError):
        informer(None)  # type: ignore[arg-type]


def test_suite_informer_fires_immediately_at_suite_level() -> None:
    fired = _Fired()
    informer = SuiteInformer(ExecutionContext(_NAME_INFO), fired)

    informer("at suite level")

    assert fired.calls == [("at suite level", _NAME_INFO, 1, False)]


def test_recording_informer_buffers_owner_thread_messages_until_fired() -> None:
    fired = _Fired()
    informer = MessageRecordingInformer(ExecutionContext(_NAME_INFO), fired)

    informer("first")
    informer("second")
    assert fired.calls == []

    informer.fire_recorded_messages(test_was_pending=True)

    assert fired.calls == [
        ("first", _NAME_INFO, 2, True),
        ("second", _NAME_INFO, 2, True),
    ]
    assert informer.recorded_messages == ()


def test_recording_informer_fires_other_thread_messages_without_name_info() -> None:
    fired = _Fired()
    informer = MessageRecordingInformer(ExecutionContext(_NAME_INFO), fired)

    _in_other_thread(lambda: informer("from worker"))

    assert fired.calls == [("from worker", None, 2, False)]
    assert informer.recorded_messages == ()


def test_execution_context_hides_name_info_from_other_threads() -> None:
    context = ExecutionContext(_NAME_INFO)
    seen: list[NameInfo | None] = []

    _in_other_thread(lambda: seen.append(context.name_info_for_caller()))

    assert context.name_info_for_caller() == _NAME_INFO
    assert seen == [None]


def test_zombie_informer_rejects_every_message() -> None:
    informer = ZombieInformer("Spec")

    with pytest.raises(InformerClosedError, match="Spec"):
        informer("too late")


def test_slot_restore_detects_a_concurrent_swap() -> None:
    first = RegistrationInformer(lambda message: None)
    second = RegistrationInformer(lambda message: None)
    slot = InformerSlot(first)
    slot.install(second)

    with pytest.raises(ConcurrentInformerModificationError):
        slot.restore(first, ZombieInformer("Spec"))


def test_slot_delegates_to_the_installed_informer() -> None:
    recorded: list[str] = []
    slot = InformerSlot(RegistrationInformer(recorded.append))

    slot("through the slot")

    assert recorded == ["through the slot"]
