"""Event reporting domain exports."""

from .events import (
    EventKind,
    InfoProvided,
    NameInfo,
    Ordinal,
    RunAborted,
    RunCompleted,
    RunEvent,
    RunStarting,
    RunStopped,
    ScopeClosed,
    ScopeOpened,
    SuiteAborted,
    SuiteCompleted,
    SuiteStarting,
    TestFailed,
    TestIgnored,
    TestPending,
    TestStarting,
    TestSucceeded,
    Tracker,
)
from .informer import (
    ConcurrentInformerModificationError,
    ExecutionContext,
    IllegalStateError,
    Informer,
    InformerClosedError,
    InformerSlot,
    MessageRecordingInformer,
    NullMessageError,
    RegistrationInformer,
    SuiteInformer,
    ZombieInformer,
)
from .console_reporter import ConsoleReporter
from .emitter import EventEmitter
from .reporters import (
    CatchReporter,
    DispatchReporter,
    EventRecorder,
    NeverStop,
    Reporter,
    RunSummary,
    Stopper,
    StopOnFailureReporter,
    StopOnRequest,
    SummaryReporter,
    wrap_reporter_if_necessary,
)

__all__ = [
    "EventKind",
    "InfoProvided",
    "NameInfo",
    "Ordinal",
    "RunAborted",
    "RunCompleted",
    "RunEvent",
    "RunStarting",
    "RunStopped",
    "ScopeClosed",
    "ScopeOpened",
    "SuiteAborted",
    "SuiteCompleted",
    "SuiteStarting",
    "TestFailed",
    "TestIgnored",
    "TestPending",
    "TestStarting",
    "TestSucceeded",
    "Tracker",
    "ConcurrentInformerModificationError",
    "ExecutionContext",
    "IllegalStateError",
    "Informer",
    "InformerClosedError",
    "InformerSlot",
    "MessageRecordingInformer",
    "NullMessageError",
    "RegistrationInformer",
    "SuiteInformer",
    "ZombieInformer",
    "CatchReporter",
    "DispatchReporter",
    "EventRecorder",
    "NeverStop",
    "Reporter",
    "RunSummary",
    "Stopper",
    "StopOnFailureReporter",
    "StopOnRequest",
    "SummaryReporter",
    "wrap_reporter_if_necessary",
    "ConsoleReporter",
    "EventEmitter",
]
