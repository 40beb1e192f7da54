"""Reporter printing the event stream to the terminal."""

from __future__ import annotations

import click

from .events import (
    InfoProvided,
    RunAborted,
    RunCompleted,
    RunEvent,
    RunStopped,
    ScopeClosed,
    ScopeOpened,
    SuiteAborted,
    SuiteStarting,
    TestFailed,
    TestIgnored,
    TestPending,
    TestStarting,
    TestSucceeded,
)

_INDENT = "  "


class ConsoleReporter:
    """Echoes suites, scopes, outcomes and info messages with click.

    Indentation follows scope levels. Test outcomes are printed one level
    below the innermost open scope of the suite.
    """

    def __init__(self, *, color: bool | None = None, show_info: bool = True) -> None:
        self._color = color
        self._show_info = show_info
        self._scope_level = 0

    def __call__(self, event: RunEvent) -> None:  # pylint: disable=too-many-return-statements
        if isinstance(event, SuiteStarting):
            self._scope_level = 0
            self._echo(0, click.style(event.suite_name, bold=True))
            return
        if isinstance(event, ScopeOpened):
            self._scope_level = event.level + 1
            self._echo(event.level + 1, event.message)
            return
        if isinstance(event, ScopeClosed):
            self._scope_level = event.level
            return
        if isinstance(event, TestStarting):
            return
        if isinstance(event, TestSucceeded):
            self._outcome(event.test_text, "green", f"({event.duration} ms)")
            return
        if isinstance(event, TestFailed):
            self._outcome(event.test_text, "red", f"*** FAILED *** {event.message}")
            return
        if isinstance(event, TestIgnored):
            self._outcome(event.test_text, "yellow", "!!! IGNORED !!!")
            return
        if isinstance(event, TestPending):
            self._outcome(event.test_text, "yellow", "(pending)")
            return
        if isinstance(event, InfoProvided):
            if self._show_info:
                self._echo(self._scope_level + event.level, f"+ {event.message}")
            return
        if isinstance(event, SuiteAborted):
            self._echo(0, click.style(f"*** ABORTED *** {event.message}", fg="red"))
            return
        if isinstance(event, RunStopped):
            self._echo(0, click.style("Run stopped.", fg="yellow"))
            return
        if isinstance(event, RunAborted):
            self._echo(0, click.style(f"Run aborted: {event.message}", fg="red"))
            return
        if isinstance(event, RunCompleted):
            self._echo(0, f"Run completed in {event.duration} ms.")

    def _outcome(self, text: str, color: str, detail: str) -> None:
        self._echo(self._scope_level + 1, click.style(f"- {text} {detail}", fg=color))

    def _echo(self, level: int, message: str) -> None:
        click.echo(f"{_INDENT * level}{message}", color=self._color)
