"""Console reporter tests."""

from __future__ import annotations

from simple_spec_runner.event_reporting.console_reporter import ConsoleReporter
from simple_spec_runner.suite_dsl import Suite


def _spec(spec: Suite) -> None:
    with spec.describe("A Stack"):
        spec.it("is empty", lambda: None)

        @spec.it("pops")
        def _() -> None:
            spec.info("popped")
            raise AssertionError("nothing to pop")

    spec.ignore("later", lambda: None)


def test_console_reporter_prints_scopes_outcomes_and_info(capsys) -> None:
    Suite("StackSpec", _spec).run(reporter=ConsoleReporter(color=False))

    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "StackSpec"
    assert lines[1] == "  A Stack"
    assert lines[2].startswith("    - is empty (")
    assert lines[3] == "    - pops *** FAILED *** nothing to pop"
    assert lines[4] == "      + popped"
    assert lines[5] == "  - later !!! IGNORED !!!"
