"""Spec run use-case service."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from simple_spec_runner.configuration import ConfigurationError, load_configuration
from simple_spec_runner.event_reporting.events import (
    RunAborted,
    RunCompleted,
    RunStarting,
    RunStopped,
    Tracker,
)
from simple_spec_runner.event_reporting.reporters import (
    CatchReporter,
    DispatchReporter,
    Reporter,
    StopOnFailureReporter,
    StopOnRequest,
    SummaryReporter,
)
from simple_spec_runner.results_writing import (
    ResultCollector,
    RunMetadata,
    write_results_workbook,
)
from simple_spec_runner.run_execution import ABORTING_ERRORS, TagFilter, elapsed_millis
from simple_spec_runner.suite_discovery import SuiteDiscoveryError, load_suite_target
from simple_spec_runner.suite_dsl import Suite

from .run_contracts import RunOutcome, RunPlan, RunRequest

_LOGGER = logging.getLogger(__name__)

SuiteLoader = Callable[[str], Suite]


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_spec_run(
    request: RunRequest,
    *,
    reporters: Sequence[Reporter] = (),
    suite_loader: SuiteLoader = load_suite_target,
) -> RunOutcome:
    """Execute every selected suite in one run and return the run outcome.

    `reporters` receive the full event stream next to the run's own summary and
    result collectors; each one is shielded so that a failing reporter cannot end
    the run.
    """
    plan = resolve_run_plan(request)
    suites = _load_suites(plan.suite_targets, suite_loader)
    tag_filter = _build_tag_filter(plan)
    selected = _select_suites(suites, plan.test_name)

    summary = SummaryReporter()
    collector = ResultCollector()
    stopper = StopOnRequest()
    run_reporters: list[Reporter] = [summary, collector]
    if plan.stop_on_failure:
        run_reporters.append(StopOnFailureReporter(stopper))
    run_reporters.extend(CatchReporter(reporter) for reporter in reporters)
    dispatch = DispatchReporter(run_reporters)

    tracker = Tracker()
    expected = _expected_test_count(selected, plan.test_name, tag_filter)
    run_start = datetime.now(UTC)
    started = time.monotonic()
    _LOGGER.info("Running %d suite(s), %d expected test(s)", len(selected), expected)
    dispatch(RunStarting(ordinal=tracker.next_ordinal(), expected_test_count=expected))
    try:
        for suite in selected:
            if stopper.stop_requested():
                break
            suite.run(
                plan.test_name,
                reporter=dispatch,
                stopper=stopper,
                tag_filter=tag_filter,
                tracker=tracker,
            )
    except ABORTING_ERRORS + (KeyboardInterrupt,) as exc:
        dispatch(
            RunAborted(
                ordinal=tracker.next_ordinal(),
                message=str(exc) or type(exc).__name__,
                cause=exc,
            )
        )
        raise

    stopped = stopper.stop_requested()
    if stopped:
        dispatch(RunStopped(ordinal=tracker.next_ordinal(), duration=elapsed_millis(started)))
    else:
        dispatch(RunCompleted(ordinal=tracker.next_ordinal(), duration=elapsed_millis(started)))

    workbook_path = None
    if plan.workbook_path is not None:
        workbook_path = _write_workbook(
            plan,
            collector,
            RunMetadata(
                run_start=run_start,
                output_path=plan.workbook_path.resolve(),
                suite_targets=plan.suite_targets,
                expected_test_count=expected,
                stopped=stopped,
            ),
        )

    return RunOutcome(summary=summary.summary(), stopped=stopped, workbook_path=workbook_path)


def resolve_run_plan(request: RunRequest) -> RunPlan:
    """Merge the request with the optional configuration file; request values win."""
    configuration = None
    if request.config_path:
        try:
            configuration = load_configuration(request.config_path)
        except ConfigurationError as exc:
            raise RunExecutionError(str(exc)) from exc

    suite_targets = request.suite_targets or (configuration.suites if configuration else ())
    if not suite_targets:
        raise RunExecutionError("No suites to run: pass --suite or list suites in the config.")

    include: tuple[str, ...] | None = request.include_tags or None
    exclude = request.exclude_tags
    test_name = request.test_name
    stop_on_failure = request.stop_on_failure
    workbook = Path(request.workbook_path) if request.workbook_path else None
    if configuration is not None:
        include = include or configuration.filter.include
        exclude = exclude or configuration.filter.exclude
        test_name = test_name or configuration.run.test_name
        stop_on_failure = stop_on_failure or configuration.run.stop_on_failure
        workbook = workbook or configuration.report.workbook

    return RunPlan(
        suite_targets=tuple(suite_targets),
        test_name=test_name,
        include_tags=include,
        exclude_tags=tuple(exclude),
        stop_on_failure=stop_on_failure,
        workbook_path=workbook,
    )


def _load_suites(targets: Sequence[str], suite_loader: SuiteLoader) -> list[Suite]:
    try:
        return [suite_loader(target) for target in targets]
    except SuiteDiscoveryError as exc:
        raise RunExecutionError(str(exc)) from exc


def _build_tag_filter(plan: RunPlan) -> TagFilter:
    try:
        return TagFilter(include=plan.include_tags, exclude=plan.exclude_tags)
    except ValueError as exc:
        raise RunExecutionError(str(exc)) from exc


def _select_suites(suites: list[Suite], test_name: str | None) -> list[Suite]:
    if test_name is None:
        return suites
    selected = [suite for suite in suites if test_name in suite.test_names()]
    if not selected:
        raise RunExecutionError(f'No selected suite has a test named: "{test_name}"')
    return selected


def _expected_test_count(suites: list[Suite], test_name: str | None, tag_filter: TagFilter) -> int:
    if test_name is None:
        return sum(suite.expected_test_count(tag_filter) for suite in suites)
    return sum(
        1
        for suite in suites
        if not tag_filter.decide(suite.registry.get(test_name).tags).filtered_out
    )


def _write_workbook(plan: RunPlan, collector: ResultCollector, metadata: RunMetadata) -> Path:
    assert plan.workbook_path is not None
    try:
        return write_results_workbook(plan.workbook_path, collector.rows, metadata)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write results workbook: {exc}") from exc
