"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from simple_spec_runner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from simple_spec_runner.event_reporting import ConsoleReporter
from simple_spec_runner.run_orchestration import (
    RunExecutionError,
    RunOutcome,
    RunRequest,
    execute_spec_run,
)
from simple_spec_runner.suite_discovery import SuiteDiscoveryError, load_suite_target


class CliError(Exception):
    """Custom CLI error."""


class RunFailedError(CliError):
    """Raised after a run in which a test failed or a suite aborted."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-spec-runner")
@click.option("-v", "--verbose", count=True, help="Log framework internals (repeat for debug).")
def cli(verbose: int) -> None:
    """Behavior-driven test suite runner."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list")
@click.option(
    "--suite",
    "suite_target",
    required=True,
    help="Suite to inspect, as package.module:attribute",
)
def list_tests(suite_target: str) -> None:
    """List the tests of a suite with their tags, in registration order."""
    try:
        suite = load_suite_target(suite_target)
    except SuiteDiscoveryError as exc:
        raise CliError(str(exc)) from exc
    tags = suite.tags()
    for test_name in suite.test_names():
        test_tags = sorted(tags.get(test_name, ()))
        suffix = f"  [{', '.join(test_tags)}]" if test_tags else ""
        click.echo(f"{test_name}{suffix}")


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML run configuration file",
)
@click.option(
    "--suite",
    "suite_targets",
    multiple=True,
    help="Suite to run, as package.module:attribute (repeatable)",
)
@click.option("--test", "test_name", required=False, help="Run only the test with this name")
@click.option("--include", "include_tags", multiple=True, help="Run only tests with this tag")
@click.option("--exclude", "exclude_tags", multiple=True, help="Skip tests with this tag")
@click.option(
    "--stop-on-failure",
    is_flag=True,
    default=False,
    help="Stop the run after the first failed test or aborted suite.",
)
@click.option(
    "--workbook",
    "workbook_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional .xlsx path for the results workbook",
)
def run_suites(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    config_path: str | None,
    suite_targets: tuple[str, ...],
    test_name: str | None,
    include_tags: tuple[str, ...],
    exclude_tags: tuple[str, ...],
    stop_on_failure: bool,
    workbook_path: str | None,
) -> None:
    """Run suites and report every test outcome."""
    try:
        outcome = execute_spec_run(
            RunRequest(
                suite_targets=suite_targets,
                config_path=config_path,
                test_name=test_name,
                include_tags=include_tags,
                exclude_tags=exclude_tags,
                stop_on_failure=stop_on_failure,
                workbook_path=workbook_path,
            ),
            reporters=[ConsoleReporter()],
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(_summary_line(outcome))
    if outcome.workbook_path is not None:
        click.echo(str(outcome.workbook_path))
    if not outcome.all_passed:
        raise RunFailedError(
            f"{outcome.summary.failed} test(s) failed, "
            f"{outcome.summary.suites_aborted} suite(s) aborted."
        )


def _summary_line(outcome: RunOutcome) -> str:
    summary = outcome.summary
    return (
        f"Tests: succeeded {summary.succeeded}, failed {summary.failed}, "
        f"ignored {summary.ignored}, pending {summary.pending}"
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
