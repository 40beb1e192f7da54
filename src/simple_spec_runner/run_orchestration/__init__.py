"""Run orchestration domain exports."""

from .run_contracts import RunOutcome, RunPlan, RunRequest
from .spec_run_use_case import RunExecutionError, execute_spec_run, resolve_run_plan

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunPlan",
    "RunExecutionError",
    "execute_spec_run",
    "resolve_run_plan",
]
