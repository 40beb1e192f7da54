"""Results writing domain exports."""

from .report_models import ResultRow, ResultStatus, RunMetadata
from .result_collector import ResultCollector
from .results_workbook_writer import (
    RESULT_COLUMNS,
    RESULTS_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_results_workbook,
)

__all__ = [
    "ResultRow",
    "ResultStatus",
    "RunMetadata",
    "ResultCollector",
    "RESULT_COLUMNS",
    "RESULTS_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "write_results_workbook",
]
