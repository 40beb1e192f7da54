"""Results workbook writer service."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .report_models import ResultRow, ResultStatus, RunMetadata

RESULTS_SHEET_NAME = "Results"
RUN_INFO_SHEET_NAME = "RunInfo"
RESULT_COLUMNS = ("suite", "test", "status", "duration_ms", "message", "info")


def write_results_workbook(
    output_path: Path | str,
    rows: Sequence[ResultRow],
    run_metadata: RunMetadata,
) -> Path:
    """Write one Results row per outcome plus a RunInfo sheet of run counters."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = RESULTS_SHEET_NAME

    _write_header(sheet)
    for row_index, row in enumerate(rows, start=2):
        values = (
            row.suite_name,
            row.test_name,
            row.status.value,
            row.duration_ms,
            row.message,
            "\n".join(row.info),
        )
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)

    _write_run_info_sheet(workbook, rows, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_header(sheet: Worksheet) -> None:
    for column_index, name in enumerate(RESULT_COLUMNS, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    sheet.freeze_panes = "A2"


def _write_run_info_sheet(
    workbook: Workbook,
    rows: Sequence[ResultRow],
    run_metadata: RunMetadata,
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = Counter(row.status for row in rows)

    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("output_path", str(run_metadata.output_path)),
        ("suites", ", ".join(run_metadata.suite_targets)),
        ("expected", run_metadata.expected_test_count),
        ("succeeded", counts[ResultStatus.SUCCEEDED]),
        ("failed", counts[ResultStatus.FAILED]),
        ("ignored", counts[ResultStatus.IGNORED]),
        ("pending", counts[ResultStatus.PENDING]),
        ("suites_aborted", counts[ResultStatus.ABORTED]),
        ("stopped", run_metadata.stopped),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
