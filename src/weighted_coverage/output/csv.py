from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING

from weighted_coverage.output.base import COLUMNS, metric_row

if TYPE_CHECKING:
    from weighted_coverage.core.model.report import ScanOutcome
    from weighted_coverage.output.base import OutputMeta


def _cell(value: object, precision: int) -> object:
    if isinstance(value, bool) or value is None:
        return "" if value is None else str(value).lower()
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return value


def format_csv(outcome: ScanOutcome, meta: OutputMeta) -> str:
    """Return the metric table, project coverage and ignored files as CSV.

    The metric rows come first, followed by a ``PROJECT_COVERAGE`` row and one
    ``IGNORED`` row per ignored unit.
    """
    buf = StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(COLUMNS)
    for result in outcome.metrics:
        row = metric_row(result)
        writer.writerow([_cell(row[column], meta.precision) for column in COLUMNS])
    writer.writerow(["PROJECT_COVERAGE", f"{outcome.project_coverage.percent:.{meta.precision}f}"])
    for entry in outcome.ignored:
        writer.writerow(["IGNORED", entry.path, str(entry.reason)])
    return buf.getvalue()


__all__ = ["format_csv"]
