from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from weighted_coverage.output.base import COLUMNS, metric_row

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from weighted_coverage.core.model.report import MetricResult, ScanOutcome
    from weighted_coverage.output.base import OutputMeta


def _cell(value: object, precision: int) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return escape(str(value))


def _metric_table(results: Iterable[MetricResult], meta: OutputMeta) -> list[str]:
    parts = ["<table>", "<tr>" + "".join(f"<th>{escape(c)}</th>" for c in COLUMNS) + "</tr>"]
    for result in results:
        row = metric_row(result)
        css = ' class="complex"' if result.is_complex else ""
        cells = "".join(f"<td>{_cell(row[c], meta.precision)}</td>" for c in COLUMNS)
        parts.append(f"<tr{css}>{cells}</tr>")
    parts.append("</table>")
    return parts


def format_html(outcome: ScanOutcome, meta: OutputMeta) -> str:
    """Return an HTML report for *outcome*."""
    cov = outcome.project_coverage
    parts: list[str] = [
        "<html>",
        "<head><style>tr.complex td { color: #b00; }</style></head>",
        "<body>",
        f"<h1>Weighted code coverage: {escape(meta.project_label)}</h1>",
        f"<p>Project coverage: {cov.percent:.2f}% ({cov.covered}/{cov.coverable} lines)</p>",
        f"<h2>Metrics ({escape(str(meta.mode))})</h2>",
        *_metric_table(outcome.metrics, meta),
        f"<h2>Complex units (sorted by {escape(str(outcome.sort))})</h2>",
        *_metric_table(outcome.complex, meta),
        f"<h2>Ignored ({len(outcome.ignored)})</h2>",
        "<ul>",
    ]
    parts.extend(f"<li>{escape(e.path)}: {escape(str(e.reason))}</li>" for e in outcome.ignored)
    parts.extend(("</ul>", "</body>", "</html>"))
    return "\n".join(parts)


__all__ = ["format_html"]
