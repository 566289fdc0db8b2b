"""Report writers for weighted-coverage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weighted_coverage.output.base import Format, OutputMeta
from weighted_coverage.output.csv import format_csv
from weighted_coverage.output.html import format_html
from weighted_coverage.output.json import format_json
from weighted_coverage.output.tty import render_summary

if TYPE_CHECKING:
    from weighted_coverage.output.base import Formatter

# One writer per ``--csv``/``--json``/``--html`` option.
FORMATTERS: dict[Format, Formatter] = {
    Format.CSV: format_csv,
    Format.HTML: format_html,
    Format.JSON: format_json,
}

__all__ = [
    "FORMATTERS",
    "Format",
    "OutputMeta",
    "format_csv",
    "format_html",
    "format_json",
    "render_summary",
]
