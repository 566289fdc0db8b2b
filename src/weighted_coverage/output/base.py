"""Base types shared by the report writers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from weighted_coverage.core.types import Mode

if TYPE_CHECKING:
    from weighted_coverage.core.model.report import MetricResult, ScanOutcome


class Format(StrEnum):
    """Supported report file formats."""

    CSV = "csv"
    JSON = "json"
    HTML = "html"


# Column order shared by the tabular writers.
COLUMNS: tuple[str, ...] = (
    "file",
    "function",
    "start",
    "end",
    "sloc",
    "ploc",
    "covered",
    "complexity",
    "coverage",
    "wcc_plain",
    "wcc_quantized",
    "crap",
    "skunk",
    "is_complex",
)


@dataclass(slots=True)
class OutputMeta:
    """Container for options shared by all writers."""

    project: Path
    mode: Mode = Mode.FILES
    precision: int = 3

    @property
    def project_label(self) -> str:
        return Path(self.project).as_posix()


def metric_row(result: MetricResult) -> dict[str, object]:
    """Return *result* as a flat mapping keyed by :data:`COLUMNS`."""
    return {column: getattr(result, column) for column in COLUMNS}


def group_by_file(metrics: tuple[MetricResult, ...]) -> dict[str, list[MetricResult]]:
    """Group function rows under their file, keeping first-seen order."""
    grouped: dict[str, list[MetricResult]] = {}
    for result in metrics:
        grouped.setdefault(result.file, []).append(result)
    return grouped


class Formatter(Protocol):
    def __call__(self, outcome: ScanOutcome, meta: OutputMeta) -> str: ...


__all__ = ["COLUMNS", "Format", "Formatter", "OutputMeta", "group_by_file", "metric_row"]
