from __future__ import annotations

from dataclasses import dataclass

from weighted_coverage.core.types import IgnoreReason, SortKey

# -----------------------------------------------------------------------------
# Units of work
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileUnit:
    """A source file with its line counts and complexity."""

    path: str
    sloc: int
    ploc: int
    complexity: float
    covered: int


@dataclass(frozen=True, slots=True)
class FunctionUnit:
    """A function inside *file* covering the inclusive span ``start..end``."""

    file: str
    name: str
    start: int
    end: int
    sloc: int
    ploc: int
    complexity: float
    covered: int

    @property
    def path(self) -> str:
        return f"{self.file}::{self.name}"


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MetricResult:
    """Scores of one file or function.

    Notes
    -----
    - ``function`` is ``None`` for file rows; ``start``/``end`` are then the
      whole file (``1..sloc``).
    - ``coverage`` is a ratio in ``[0, 1]``.
    """

    file: str
    sloc: int
    ploc: int
    covered: int
    complexity: float
    coverage: float
    wcc_plain: float
    wcc_quantized: float
    crap: float
    skunk: float
    is_complex: bool
    function: str | None = None
    start: int = 1
    end: int = 0

    @property
    def name(self) -> str:
        return self.file if self.function is None else f"{self.file}::{self.function}"

    def score(self, key: SortKey) -> float:
        return float(getattr(self, SortKey(key).value))


@dataclass(frozen=True, slots=True)
class IgnoredEntry:
    path: str
    reason: IgnoreReason


@dataclass(frozen=True, slots=True)
class ProjectCoverage:
    """Pooled coverage across all processed units."""

    covered: int = 0
    coverable: int = 0

    def __post_init__(self) -> None:
        """Validate that counts are non-negative."""
        if self.covered < 0 or self.coverable < 0:
            msg = "ProjectCoverage counts must be >= 0"
            raise ValueError(msg)

    @property
    def ratio(self) -> float:
        """Covered / coverable, or ``0.0`` when nothing was processed."""
        if self.coverable == 0:
            return 0.0
        return min(1.0, self.covered / self.coverable)

    @property
    def percent(self) -> float:
        return self.ratio * 100.0


# -----------------------------------------------------------------------------
# Outcome
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Everything a run produces, handed to the report writers."""

    metrics: tuple[MetricResult, ...]
    ignored: tuple[IgnoredEntry, ...]
    complex: tuple[MetricResult, ...]
    project_coverage: ProjectCoverage
    sort: SortKey = SortKey.WCC_PLAIN


__all__ = [
    "FileUnit",
    "FunctionUnit",
    "IgnoredEntry",
    "MetricResult",
    "ProjectCoverage",
    "ScanOutcome",
]
