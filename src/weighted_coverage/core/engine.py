"""Concurrent scan of a source tree.

Source files are discovered once, then handed to a bounded pool of worker
threads.  Every worker returns its own lists of :class:`MetricResult` and
:class:`IgnoredEntry` values; only the calling thread collects them, so no
container is shared between workers.  The coverage report and thresholds are
immutable and read without locking.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from weighted_coverage._meta import logger
from weighted_coverage.core.files import iter_source_files
from weighted_coverage.core.metrics import compute_scores
from weighted_coverage.core.model.report import FileUnit, FunctionUnit, IgnoredEntry, MetricResult
from weighted_coverage.core.thresholds import is_complex
from weighted_coverage.core.types import Complexity, IgnoreReason, LineHits, Mode
from weighted_coverage.errors import ComplexityError, ProjectRootError

if TYPE_CHECKING:
    from pathlib import Path

    from weighted_coverage.core.complexity import ComplexityProvider, FileComplexity
    from weighted_coverage.core.coverage import CoverageReport
    from weighted_coverage.core.path_filter import PathFilter
    from weighted_coverage.core.thresholds import ThresholdSet

# Failures that degrade a single file to an ignored entry.
UNIT_ERRORS = (ComplexityError, OSError, UnicodeDecodeError, RecursionError)


@dataclass(frozen=True, slots=True)
class WorkItem:
    index: int
    path: Path
    key: str


@dataclass(slots=True)
class UnitResults:
    """Owned results of one work item, handed back to the collector."""

    metrics: list[MetricResult] = field(default_factory=list)
    ignored: list[IgnoredEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ScanSettings:
    complexity: Complexity
    mode: Mode
    thresholds: ThresholdSet


# --------------------------- Line counting -----------------------------------
def count_lines(hits: LineHits, start: int = 1, end: int | None = None) -> tuple[int, int]:
    """Return ``(coverable, covered)`` for the inclusive 1-based span ``start..end``."""
    stop = len(hits) if end is None else min(end, len(hits))
    window = hits[max(start, 1) - 1 : stop]
    coverable = sum(1 for h in window if h is not None)
    covered = sum(1 for h in window if h is not None and h > 0)
    return coverable, covered


def _result(unit: FileUnit | FunctionUnit, thresholds: ThresholdSet) -> MetricResult:
    scores = compute_scores(unit.complexity, unit.ploc, unit.covered)
    if isinstance(unit, FunctionUnit):
        file, function, start, end = unit.file, unit.name, unit.start, unit.end
    else:
        file, function, start, end = unit.path, None, 1, unit.sloc
    return MetricResult(
        file=file,
        sloc=unit.sloc,
        ploc=unit.ploc,
        covered=unit.covered,
        complexity=unit.complexity,
        coverage=scores.coverage,
        wcc_plain=scores.wcc_plain,
        wcc_quantized=scores.wcc_quantized,
        crap=scores.crap,
        skunk=scores.skunk,
        is_complex=is_complex(scores, thresholds),
        function=function,
        start=start,
        end=end,
    )


def _ignore(out: UnitResults, path: str, reason: IgnoreReason) -> None:
    logger.debug("ignoring %s: %s", path, reason)
    out.ignored.append(IgnoredEntry(path=path, reason=reason))


# --------------------------- Units -------------------------------------------
def _file_unit(item: WorkItem, hits: LineHits, analysis: FileComplexity) -> FileUnit:
    ploc, covered = count_lines(hits)
    return FileUnit(path=item.key, sloc=analysis.sloc, ploc=ploc, complexity=analysis.complexity, covered=covered)


def _function_units(item: WorkItem, hits: LineHits, analysis: FileComplexity) -> list[FunctionUnit]:
    units: list[FunctionUnit] = []
    for span in analysis.functions:
        ploc, covered = count_lines(hits, span.start, span.end)
        units.append(
            FunctionUnit(
                file=item.key,
                name=span.name,
                start=span.start,
                end=span.end,
                sloc=span.sloc,
                ploc=ploc,
                complexity=span.complexity,
                covered=covered,
            )
        )
    return units


def process_item(
    item: WorkItem,
    coverage: CoverageReport,
    provider: ComplexityProvider,
    settings: ScanSettings,
) -> UnitResults:
    """Analyse one source file; never raises for per-file problems."""
    out = UnitResults()
    hits = coverage.get(item.key)
    if hits is None:
        _ignore(out, item.key, IgnoreReason.NO_COVERAGE)
        return out

    want_functions = settings.mode is Mode.FUNCTIONS
    try:
        analysis = provider.analyze(item.path, settings.complexity, functions=want_functions)
    except UNIT_ERRORS as exc:
        logger.debug("failed to analyse %s: %s", item.path, exc)
        _ignore(out, item.key, IgnoreReason.UNPARSABLE)
        return out

    units: list[FileUnit] | list[FunctionUnit]
    units = _function_units(item, hits, analysis) if want_functions else [_file_unit(item, hits, analysis)]
    for unit in units:
        if unit.ploc == 0:
            _ignore(out, unit.path, IgnoreReason.ZERO_PLOC)
            continue
        out.metrics.append(_result(unit, settings.thresholds))
    return out


# --------------------------- Scan --------------------------------------------
def discover(root: Path, provider: ComplexityProvider, path_filter: PathFilter | None = None) -> list[WorkItem]:
    """Return the work items for every supported source file under *root*."""
    if not root.is_dir():
        msg = f"project root is not a directory: {root}"
        raise ProjectRootError(msg)
    return [
        WorkItem(index=idx, path=path, key=path.relative_to(root).as_posix())
        for idx, path in enumerate(iter_source_files(root, accept=provider.supports, path_filter=path_filter))
    ]


def scan(
    root: Path,
    coverage: CoverageReport,
    provider: ComplexityProvider,
    *,
    complexity: Complexity = Complexity.CYCLOMATIC,
    mode: Mode = Mode.FILES,
    thresholds: ThresholdSet,
    n_threads: int = 1,
    path_filter: PathFilter | None = None,
) -> tuple[list[MetricResult], list[IgnoredEntry]]:
    """Compute metrics for every source file under *root*.

    Results are returned in discovery order regardless of which worker
    finished first.
    """
    items = discover(root, provider, path_filter)
    workers = max(1, n_threads)
    settings = ScanSettings(complexity=Complexity(complexity), mode=Mode(mode), thresholds=thresholds)
    logger.info("scanning %d files with %d workers", len(items), workers)

    collected: dict[int, UnitResults] = {}
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="wcc") as executor:
        futures = {executor.submit(process_item, item, coverage, provider, settings): item for item in items}
        for future in as_completed(futures):
            collected[futures[future].index] = future.result()

    metrics: list[MetricResult] = []
    ignored: list[IgnoredEntry] = []
    for idx in sorted(collected):
        metrics.extend(collected[idx].metrics)
        ignored.extend(collected[idx].ignored)
    return metrics, ignored


__all__ = [
    "UNIT_ERRORS",
    "ScanSettings",
    "UnitResults",
    "WorkItem",
    "count_lines",
    "discover",
    "process_item",
    "scan",
]
