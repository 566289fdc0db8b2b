"""Fan-in of worker results and ranking of complex units."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weighted_coverage.core.model.report import ProjectCoverage, ScanOutcome
from weighted_coverage.core.types import SortKey

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from weighted_coverage.core.model.report import IgnoredEntry, MetricResult


def project_coverage(metrics: Iterable[MetricResult]) -> ProjectCoverage:
    """Pool covered and coverable lines of every processed unit.

    This is a single ratio over all lines, not an average of per-unit ratios,
    so larger units weigh proportionally more.
    """
    covered = coverable = 0
    for result in metrics:
        covered += result.covered
        coverable += result.ploc
    return ProjectCoverage(covered=covered, coverable=coverable)


def rank(results: Iterable[MetricResult], sort: SortKey = SortKey.WCC_PLAIN) -> tuple[MetricResult, ...]:
    """Sort *results* by the *sort* score, highest first.

    Ties are broken by file, function name and start line so the order is
    reproducible across runs.
    """
    key = SortKey(sort)
    return tuple(
        sorted(
            results,
            key=lambda r: (-r.score(key), r.file, r.function or "", r.start),
        )
    )


def aggregate(
    metrics: Sequence[MetricResult],
    ignored: Sequence[IgnoredEntry],
    *,
    sort: SortKey = SortKey.WCC_PLAIN,
) -> ScanOutcome:
    """Fold per-worker results into a :class:`ScanOutcome`."""
    return ScanOutcome(
        metrics=tuple(metrics),
        ignored=tuple(ignored),
        complex=rank((r for r in metrics if r.is_complex), sort),
        project_coverage=project_coverage(metrics),
        sort=SortKey(sort),
    )


__all__ = ["aggregate", "project_coverage", "rank"]
