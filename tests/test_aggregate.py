from __future__ import annotations

import pytest

from weighted_coverage.core.aggregate import aggregate, project_coverage, rank
from weighted_coverage.core.metrics import compute_scores
from weighted_coverage.core.model.report import IgnoredEntry, MetricResult, ProjectCoverage
from weighted_coverage.core.types import IgnoreReason, SortKey


def _result(
    file: str,
    *,
    ploc: int,
    covered: int,
    complexity: float = 1.0,
    function: str | None = None,
    start: int = 1,
    flagged: bool = False,
) -> MetricResult:
    scores = compute_scores(complexity, ploc, covered)
    return MetricResult(
        file=file,
        sloc=ploc,
        ploc=ploc,
        covered=covered,
        complexity=complexity,
        coverage=scores.coverage,
        wcc_plain=scores.wcc_plain,
        wcc_quantized=scores.wcc_quantized,
        crap=scores.crap,
        skunk=scores.skunk,
        is_complex=flagged,
        function=function,
        start=start,
    )


def test_project_coverage_pools_lines() -> None:
    metrics = [_result("a", ploc=3, covered=2), _result("b", ploc=1, covered=0)]
    pooled = project_coverage(metrics)
    assert (pooled.covered, pooled.coverable) == (2, 4)
    assert pooled.ratio == pytest.approx(0.5)
    # not the mean of 2/3 and 0
    assert pooled.ratio != pytest.approx(1 / 3)
    assert pooled.percent == pytest.approx(50.0)


def test_project_coverage_empty_is_zero() -> None:
    pooled = project_coverage([])
    assert pooled.ratio == 0.0
    assert pooled.percent == 0.0


def test_project_coverage_rejects_negative_counts() -> None:
    with pytest.raises(ValueError, match=">= 0"):
        ProjectCoverage(covered=-1, coverable=2)


def test_rank_orders_by_score_then_name() -> None:
    results = [
        _result("b.py", ploc=4, covered=0, complexity=5.0),
        _result("a.py", ploc=4, covered=0, complexity=5.0),
        _result("c.py", ploc=4, covered=0, complexity=9.0),
        _result("a.py", ploc=4, covered=0, complexity=5.0, function="g", start=9),
        _result("a.py", ploc=4, covered=0, complexity=5.0, function="f", start=3),
    ]
    ranked = rank(results, SortKey.WCC_PLAIN)
    assert [r.name for r in ranked] == ["c.py", "a.py", "a.py::f", "a.py::g", "b.py"]


def test_rank_by_other_keys() -> None:
    high_crap = _result("x.py", ploc=10, covered=10, complexity=13.0)
    uncovered = _result("y.py", ploc=10, covered=0, complexity=3.0)
    assert rank([uncovered, high_crap], SortKey.CRAP)[0] is high_crap
    assert rank([high_crap, uncovered], SortKey.WCC_PLAIN)[0] is uncovered


def test_aggregate_builds_outcome() -> None:
    metrics = [
        _result("a.py", ploc=2, covered=2, flagged=False),
        _result("b.py", ploc=2, covered=0, complexity=3.0, flagged=True),
        _result("c.py", ploc=2, covered=1, complexity=30.0, flagged=True),
    ]
    ignored = [IgnoredEntry(path="d.py", reason=IgnoreReason.NO_COVERAGE)]

    outcome = aggregate(metrics, ignored, sort=SortKey.SKUNK)

    assert outcome.metrics == tuple(metrics)
    assert outcome.ignored == tuple(ignored)
    assert [r.file for r in outcome.complex] == ["c.py", "b.py"]
    assert set(outcome.complex) <= set(outcome.metrics)
    assert outcome.project_coverage == ProjectCoverage(covered=3, coverable=6)
    assert outcome.sort is SortKey.SKUNK
