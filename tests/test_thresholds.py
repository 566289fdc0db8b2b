import pytest

from weighted_coverage.core.metrics import Scores, compute_scores
from weighted_coverage.core.thresholds import DEFAULT_THRESHOLDS, ThresholdSet, is_complex, parse_thresholds


def _scores(wcc_plain: float = 0, wcc_quantized: float = 0, crap: float = 0, skunk: float = 0) -> Scores:
    return Scores(coverage=0.5, wcc_plain=wcc_plain, wcc_quantized=wcc_quantized, crap=crap, skunk=skunk)


def test_parse_default_thresholds() -> None:
    assert parse_thresholds(DEFAULT_THRESHOLDS) == ThresholdSet(35.0, 1.5, 35.0, 30.0)


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("1,2,3,4", ThresholdSet(1.0, 2.0, 3.0, 4.0)),
        (" 0 , 0.5 ,10, 2.25 ", ThresholdSet(0.0, 0.5, 10.0, 2.25)),
    ],
)
def test_parse_thresholds(expression: str, expected: ThresholdSet) -> None:
    assert parse_thresholds(expression) == expected


@pytest.mark.parametrize(
    ("expression", "pattern"),
    [
        ("", "non-empty"),
        ("1,2,3", "expected 4"),
        ("1,2,3,4,5", "expected 4"),
        ("1,two,3,4", "wcc_quantized threshold"),
        ("1,2,3,", "skunk threshold"),
        ("-1,2,3,4", "wcc_plain must be"),
        ("1,2,nan,4", "crap must be"),
        ("1,2,3,inf", "skunk must be"),
    ],
)
def test_parse_thresholds_rejects_invalid_input(expression: str, pattern: str) -> None:
    with pytest.raises(ValueError, match=pattern):
        parse_thresholds(expression)


def test_threshold_set_is_ordered() -> None:
    assert list(ThresholdSet(1, 2, 3, 4)) == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "scores",
    [
        _scores(wcc_plain=35.1),
        _scores(wcc_quantized=1.6),
        _scores(crap=36),
        _scores(skunk=30.5),
    ],
)
def test_any_exceeded_bound_is_complex(scores: Scores) -> None:
    assert is_complex(scores, parse_thresholds(DEFAULT_THRESHOLDS))


def test_bounds_are_strict() -> None:
    thresholds = parse_thresholds(DEFAULT_THRESHOLDS)
    assert not is_complex(_scores(35.0, 1.5, 35.0, 30.0), thresholds)


def test_zero_thresholds_flag_any_positive_score() -> None:
    zero = ThresholdSet(0, 0, 0, 0)
    assert is_complex(compute_scores(1, ploc=4, covered=4), zero)  # crap == comp
    assert not is_complex(compute_scores(0, ploc=4, covered=0), zero)
