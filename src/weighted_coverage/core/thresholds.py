"""Threshold parsing and complexity classification."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from weighted_coverage.core.metrics import Scores

DEFAULT_THRESHOLDS = "35.0,1.5,35.0,30.0"

_FIELDS = ("wcc_plain", "wcc_quantized", "crap", "skunk")


@dataclass(frozen=True, slots=True)
class ThresholdSet:
    """Upper bounds for the four weighted scores.

    Fields
    ------
    wcc_plain:
        Maximum WCC plain score; worst case is ``COMP * SLOC / PLOC``.
    wcc_quantized:
        Maximum WCC quantized score; worst case is ``2 * SLOC / PLOC``.
    crap:
        Maximum CRAP score; worst case is ``COMP^2 + COMP``.
    skunk:
        Maximum SKUNK score; worst case is ``COMP / 25``.

    A bound of ``0`` flags every unit with a positive score.
    """

    wcc_plain: float
    wcc_quantized: float
    crap: float
    skunk: float

    def __post_init__(self) -> None:
        """Validate that every bound is finite and non-negative."""
        for name in _FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                msg = f"threshold {name} must be a finite value >= 0, got {value!r}"
                raise ValueError(msg)

    def __iter__(self) -> Iterator[float]:
        return iter((self.wcc_plain, self.wcc_quantized, self.crap, self.skunk))


def parse_thresholds(expression: str) -> ThresholdSet:
    """Parse ``"WCC_PLAIN,WCC_QUANTIZED,CRAP,SKUNK"`` into a :class:`ThresholdSet`."""
    if not expression or not expression.strip():
        msg = "threshold expression must be non-empty"
        raise ValueError(msg)

    tokens = [token.strip() for token in expression.split(",")]
    if len(tokens) != len(_FIELDS):
        msg = f"expected {len(_FIELDS)} comma-separated thresholds, got {len(tokens)}: {expression!r}"
        raise ValueError(msg)

    values: list[float] = []
    for name, token in zip(_FIELDS, tokens, strict=True):
        try:
            values.append(float(token))
        except ValueError as exc:
            msg = f"invalid {name} threshold: {token!r} is not a float"
            raise ValueError(msg) from exc
    return ThresholdSet(*values)


def is_complex(scores: Scores, thresholds: ThresholdSet) -> bool:
    """Return ``True`` if any score strictly exceeds its bound."""
    return (
        scores.wcc_plain > thresholds.wcc_plain
        or scores.wcc_quantized > thresholds.wcc_quantized
        or scores.crap > thresholds.crap
        or scores.skunk > thresholds.skunk
    )


__all__ = [
    "DEFAULT_THRESHOLDS",
    "ThresholdSet",
    "is_complex",
    "parse_thresholds",
]
