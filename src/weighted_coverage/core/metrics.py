"""Weighted coverage formulas.

Every score combines a complexity value with the coverage ratio of a unit:

* ``wcc_plain``      ``COMP * (1 - COV)``
* ``wcc_quantized``  ``Q(COMP) * (1 - COV)`` with ``Q`` in ``{1, 2}``
* ``crap``           ``COMP^2 * (1 - COV)^3 + COMP``
* ``skunk``          ``COMP / 25 * (1 - COV)``

Callers guarantee ``ploc > 0``; units without coverable lines never reach
these functions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Complexity above this value doubles the quantized weight.
QUANTIZATION_CUT_POINT = 15

SKUNK_DIVISOR = 25.0


@dataclass(frozen=True, slots=True)
class Scores:
    coverage: float
    wcc_plain: float
    wcc_quantized: float
    crap: float
    skunk: float


def coverage_ratio(covered: int, ploc: int) -> float:
    """Return ``covered / ploc`` clamped to ``[0, 1]``."""
    if ploc <= 0:
        msg = "ploc must be > 0"
        raise ValueError(msg)
    return min(1.0, max(0.0, covered / ploc))


def quantize(comp: float) -> int:
    return 2 if comp > QUANTIZATION_CUT_POINT else 1


def wcc_plain(comp: float, cov: float) -> float:
    # At COV = 0 this is COMP; COMP * SLOC / PLOC is an upper bound, not an identity.
    return comp * (1.0 - cov)


def wcc_quantized(comp: float, cov: float) -> float:
    return quantize(comp) * (1.0 - cov)


def crap(comp: float, cov: float) -> float:
    return comp**2 * (1.0 - cov) ** 3 + comp


def skunk(comp: float, cov: float) -> float:
    if cov == 0:
        return comp / SKUNK_DIVISOR
    return (comp / SKUNK_DIVISOR) * (1.0 - cov)


def compute_scores(comp: float, ploc: int, covered: int) -> Scores:
    """Return the four weighted scores of a unit with *covered* of *ploc* lines hit."""
    if not math.isfinite(comp) or comp < 0:
        msg = f"complexity must be a finite value >= 0, got {comp!r}"
        raise ValueError(msg)
    cov = coverage_ratio(covered, ploc)
    return Scores(
        coverage=cov,
        wcc_plain=wcc_plain(comp, cov),
        wcc_quantized=wcc_quantized(comp, cov),
        crap=crap(comp, cov),
        skunk=skunk(comp, cov),
    )


__all__ = [
    "QUANTIZATION_CUT_POINT",
    "SKUNK_DIVISOR",
    "Scores",
    "compute_scores",
    "coverage_ratio",
    "crap",
    "quantize",
    "skunk",
    "wcc_plain",
    "wcc_quantized",
]
