"""Shared type aliases and enumerations used across weighted-coverage."""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Common type aliases
# ---------------------------------------------------------------------------

LineHits: TypeAlias = tuple[int | None, ...]
"""Per-line hit counts of one file; ``None`` marks a non-coverable line."""

ReportKey: TypeAlias = str
"""Normalised POSIX path used to look files up in a coverage report."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Complexity(StrEnum):
    """Structural complexity metric computed for every unit."""

    CYCLOMATIC = "cyclomatic"
    COGNITIVE = "cognitive"


class JsonFormat(StrEnum):
    """Supported coverage report schemas."""

    COVERALLS = "coveralls"
    COVDIR = "covdir"


class Mode(StrEnum):
    """Granularity of the metric table."""

    FILES = "files"
    FUNCTIONS = "functions"


class SortKey(StrEnum):
    """Score used to order the list of complex units."""

    WCC_PLAIN = "wcc_plain"
    WCC_QUANTIZED = "wcc_quantized"
    CRAP = "crap"
    SKUNK = "skunk"


class IgnoreReason(StrEnum):
    """Why a unit was left out of the metric table."""

    NO_COVERAGE = "no coverage data"
    ZERO_PLOC = "zero coverable lines"
    UNPARSABLE = "unparsable"


__all__ = [
    "Complexity",
    "IgnoreReason",
    "JsonFormat",
    "LineHits",
    "Mode",
    "ReportKey",
    "SortKey",
]
