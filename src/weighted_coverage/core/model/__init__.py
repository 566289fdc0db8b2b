"""Result model for weighted-coverage (pure types; no IO)."""

from .report import FileUnit, FunctionUnit, IgnoredEntry, MetricResult, ProjectCoverage, ScanOutcome

__all__ = [
    "FileUnit",
    "FunctionUnit",
    "IgnoredEntry",
    "MetricResult",
    "ProjectCoverage",
    "ScanOutcome",
]
