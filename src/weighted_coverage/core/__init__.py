from weighted_coverage.core.aggregate import aggregate, project_coverage, rank
from weighted_coverage.core.complexity import (
    ComplexityProvider,
    FileComplexity,
    FunctionSpan,
    PythonComplexityProvider,
    cognitive_complexity,
)
from weighted_coverage.core.config import DEFAULT_N_THREADS, LOG_FORMAT, RunConfig, get_schema
from weighted_coverage.core.coverage import (
    CoverageReport,
    load_coverage,
    normalize_report_path,
    parse_coverage,
)
from weighted_coverage.core.engine import count_lines, discover, process_item, scan
from weighted_coverage.core.files import iter_source_files, normalize_path, read_source
from weighted_coverage.core.metrics import Scores, compute_scores
from weighted_coverage.core.model.report import (
    FileUnit,
    FunctionUnit,
    IgnoredEntry,
    MetricResult,
    ProjectCoverage,
    ScanOutcome,
)
from weighted_coverage.core.path_filter import PathFilter
from weighted_coverage.core.thresholds import DEFAULT_THRESHOLDS, ThresholdSet, is_complex, parse_thresholds
from weighted_coverage.core.types import Complexity, IgnoreReason, JsonFormat, LineHits, Mode, SortKey

__all__ = [
    "DEFAULT_N_THREADS",
    "DEFAULT_THRESHOLDS",
    "LOG_FORMAT",
    "Complexity",
    "ComplexityProvider",
    "CoverageReport",
    "FileComplexity",
    "FileUnit",
    "FunctionSpan",
    "FunctionUnit",
    "IgnoreReason",
    "IgnoredEntry",
    "JsonFormat",
    "LineHits",
    "MetricResult",
    "Mode",
    "PathFilter",
    "ProjectCoverage",
    "PythonComplexityProvider",
    "RunConfig",
    "ScanOutcome",
    "Scores",
    "SortKey",
    "ThresholdSet",
    "aggregate",
    "cognitive_complexity",
    "compute_scores",
    "count_lines",
    "discover",
    "get_schema",
    "is_complex",
    "iter_source_files",
    "load_coverage",
    "normalize_path",
    "normalize_report_path",
    "parse_coverage",
    "parse_thresholds",
    "process_item",
    "project_coverage",
    "rank",
    "read_source",
    "scan",
]
