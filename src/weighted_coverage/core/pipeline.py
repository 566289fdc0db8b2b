from __future__ import annotations

from typing import TYPE_CHECKING

from weighted_coverage._meta import logger
from weighted_coverage.core.aggregate import aggregate
from weighted_coverage.core.complexity import PythonComplexityProvider
from weighted_coverage.core.coverage import load_coverage
from weighted_coverage.core.engine import scan
from weighted_coverage.core.path_filter import PathFilter
from weighted_coverage.errors import (
    CoverageReportNotFoundError,
    CoverageSchemaError,
    ProjectRootError,
)

if TYPE_CHECKING:
    from weighted_coverage.core.complexity import ComplexityProvider
    from weighted_coverage.core.config import RunConfig
    from weighted_coverage.core.model.report import ScanOutcome


class PipelineError(Exception):
    """Base class for errors emitted by the pipeline."""


class NoInputError(PipelineError):
    """Coverage JSON or project root was missing."""


class DataError(PipelineError):
    """Coverage JSON is malformed or does not match the selected schema."""


class SystemIOError(PipelineError):
    """Filesystem IO error while reading the coverage report."""


class UnexpectedError(PipelineError):
    """Unexpected failure while scanning."""


def run(config: RunConfig, provider: ComplexityProvider | None = None) -> ScanOutcome:
    """Parse the coverage report, scan the project and aggregate the results."""
    provider = provider or PythonComplexityProvider()
    path_filter = (
        PathFilter(config.include, config.exclude, base=config.root) if (config.include or config.exclude) else None
    )
    try:
        coverage = load_coverage(config.coverage_path, config.json_format, base=config.root)
        metrics, ignored = scan(
            config.root,
            coverage,
            provider,
            complexity=config.complexity,
            mode=config.mode,
            thresholds=config.thresholds,
            n_threads=config.n_threads,
            path_filter=path_filter,
        )
    except (CoverageReportNotFoundError, ProjectRootError) as exc:
        raise NoInputError(str(exc)) from exc
    except CoverageSchemaError as exc:
        msg = f"failed to parse coverage JSON: {exc}"
        raise DataError(msg) from exc
    except OSError as exc:
        raise SystemIOError(str(exc)) from exc
    except Exception as exc:
        logger.exception("unexpected failure")
        raise UnexpectedError(str(exc)) from exc

    outcome = aggregate(metrics, ignored, sort=config.sort)
    logger.info(
        "%d units measured, %d ignored, %d complex, project coverage %.2f%%",
        len(outcome.metrics),
        len(outcome.ignored),
        len(outcome.complex),
        outcome.project_coverage.percent,
    )
    return outcome


__all__ = [
    "DataError",
    "NoInputError",
    "PipelineError",
    "SystemIOError",
    "UnexpectedError",
    "run",
]
