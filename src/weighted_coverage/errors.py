"""Centralised exception hierarchy for weighted-coverage."""

from __future__ import annotations


class WccError(Exception):
    """Base class for all custom weighted-coverage exceptions."""


class CoverageReportError(WccError):
    """Base class for errors related to coverage JSON handling."""


class CoverageReportNotFoundError(CoverageReportError):
    """Coverage JSON file could not be located on disk."""


class CoverageSchemaError(CoverageReportError):
    """Coverage JSON was found but does not match the selected schema."""


class ProjectRootError(WccError):
    """Project root is missing or is not a directory."""


class ComplexityError(WccError):
    """A source file could not be analysed for complexity."""


__all__ = [
    "ComplexityError",
    "CoverageReportError",
    "CoverageReportNotFoundError",
    "CoverageSchemaError",
    "ProjectRootError",
    "WccError",
]
