from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from jsonschema import validate

from weighted_coverage import __version__
from weighted_coverage.core.config import get_schema
from weighted_coverage.core.types import Mode
from weighted_coverage.output.base import group_by_file, metric_row

if TYPE_CHECKING:
    from weighted_coverage.core.model.report import MetricResult, ScanOutcome
    from weighted_coverage.output.base import OutputMeta


def _function_entry(result: MetricResult) -> dict[str, Any]:
    row = metric_row(result)
    del row["file"]
    return row


def _files(outcome: ScanOutcome, mode: Mode) -> list[dict[str, Any]]:
    if mode is Mode.FILES:
        return [metric_row(r) for r in outcome.metrics]
    return [
        {"file": file, "functions": [_function_entry(r) for r in results]}
        for file, results in group_by_file(outcome.metrics).items()
    ]


def build_payload(outcome: ScanOutcome, meta: OutputMeta) -> dict[str, Any]:
    cov = outcome.project_coverage
    return {
        "tool": {"name": "weighted-coverage", "version": __version__},
        "project": meta.project_label,
        "mode": str(meta.mode),
        "sort": str(outcome.sort),
        "project_coverage": {
            "covered": cov.covered,
            "coverable": cov.coverable,
            "ratio": cov.ratio,
        },
        "files": _files(outcome, Mode(meta.mode)),
        "complex": [metric_row(r) for r in outcome.complex],
        "ignored": [{"path": e.path, "reason": str(e.reason)} for e in outcome.ignored],
    }


def format_json(outcome: ScanOutcome, meta: OutputMeta) -> str:
    """Return *outcome* as schema-validated JSON."""
    payload = build_payload(outcome, meta)
    validate(payload, get_schema("v1"))
    return json.dumps(payload, indent=2, sort_keys=True)


__all__ = ["build_payload", "format_json"]
