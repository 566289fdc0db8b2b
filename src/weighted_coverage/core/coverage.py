"""Coverage JSON parsing (pure core, no UI).

Two grcov JSON schemas are understood:

* **Coveralls**: a flat list of source files, each with a ``coverage`` array
  holding one nullable hit count per source line.
* **Covdir**: a directory tree where every node carries a
  ``coveragePercent`` and either ``children`` (directories) or a
  ``coverage`` array (files) using ``-1`` for non-coverable lines.

Both are flattened into the same :class:`CoverageReport`, so code downstream of
the parser never needs to know which schema was used.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from weighted_coverage._meta import logger
from weighted_coverage.core.types import JsonFormat, LineHits, ReportKey
from weighted_coverage.errors import CoverageReportNotFoundError, CoverageSchemaError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator, Mapping

_COVDIR_UNCOVERABLE = -1


# --------------------------- Model -------------------------------------------
@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Read-only mapping of normalised file path to per-line hit counts."""

    files: Mapping[ReportKey, LineHits] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the underlying mapping."""
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def __contains__(self, key: object) -> bool:
        return key in self.files

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ReportKey]:
        return iter(self.files)

    def get(self, key: ReportKey) -> LineHits | None:
        return self.files.get(key)


# --------------------------- Paths -------------------------------------------
def normalize_report_path(name: str, *, base: Path | None = None) -> ReportKey:
    """Return *name* as a POSIX path relative to *base* when possible."""
    text = name.replace("\\", "/")
    path = PurePosixPath(text)
    if path.is_absolute() and base is not None:
        try:
            return Path(text).resolve().relative_to(base.resolve()).as_posix()
        except ValueError:
            return path.as_posix()
    parts = [part for part in path.parts if part != "."]
    return PurePosixPath(*parts).as_posix() if parts else ""


# --------------------------- Line arrays -------------------------------------
def _line_hits(raw: object, *, where: str, uncoverable: int | None = None) -> LineHits:
    if not isinstance(raw, list):
        msg = f"{where}: 'coverage' must be an array, got {type(raw).__name__}"
        raise CoverageSchemaError(msg)
    out: list[int | None] = []
    for idx, value in enumerate(raw, start=1):
        if value is None:
            out.append(None)
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"{where}: line {idx} has non-integer hit count {value!r}"
            raise CoverageSchemaError(msg)
        if uncoverable is not None and value == uncoverable:
            out.append(None)
            continue
        if value < 0:
            msg = f"{where}: line {idx} has negative hit count {value}"
            raise CoverageSchemaError(msg)
        out.append(value)
    return tuple(out)


def _merge_hits(first: LineHits, second: LineHits) -> LineHits:
    """Combine two arrays for the same file, keeping the highest count per line."""
    size = max(len(first), len(second))
    merged: list[int | None] = []
    for idx in range(size):
        a = first[idx] if idx < len(first) else None
        b = second[idx] if idx < len(second) else None
        if a is None:
            merged.append(b)
        elif b is None:
            merged.append(a)
        else:
            merged.append(max(a, b))
    return tuple(merged)


# --------------------------- Coveralls ---------------------------------------
def _coveralls_records(doc: object) -> list[Any]:
    if isinstance(doc, dict):
        if "source_files" not in doc:
            msg = "coveralls report: missing required key 'source_files'"
            raise CoverageSchemaError(msg)
        doc = doc["source_files"]
    if not isinstance(doc, list):
        msg = f"coveralls report: expected a list of source files, got {type(doc).__name__}"
        raise CoverageSchemaError(msg)
    return doc


def _record_name(record: Mapping[str, Any], idx: int) -> str:
    for key in ("name", "path", "file"):
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    msg = f"coveralls report: source file #{idx} has no 'name'"
    raise CoverageSchemaError(msg)


def parse_coveralls(doc: object, *, base: Path | None = None) -> CoverageReport:
    """Flatten a Coveralls document into a :class:`CoverageReport`."""
    files: dict[ReportKey, LineHits] = {}
    for idx, record in enumerate(_coveralls_records(doc)):
        if not isinstance(record, dict):
            msg = f"coveralls report: source file #{idx} is not an object"
            raise CoverageSchemaError(msg)
        name = _record_name(record, idx)
        if "coverage" not in record:
            msg = f"coveralls report: {name}: missing required key 'coverage'"
            raise CoverageSchemaError(msg)
        key = normalize_report_path(name, base=base)
        hits = _line_hits(record["coverage"], where=name)
        files[key] = _merge_hits(files[key], hits) if key in files else hits
    return CoverageReport(files)


# --------------------------- Covdir ------------------------------------------
def _walk_covdir(node: Mapping[str, Any], prefix: str, out: dict[ReportKey, LineHits]) -> None:
    where = prefix or "<root>"
    if "coverage" in node:
        out[prefix] = _line_hits(node["coverage"], where=where, uncoverable=_COVDIR_UNCOVERABLE)
        return
    children = node.get("children")
    if not isinstance(children, dict):
        msg = f"covdir report: {where}: node has neither 'children' nor 'coverage'"
        raise CoverageSchemaError(msg)
    for segment, child in children.items():
        if not isinstance(child, dict):
            msg = f"covdir report: {where}/{segment}: node is not an object"
            raise CoverageSchemaError(msg)
        _walk_covdir(child, f"{prefix}/{segment}" if prefix else segment, out)


def parse_covdir(doc: object, *, base: Path | None = None) -> CoverageReport:
    """Flatten a Covdir tree into a :class:`CoverageReport`.

    Directory aggregates (``coveragePercent``, ``linesCovered``, ...) are
    discarded; project coverage is recomputed from the leaf arrays.
    """
    if not isinstance(doc, dict):
        msg = f"covdir report: expected an object at the root, got {type(doc).__name__}"
        raise CoverageSchemaError(msg)
    if "children" not in doc and "coverage" not in doc:
        msg = "covdir report: missing required key 'children'"
        raise CoverageSchemaError(msg)
    raw: dict[ReportKey, LineHits] = {}
    if "coverage" in doc:
        # A single-file tree: the root itself is the leaf.
        name = doc.get("name")
        if not isinstance(name, str) or not name:
            msg = "covdir report: file node at the root has no 'name'"
            raise CoverageSchemaError(msg)
        _walk_covdir(doc, name, raw)
    else:
        _walk_covdir(doc, "", raw)
    return CoverageReport({normalize_report_path(key, base=base): hits for key, hits in raw.items()})


# --------------------------- Entry points ------------------------------------
_PARSERS = {
    JsonFormat.COVERALLS: parse_coveralls,
    JsonFormat.COVDIR: parse_covdir,
}


def parse_coverage(
    data: bytes | str | object,
    json_format: JsonFormat,
    *,
    base: Path | None = None,
) -> CoverageReport:
    """Parse *data* (raw JSON text or a decoded document) using *json_format*."""
    if isinstance(data, (bytes, str)):
        try:
            doc = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            msg = f"invalid JSON: {exc}"
            raise CoverageSchemaError(msg) from exc
    else:
        doc = data
    report = _PARSERS[JsonFormat(json_format)](doc, base=base)
    logger.debug("parsed %s coverage report with %d files", json_format, len(report))
    return report


def load_coverage(path: Path, json_format: JsonFormat, *, base: Path | None = None) -> CoverageReport:
    """Read and parse the coverage JSON at *path*."""
    if not path.is_file():
        msg = f"coverage report not found: {path}"
        raise CoverageReportNotFoundError(msg)
    try:
        return parse_coverage(path.read_bytes(), json_format, base=base)
    except CoverageSchemaError as exc:
        msg = f"{path}: {exc}"
        raise CoverageSchemaError(msg) from exc


__all__ = [
    "CoverageReport",
    "load_coverage",
    "normalize_report_path",
    "parse_coverage",
    "parse_covdir",
    "parse_coveralls",
]
