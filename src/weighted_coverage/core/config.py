"""Central configuration and constants for ``weighted-coverage``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import cache
from importlib import resources
from typing import TYPE_CHECKING

from weighted_coverage.core.thresholds import DEFAULT_THRESHOLDS, ThresholdSet, parse_thresholds
from weighted_coverage.core.types import Complexity, JsonFormat, Mode, SortKey

if TYPE_CHECKING:
    from pathlib import Path

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

DEFAULT_N_THREADS = 2


_SCHEMA_FILES: dict[str, str] = {
    "v1": "schema.json",
}


@cache
def get_schema(version: str = "v1") -> dict[str, object]:
    """Load and cache the JSON schema for structured output."""
    try:
        filename = _SCHEMA_FILES[version]
    except KeyError as exc:
        choices = ", ".join(sorted(_SCHEMA_FILES))
        msg = f"Unsupported schema version: {version!r}. Available versions: {choices}"
        raise ValueError(msg) from exc
    return json.loads(resources.files("weighted_coverage.data").joinpath(filename).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Everything a scan needs, captured once and passed explicitly.

    ``n_threads`` is clamped to at least one worker.
    """

    root: Path
    coverage_path: Path
    json_format: JsonFormat = JsonFormat.COVERALLS
    complexity: Complexity = Complexity.CYCLOMATIC
    mode: Mode = Mode.FILES
    thresholds: ThresholdSet = field(default_factory=lambda: parse_thresholds(DEFAULT_THRESHOLDS))
    n_threads: int = DEFAULT_N_THREADS
    sort: SortKey = SortKey.WCC_PLAIN
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Clamp the worker count."""
        object.__setattr__(self, "n_threads", max(1, int(self.n_threads)))


__all__ = ["DEFAULT_N_THREADS", "LOG_FORMAT", "RunConfig", "get_schema"]
