from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from click.testing import CliRunner

from weighted_coverage.core.complexity import FileComplexity, FunctionSpan
from weighted_coverage.core.types import Complexity
from weighted_coverage.errors import ComplexityError

Hits = Sequence[int | None]


@dataclass
class FakeProvider:
    """Complexity provider returning canned values keyed by file name."""

    files: Mapping[str, FileComplexity] = field(default_factory=dict)
    broken: frozenset[str] = frozenset()
    calls: list[tuple[str, Complexity]] = field(default_factory=list)

    def supports(self, path: Path) -> bool:
        return path.name in self.files or path.name in self.broken

    def analyze(self, path: Path, complexity: Complexity, *, functions: bool = False) -> FileComplexity:
        self.calls.append((path.name, complexity))
        if path.name in self.broken:
            msg = f"{path}: cannot parse"
            raise ComplexityError(msg)
        result = self.files[path.name]
        return result if functions else FileComplexity(sloc=result.sloc, complexity=result.complexity)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    def build(files: Mapping[str, str], *, root: str = "project") -> Path:
        base = tmp_path / root
        for rel, text in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        base.mkdir(parents=True, exist_ok=True)
        return base

    return build


@pytest.fixture
def coveralls_file(tmp_path: Path) -> Callable[..., Path]:
    def write(mapping: Mapping[str, Hits], *, filename: str = "coveralls.json") -> Path:
        doc = {
            "repo_token": "unused",
            "source_files": [{"name": name, "coverage": list(hits)} for name, hits in mapping.items()],
        }
        out = tmp_path / filename
        out.write_text(json.dumps(doc), encoding="utf-8")
        return out

    return write


def covdir_tree(mapping: Mapping[str, Hits]) -> dict[str, object]:
    """Build a covdir document, using -1 for non-coverable lines."""
    root: dict[str, object] = {"name": "", "coveragePercent": 0.0, "children": {}}
    for name, hits in mapping.items():
        node = root
        *dirs, leaf = name.split("/")
        for segment in dirs:
            children = node["children"]
            assert isinstance(children, dict)
            node = children.setdefault(segment, {"name": segment, "coveragePercent": 0.0, "children": {}})
        children = node["children"]
        assert isinstance(children, dict)
        children[leaf] = {
            "name": leaf,
            "coveragePercent": 50.0,
            "coverage": [-1 if h is None else h for h in hits],
        }
    return root


@pytest.fixture
def covdir_file(tmp_path: Path) -> Callable[..., Path]:
    def write(mapping: Mapping[str, Hits], *, filename: str = "covdir.json") -> Path:
        out = tmp_path / filename
        out.write_text(json.dumps(covdir_tree(mapping)), encoding="utf-8")
        return out

    return write


def span(name: str, start: int, end: int, complexity: float) -> FunctionSpan:
    return FunctionSpan(name=name, start=start, end=end, complexity=complexity)
