from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from weighted_coverage import __version__
from weighted_coverage.cli import EXIT_CONFIG, EXIT_DATAERR, EXIT_NOINPUT, EXIT_OK, cli

# --------------------------------------------------------------------------- #
# helpers                                                                     #
# --------------------------------------------------------------------------- #

SOURCE = """\
def pick(x):
    if x:
        return 1
    return 0
"""


def _run(runner: CliRunner, args: list[str]) -> tuple[int, str]:
    """Invoke the CLI and return *(exit_code, output)* for convenience."""
    result = runner.invoke(cli, args)
    return result.exit_code, result.output


@pytest.fixture
def inputs(make_project: Callable[..., Path], coveralls_file: Callable[..., Path]) -> tuple[Path, Path]:
    project = make_project({"mod.py": SOURCE, "other.py": "y = 2\n"})
    return project, coveralls_file({"mod.py": [1, 1, 0, 1]})


# --------------------------------------------------------------------------- #
# tests                                                                       #
# --------------------------------------------------------------------------- #


def test_cli_version_flag(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, ["--version"])
    assert code == EXIT_OK
    assert out.strip() == f"wcc {__version__}"


def test_cli_version_command(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, ["version"])
    assert code == EXIT_OK
    assert out.strip() == __version__


def test_cli_scan_writes_reports(cli_runner: CliRunner, inputs: tuple[Path, Path], tmp_path: Path) -> None:
    project, coverage = inputs
    out_dir = tmp_path / "reports"
    code, out = _run(
        cli_runner,
        [
            "scan",
            "-p",
            str(project),
            "-j",
            str(coverage),
            "--csv",
            str(out_dir / "wcc.csv"),
            "--json",
            str(out_dir / "wcc.json"),
            "--html",
            str(out_dir / "wcc.html"),
            "--no-color",
        ],
    )
    assert code == EXIT_OK
    assert "\x1b[" not in out
    assert "Project coverage: 75.00% (3/4 lines)" in out

    data = json.loads((out_dir / "wcc.json").read_text(encoding="utf-8"))
    assert [f["file"] for f in data["files"]] == ["mod.py"]
    assert data["ignored"] == [{"path": "other.py", "reason": "no coverage data"}]
    assert (out_dir / "wcc.csv").read_text(encoding="utf-8").startswith("file,function,")
    assert "<table>" in (out_dir / "wcc.html").read_text(encoding="utf-8")


def test_cli_zero_thresholds_flag_everything(cli_runner: CliRunner, inputs: tuple[Path, Path]) -> None:
    project, coverage = inputs
    code, out = _run(
        cli_runner,
        ["scan", "-p", str(project), "-j", str(coverage), "-t", "0,0,0,0", "-m", "functions", "--no-color"],
    )
    assert code == EXIT_OK
    assert "Complex units" in out
    assert "pick" in out


def test_cli_json_to_stdout(cli_runner: CliRunner, inputs: tuple[Path, Path]) -> None:
    project, coverage = inputs
    code, out = _run(cli_runner, ["scan", "-p", str(project), "-j", str(coverage), "--json", "-", "-q"])
    assert code == EXIT_OK
    assert out.lstrip().startswith("{")
    assert '"project_coverage"' in out


@pytest.mark.parametrize("expression", ["1,2,3", "a,b,c,d", "-1,1,1,1", "1,1,nan,1"])
def test_cli_rejects_bad_thresholds(cli_runner: CliRunner, inputs: tuple[Path, Path], expression: str) -> None:
    project, coverage = inputs
    code, out = _run(cli_runner, ["scan", "-p", str(project), "-j", str(coverage), f"--thresholds={expression}"])
    assert code == EXIT_CONFIG
    assert "invalid --thresholds" in out


def test_cli_missing_coverage(cli_runner: CliRunner, make_project: Callable[..., Path], tmp_path: Path) -> None:
    project = make_project({"mod.py": SOURCE})
    code, out = _run(cli_runner, ["scan", "-p", str(project), "-j", str(tmp_path / "missing.json")])
    assert code == EXIT_NOINPUT
    assert "not found" in out


def test_cli_missing_project(cli_runner: CliRunner, coveralls_file: Callable[..., Path], tmp_path: Path) -> None:
    code, _ = _run(cli_runner, ["scan", "-p", str(tmp_path / "nowhere"), "-j", str(coveralls_file({}))])
    assert code == EXIT_NOINPUT


def test_cli_malformed_coverage(cli_runner: CliRunner, make_project: Callable[..., Path], tmp_path: Path) -> None:
    project = make_project({"mod.py": SOURCE})
    bad = tmp_path / "bad.json"
    bad.write_text('{"source_files": [{"name": "mod.py"}]}', encoding="utf-8")
    code, out = _run(cli_runner, ["scan", "-p", str(project), "-j", str(bad)])
    assert code == EXIT_DATAERR
    assert "coverage" in out


def test_cli_rejects_unknown_json_format(cli_runner: CliRunner, inputs: tuple[Path, Path]) -> None:
    project, coverage = inputs
    code, _ = _run(cli_runner, ["scan", "-p", str(project), "-j", str(coverage), "-f", "lcov"])
    assert code == 2
