from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from weighted_coverage.cli._shared import configure_logging, resolve_use_color
from weighted_coverage.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_IOERR,
    EXIT_NOINPUT,
    EXIT_OK,
)
from weighted_coverage.core.config import DEFAULT_N_THREADS, RunConfig
from weighted_coverage.core.pipeline import (
    DataError,
    NoInputError,
    SystemIOError,
    UnexpectedError,
    run,
)
from weighted_coverage.core.thresholds import DEFAULT_THRESHOLDS, parse_thresholds
from weighted_coverage.core.types import Complexity, JsonFormat, Mode, SortKey
from weighted_coverage.io import color_allowed, write_output
from weighted_coverage.output import FORMATTERS, Format, OutputMeta, render_summary

if TYPE_CHECKING:
    from weighted_coverage.core.model.report import ScanOutcome

_BOOL_FALSE = False

THRESHOLDS_HELP = (
    "Four comma-separated floats: WCC_PLAIN,WCC_QUANTIZED,CRAP,SKUNK. "
    "0 is the minimum (flag everything). "
    "Worst cases: WCC_PLAIN COMP*SLOC/PLOC, WCC_QUANTIZED 2*SLOC/PLOC, "
    "CRAP COMP^2+COMP, SKUNK COMP/25."
)


def _run_or_exit(config: RunConfig) -> ScanOutcome:
    try:
        return run(config)
    except NoInputError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except DataError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    except SystemIOError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_IOERR) from exc
    except UnexpectedError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_GENERIC) from exc


def _write_reports(outcome: ScanOutcome, meta: OutputMeta, destinations: dict[Format, Path | None]) -> None:
    for fmt, destination in destinations.items():
        if destination is None:
            continue
        try:
            write_output(FORMATTERS[fmt](outcome, meta), destination)
        except OSError as exc:
            typer.echo(f"ERROR: failed to write {fmt.value} report: {exc}", err=True)
            raise typer.Exit(code=EXIT_IOERR) from exc


def scan_cmd(
    path: Annotated[
        Path,
        typer.Option("-p", "--path", help="Path to the project folder."),
    ],
    path_json: Annotated[
        Path,
        typer.Option("-j", "--path-json", help="Path to the grcov JSON in coveralls/covdir format."),
    ],
    json_format: Annotated[
        JsonFormat,
        typer.Option("-f", "--json-format", help="Coverage JSON schema.", case_sensitive=False),
    ] = JsonFormat.COVERALLS,
    complexity: Annotated[
        Complexity,
        typer.Option("-c", "--complexity", help="Complexity metric to use.", case_sensitive=False),
    ] = Complexity.CYCLOMATIC,
    mode: Annotated[
        Mode,
        typer.Option("-m", "--mode", help="Measure files or functions.", case_sensitive=False),
    ] = Mode.FILES,
    thresholds: Annotated[
        str,
        typer.Option("-t", "--thresholds", help=THRESHOLDS_HELP),
    ] = DEFAULT_THRESHOLDS,
    n_threads: Annotated[
        int,
        typer.Option("-n", "--n-threads", help="Number of worker threads (at least 1 is used)."),
    ] = DEFAULT_N_THREADS,
    sort: Annotated[
        SortKey,
        typer.Option("-s", "--sort", help="Metric used to sort complex units.", case_sensitive=False),
    ] = SortKey.WCC_PLAIN,
    csv: Annotated[
        Path | None,
        typer.Option("--csv", help="Write the CSV report to PATH (use '-' for stdout)."),
    ] = None,
    json: Annotated[
        Path | None,
        typer.Option("--json", help="Write the JSON report to PATH (use '-' for stdout)."),
    ] = None,
    html: Annotated[
        Path | None,
        typer.Option("--html", help="Write the HTML report to PATH (use '-' for stdout)."),
    ] = None,
    include: Annotated[
        list[str] | None,
        typer.Option("-i", "--include", help="Include glob patterns (repeatable)."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("-x", "--exclude", help="Exclude glob patterns (repeatable)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging."),
    ] = _BOOL_FALSE,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors."),
    ] = _BOOL_FALSE,
    color: Annotated[
        bool,
        typer.Option("--color", help="Force color output"),
    ] = _BOOL_FALSE,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color output"),
    ] = _BOOL_FALSE,
) -> None:
    """Compute weighted code coverage metrics for a project."""
    configure_logging(quiet=quiet, verbose=verbose)

    try:
        threshold_set = parse_thresholds(thresholds)
    except ValueError as exc:
        typer.echo(f"ERROR: invalid --thresholds: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc

    config = RunConfig(
        root=path,
        coverage_path=path_json,
        json_format=json_format,
        complexity=complexity,
        mode=mode,
        thresholds=threshold_set,
        n_threads=n_threads,
        sort=sort,
        include=tuple(include or ()),
        exclude=tuple(exclude or ()),
    )
    outcome = _run_or_exit(config)

    meta = OutputMeta(project=path, mode=mode)
    _write_reports(outcome, meta, {Format.CSV: csv, Format.JSON: json, Format.HTML: html})

    use_color = resolve_use_color(color=color, no_color=no_color, color_allowed=color_allowed())
    typer.echo(render_summary(outcome, color=use_color))
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("scan")(scan_cmd)


__all__ = ["register"]
