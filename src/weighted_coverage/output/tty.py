from __future__ import annotations

from collections import Counter
from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from weighted_coverage.core.model.report import ScanOutcome


def _style_percent(pct: float, green: float, yellow: float) -> str:
    v = round(pct, 2)
    if v >= green:
        return f"[green]{v:.2f}%[/green]"
    if v >= yellow:
        return f"[yellow]{v:.2f}%[/yellow]"
    return f"[red]{v:.2f}%[/red]"


def _complex_table(outcome: ScanOutcome) -> Table:
    table = Table(
        title=f"Complex units (sorted by {outcome.sort})",
        box=box.SIMPLE_HEAVY,
        header_style="bold",
        expand=True,
    )
    table.add_column("File", overflow="fold")
    table.add_column("Function", overflow="fold")
    table.add_column("Comp.", justify="right")
    table.add_column("Cov.", justify="right")
    table.add_column("WCC\nPlain", justify="right")
    table.add_column("WCC\nQuant.", justify="right")
    table.add_column("CRAP", justify="right")
    table.add_column("SKUNK", justify="right")
    for r in outcome.complex:
        table.add_row(
            r.file,
            r.function or "",
            f"{r.complexity:g}",
            f"{r.coverage * 100:.1f}%",
            f"{r.wcc_plain:.3f}",
            f"{r.wcc_quantized:.3f}",
            f"{r.crap:.3f}",
            f"{r.skunk:.3f}",
        )
    return table


def _ignored_table(outcome: ScanOutcome) -> Table:
    table = Table(title="Ignored", box=box.SIMPLE_HEAVY, header_style="bold", expand=True)
    table.add_column("Reason")
    table.add_column("Count", justify="right")
    for reason, count in sorted(Counter(e.reason for e in outcome.ignored).items()):
        table.add_row(str(reason), str(count))
    return table


def render_summary(
    outcome: ScanOutcome,
    *,
    color: bool = True,
    green: float = 90.0,
    yellow: float = 75.0,
) -> str:
    """Render the console summary: complex units, ignore counts and project coverage."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=color, no_color=not color, width=120)
    console.print()
    if outcome.complex:
        console.print(_complex_table(outcome))
    else:
        console.print("No complex units found.")
    if outcome.ignored:
        console.print(_ignored_table(outcome))
    cov = outcome.project_coverage
    console.print(
        f"[bold]Units measured:[/bold] {len(outcome.metrics)}  "
        f"[bold]Ignored:[/bold] {len(outcome.ignored)}  "
        f"[bold]Complex:[/bold] {len(outcome.complex)}"
    )
    console.print(
        f"[bold]Project coverage:[/bold] {_style_percent(cov.percent, green, yellow)} "
        f"({cov.covered}/{cov.coverable} lines)"
    )
    console.print()
    return buf.getvalue().rstrip()


__all__ = ["render_summary"]
