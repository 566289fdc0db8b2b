from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from weighted_coverage import __version__
from weighted_coverage.cli import scan


def _print_version(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"wcc {__version__}")
        raise typer.Exit


def create_app() -> typer.Typer:
    app = typer.Typer(help="Weighted code coverage: combine complexity and line coverage into risk scores.")

    @app.callback()
    def _root(
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit", callback=_print_version, is_eager=True),
        ] = False,
    ) -> None:
        del version

    scan.register(app)

    @app.command("version")
    def _version() -> None:
        """Print the version and exit."""
        typer.echo(__version__)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
