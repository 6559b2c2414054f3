"""Main CLI application for fieldfmt."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from fieldfmt import __version__

app = typer.Typer(
    name="fieldfmt",
    help="Render query-result values with field formats.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fieldfmt {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version.", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log formatting fallbacks."),
) -> None:
    """fieldfmt: format values the way tables, exports and deliveries show them."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


# Import and register commands
from fieldfmt.cli.export_cmd import export  # noqa: E402
from fieldfmt.cli.format_cmd import format_value  # noqa: E402
from fieldfmt.cli.list_cmd import list_resources  # noqa: E402

app.command("format")(format_value)
app.command("export")(export)
app.command("list")(list_resources)


def main() -> None:
    """Entry point for the CLI."""
    app()
