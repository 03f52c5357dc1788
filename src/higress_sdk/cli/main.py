"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from higress_sdk import __version__
from higress_sdk.cli.commands import resources, status
from higress_sdk.cli.commands.base import ConfigOption
from higress_sdk.logging.config import configure_logging

app = typer.Typer(
    name="higress",
    help="Inspect the Kubernetes resources owned by a Higress gateway.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"higress version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write JSON logs to this file.",
    ),
    config: ConfigOption = None,
) -> None:
    """Higress gateway resource CLI."""
    configure_logging(verbose=verbose, debug=debug, log_file=log_file)
    ctx.obj = {"config_path": config}


app.command()(status.status)
app.command()(resources.ingresses)
app.command()(resources.plugins)
app.command()(resources.services)


if __name__ == "__main__":
    app()
