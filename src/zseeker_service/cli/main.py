"""
Main CLI entry point for zseeker-service.

Provides commands for:
- serve: Run the HTTP job service
- run: Execute one ZSeeker job locally
- show-config: Print the effective service configuration
"""

from __future__ import annotations

import typer
from rich import print as rprint

from zseeker_service import __version__

app = typer.Typer(
    name="zseeker-service",
    help="Run ZSeeker Z-DNA detection jobs over HTTP or from the command line",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"zseeker-service version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    zseeker-service: ZSeeker Z-DNA detection as a web service.

    Upload a FASTA file with scoring parameters and get the detected
    Z-DNA regions back as structured CSV headers and rows.
    """


# Import commands
from zseeker_service.cli import run, serve

# Register commands
app.command(name="serve")(serve.serve)
app.command(name="run")(run.run_job)
app.command(name="show-config")(serve.show_config)


if __name__ == "__main__":
    app()
