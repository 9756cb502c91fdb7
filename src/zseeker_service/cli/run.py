"""
Run command: execute one ZSeeker job locally.

Uses the same parameter resolution, invocation and result parsing as the
HTTP endpoint, so it doubles as a way to check a deployment's tool
install and to reproduce a failing request from the command line.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from zseeker_service.cli.utils import (
    QuietConsole,
    configure_logging,
    load_config,
    parse_param_options,
    spinner_progress,
)
from zseeker_service.core.exceptions import ZSeekerServiceError
from zseeker_service.core.parameters import resolve_parameters
from zseeker_service.core.pipeline import JobPipeline
from zseeker_service.core.responses import (
    JobResponse,
    assemble_failure,
    assemble_success,
)
from zseeker_service.external import ZSeeker
from zseeker_service.models.parameters import FORM_FIELD_NAMES
from zseeker_service.models.responses import JobError

console = Console()


def run_job(
    fasta: Path = typer.Option(
        ...,
        "--fasta", "-f",
        help="FASTA file to scan for Z-DNA",
        exists=True,
        dir_okay=False,
    ),
    param: list[str] = typer.Option(
        [],
        "--param", "-p",
        help=(
            "ZSeeker parameter as KEY=VALUE, repeatable "
            f"(keys: {', '.join(FORM_FIELD_NAMES)})"
        ),
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config", "-c",
        help="Service configuration YAML",
        exists=True,
        dir_okay=False,
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir", "-o",
        help="Write ZSeeker output here and keep it (default: temporary job workspace)",
        file_okay=False,
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Kill ZSeeker after this many seconds",
        min=0.001,
    ),
    max_rows: int = typer.Option(
        20,
        "--max-rows",
        help="Number of result rows to show in the table preview",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the response payload as JSON instead of a table",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Suppress progress output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the ZSeeker command without executing it",
    ),
) -> None:
    """
    Run ZSeeker on a FASTA file and show the detected Z-DNA regions.

    Parameters that do not parse fall back to their defaults, exactly as
    they do for HTTP requests.

    Example:

        zseeker-service run --fasta chr21.fa \\
            -p GC_weight=7.0 -p consecutive_AT_scoring=0.5,0.5,0,-5 \\
            --output-dir ./zdna_chr21
    """
    out = QuietConsole(console, quiet=quiet)
    config = load_config(config_file, tool_timeout_seconds=timeout)
    configure_logging("DEBUG" if verbose else config.log_level)

    form = parse_param_options(param)
    parameters = resolve_parameters(form)

    tool = ZSeeker()
    if not tool.check_available():
        console.print(f"[red]Error: {ZSeeker.TOOL_NAME} not found[/red]")
        console.print(f"\n[dim]Install with: {ZSeeker.INSTALL_HINT}[/dim]")
        raise typer.Exit(code=1) from None

    out.print("\n[bold blue]ZSeeker Job[/bold blue]\n")
    out.print(f"  FASTA:      {fasta}")
    out.print(f"  Output dir: {output_dir or 'temporary job workspace'}")

    if dry_run:
        console.print("\n[bold cyan]DRY RUN MODE[/bold cyan]\n")
        result = tool.run(
            fasta=fasta,
            parameters=parameters,
            output_dir=output_dir or Path("output"),
            dry_run=True,
        )
        console.print(f"[dim]Command: {result.command_string}[/dim]")
        console.print("\n[green]Dry run complete. No files were created.[/green]")
        raise typer.Exit(code=0)

    pipeline = JobPipeline(config, tool)

    with spinner_progress("Running ZSeeker...", console, quiet):
        if output_dir is not None:
            output_dir.mkdir(parents=True, exist_ok=True)
            try:
                response = assemble_success(
                    pipeline.execute(fasta, parameters, output_dir)
                )
            except ZSeekerServiceError as e:
                response = assemble_failure(e)
        else:
            with fasta.open("rb") as handle:
                response = pipeline.submit(handle, form)

    if json_output:
        console.print_json(data=response.to_dict())
    else:
        _print_response(out, response, max_rows)

    if not response.ok:
        raise typer.Exit(code=1)


def _print_response(out: QuietConsole, response: JobResponse, max_rows: int) -> None:
    """Render a job response as a Rich table or an error block."""
    payload = response.payload

    if isinstance(payload, JobError):
        out.console.print(f"\n[red]Error: {payload.error}[/red] ({payload.kind})")
        if payload.command:
            out.console.print(f"\n[dim]Command: {payload.command}[/dim]")
        if payload.details:
            out.console.print(f"\n{payload.details}")
        return

    table = Table(title=f"Z-DNA regions ({len(payload.csv_data)})")
    for column in payload.csv_headers:
        table.add_column(column)
    for row in payload.csv_data[:max_rows]:
        table.add_row(*row)

    out.console.print()
    out.console.print(table)
    if len(payload.csv_data) > max_rows:
        out.print(f"[dim]... {len(payload.csv_data) - max_rows} more rows[/dim]")
    out.print(f"\n[green]{payload.message}[/green]")
