"""
Server commands: run the HTTP service and inspect its configuration.
"""

from __future__ import annotations

from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.syntax import Syntax

from zseeker_service.api.app import create_app
from zseeker_service.cli.utils import configure_logging, load_config
from zseeker_service.external import ZSeeker

console = Console()


def serve(
    config_file: Path | None = typer.Option(
        None,
        "--config", "-c",
        help="Service configuration YAML",
        exists=True,
        dir_okay=False,
    ),
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Port", min=1, max=65535),
    work_dir: Path | None = typer.Option(
        None,
        "--work-dir", "-w",
        help="Parent directory for per-job workspaces",
        file_okay=False,
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Kill ZSeeker after this many seconds",
        min=0.001,
    ),
    keep_workspaces: bool | None = typer.Option(
        None,
        "--keep-workspaces/--no-keep-workspaces",
        help="Keep job directories after each response",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """
    Start the HTTP service (POST /submit-job, GET /health).

    Example:

        zseeker-service serve --port 8080 --work-dir /var/lib/zseeker/jobs
    """
    config = load_config(
        config_file,
        host=host,
        port=port,
        work_dir=work_dir,
        tool_timeout_seconds=timeout,
        keep_workspaces=keep_workspaces,
    )
    configure_logging("DEBUG" if verbose else config.log_level)

    if not ZSeeker.check_available():
        console.print(
            f"[yellow]Warning: {ZSeeker.TOOL_NAME} not found in PATH; "
            "jobs will fail until it is installed[/yellow]"
        )

    config.work_dir.mkdir(parents=True, exist_ok=True)
    console.print(
        f"[bold blue]Starting zseeker-service on {config.host}:{config.port}[/bold blue]"
    )
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_config=None,
    )


def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config", "-c",
        help="Service configuration YAML",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Print the effective configuration as YAML."""
    config = load_config(config_file)
    console.print(Syntax(config.to_yaml_str(), "yaml"))
