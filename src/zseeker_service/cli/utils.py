"""
Shared CLI utilities for zseeker-service commands.

Provides common functionality used across CLI modules.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from zseeker_service.core.exceptions import ConfigurationError
from zseeker_service.models.config import ServiceConfig


@contextmanager
def spinner_progress(
    description: str,
    console: Console | None = None,
    quiet: bool = False,
) -> Generator[Progress, None, None]:
    """Context manager for spinner-style progress display.

    The spinner is suppressed when quiet mode is enabled.

    Args:
        description: Task description to display.
        console: Rich Console instance. If None and not quiet, creates one.
        quiet: If True, suppress the progress display entirely.

    Yields:
        Progress instance (even when quiet, for API consistency).
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console if not quiet else None,
        disable=quiet,
    ) as progress:
        progress.add_task(description=description, total=None)
        yield progress


def configure_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route the service loggers through a Rich handler.

    Args:
        level: Logging level name.
        console: Console to log to (stderr console if None).
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def parse_param_options(values: list[str]) -> dict[str, str]:
    """Parse repeated ``KEY=VALUE`` options into a form mapping.

    Values are kept as raw strings; they are resolved with the same
    permissive rules as HTTP form fields.

    Raises:
        typer.BadParameter: If an entry has no '=' or an empty key.

    Example:
        >>> parse_param_options(["GC_weight=6.5", "consecutive_AT_scoring=1,2"])
        {'GC_weight': '6.5', 'consecutive_AT_scoring': '1,2'}
    """
    form: dict[str, str] = {}
    for entry in values:
        key, sep, value = entry.partition("=")
        if not sep or not key.strip():
            msg = f"Expected KEY=VALUE, got {entry!r}"
            raise typer.BadParameter(msg, param_hint="--param")
        form[key.strip()] = value
    return form


def load_config(path: Path | None, **overrides: Any) -> ServiceConfig:
    """Load configuration from YAML (or defaults) and apply CLI overrides.

    Raises:
        typer.Exit: With code 1 if the configuration is invalid.
    """
    console = Console(stderr=True)
    try:
        config = ServiceConfig.from_yaml(path) if path else ServiceConfig()
        return config.with_overrides(**overrides)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.suggestion:
            console.print(f"\n[dim]{e.suggestion}[/dim]")
        raise typer.Exit(code=1) from None


class QuietConsole:
    """Console wrapper that suppresses output in quiet mode.

    Wraps a Rich Console instance and conditionally suppresses print
    output when quiet mode is enabled. All other console methods are
    delegated to the wrapped instance.
    """

    def __init__(self, console: Console, quiet: bool = False):
        self._console = console
        self._quiet = quiet

    @property
    def console(self) -> Console:
        """The wrapped Console, for output that must always be shown."""
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console unless quiet mode is enabled."""
        if not self._quiet:
            self._console.print(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)
