"""
Base classes for wrapping external command-line tools.

Provides a consistent interface for executing a tool as a child process
with combined output capture, an optional timeout, and dry-run support.
"""

from __future__ import annotations

import logging
import re
import shlex
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from zseeker_service.core.exceptions import ExecutionFailedError

logger = logging.getLogger(__name__)

# Pattern for safe path characters (alphanumeric, underscore, hyphen, dot, slash)
_SAFE_PATH_PATTERN = re.compile(r"^[\w\-./]+$")


class UnsafePathError(ExecutionFailedError):
    """Raised when a file path contains characters that cannot reach a tool."""

    def __init__(self, path: Path, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Unsafe path detected: {path}{detail}",
            suggestion=(
                "Ensure file paths contain only alphanumeric characters, "
                "underscores, hyphens, and periods."
            ),
        )
        self.path = path


def validate_path_safe(path: Path, *, must_exist: bool = False) -> Path:
    """Validate that a path can be passed to a subprocess argument list.

    The path is returned unchanged so that it reaches the tool verbatim.

    Args:
        path: Path to validate
        must_exist: If True, raise error if path doesn't exist

    Returns:
        The same path

    Raises:
        UnsafePathError: If path contains a null byte
        FileNotFoundError: If must_exist=True and path doesn't exist
    """
    path_str = str(path)

    # Null bytes cannot be passed through exec()
    if "\x00" in path_str:
        raise UnsafePathError(path, "contains null byte")

    if not _SAFE_PATH_PATTERN.match(path_str):
        logger.warning(
            "Path contains unusual characters (may cause issues): %s",
            path,
        )

    if must_exist and not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    return path


class ToolNotFoundError(ExecutionFailedError):
    """Raised when a required external tool is not installed or not in PATH."""

    def __init__(self, tool_name: str, install_hint: str = ""):
        suggestion = f"Install {tool_name} and ensure it is in your PATH."
        if install_hint:
            suggestion = f"{suggestion}\n\nInstallation:\n  {install_hint}"

        super().__init__(
            message=f"Required tool '{tool_name}' not found in PATH",
            suggestion=suggestion,
        )
        self.tool_name = tool_name
        self.command = (tool_name,)


class ToolExecutionError(ExecutionFailedError):
    """Raised when an external tool returns a non-zero exit code."""

    def __init__(
        self,
        tool_name: str,
        command: list[str] | tuple[str, ...],
        return_code: int,
        output: str,
    ):
        # Truncate long output for the message; the attribute keeps all of it
        output_display = output.strip()
        if len(output_display) > 500:
            output_display = output_display[:500] + "\n...[truncated]"

        self.tool_name = tool_name
        self.command = tuple(command)
        self.return_code = return_code
        self.output = output

        super().__init__(
            message=(
                f"{tool_name} failed with exit code {return_code}\n\n"
                f"Command: {self.command_string}\n\n"
                f"Output:\n{output_display}"
            ),
            suggestion=(
                "Check the job parameters and the uploaded FASTA file. "
                "The tool output above usually names the offending input."
            ),
        )


class ToolTimeoutError(ExecutionFailedError):
    """Raised when an external tool exceeds the specified timeout."""

    def __init__(
        self,
        tool_name: str,
        timeout_seconds: float,
        command: list[str] | tuple[str, ...],
        output: str = "",
    ):
        self.tool_name = tool_name
        self.timeout_seconds = timeout_seconds
        self.command = tuple(command)
        self.output = output

        super().__init__(
            message=(
                f"{tool_name} timed out after {timeout_seconds:.0f} seconds\n\n"
                f"Command: {self.command_string}"
            ),
            suggestion=(
                "Increase tool_timeout_seconds or submit a smaller FASTA file."
            ),
        )


@dataclass(frozen=True)
class ToolResult:
    """Result from running an external tool.

    Attributes:
        command: The command that was executed.
        return_code: Exit code from the process.
        output: Standard output and standard error, interleaved as emitted.
        elapsed_seconds: Wall-clock time for execution.
    """

    command: tuple[str, ...]
    return_code: int
    output: str
    elapsed_seconds: float

    @property
    def success(self) -> bool:
        """Return True if the tool exited with code 0."""
        return self.return_code == 0

    @property
    def command_string(self) -> str:
        """Return the command as a shell-quoted string."""
        return shlex.join(self.command)

    def format_output(self, max_lines: int = 50) -> str:
        """Format captured output for display.

        Args:
            max_lines: Maximum number of lines to include.

        Returns:
            The output, truncated to max_lines.
        """
        if not self.output.strip():
            return "(no output)"

        lines = self.output.strip().split("\n")
        if len(lines) > max_lines:
            truncated = len(lines) - max_lines
            lines = [*lines[:max_lines], f"... ({truncated} more lines)"]
        return "\n".join(lines)


class ExternalTool(ABC):
    """Abstract base class for wrapping external command-line tools.

    Subclasses must define:
        TOOL_NAME: Primary executable name (e.g., "ZSeeker")
        build_command: Method to construct the command arguments

    Optional class attributes:
        TOOL_ALIASES: Alternative executable names to search
        INSTALL_HINT: Instructions for installing the tool

    Dependency injection:
        Use set_executable_resolver() to inject a custom resolver for testing.
    """

    TOOL_NAME: ClassVar[str]
    TOOL_ALIASES: ClassVar[tuple[str, ...]] = ()
    INSTALL_HINT: ClassVar[str] = ""

    _executable_cache: ClassVar[dict[str, Path]] = {}
    # Defaults to shutil.which; tests inject their own
    _executable_resolver: ClassVar[Callable[[str], str | None]] = staticmethod(
        shutil.which
    )

    @classmethod
    def check_available(cls) -> bool:
        """Check if the tool is installed and available in PATH."""
        try:
            cls.get_executable()
            return True
        except ToolNotFoundError:
            return False

    @classmethod
    def get_executable(cls) -> Path:
        """Find the tool executable in PATH.

        Returns:
            Path to the executable.

        Raises:
            ToolNotFoundError: If the tool cannot be found.
        """
        cached = cls._executable_cache.get(cls.TOOL_NAME)
        if cached is not None:
            return cached

        for name in (cls.TOOL_NAME, *cls.TOOL_ALIASES):
            exe_path = cls._executable_resolver(name)
            if exe_path:
                path = Path(exe_path)
                cls._executable_cache[cls.TOOL_NAME] = path
                return path

        # not cached, so a tool installed after startup is picked up
        raise ToolNotFoundError(cls.TOOL_NAME, cls.INSTALL_HINT)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the executable location cache."""
        cls._executable_cache.clear()

    @classmethod
    def set_executable_resolver(
        cls,
        resolver: Callable[[str], str | None],
    ) -> None:
        """Inject a custom executable resolver for testing.

        Args:
            resolver: Function that takes a tool name and returns
                the path to the executable or None if not found.

        Example:
            ExternalTool.set_executable_resolver(lambda name: f"/opt/bin/{name}")
            # Run tests...
            ExternalTool.reset_executable_resolver()
        """
        cls._executable_resolver = staticmethod(resolver)
        cls.clear_cache()

    @classmethod
    def reset_executable_resolver(cls) -> None:
        """Reset the executable resolver to the default (shutil.which)."""
        cls._executable_resolver = staticmethod(shutil.which)
        cls.clear_cache()

    @abstractmethod
    def build_command(self, **kwargs: object) -> list[str]:
        """Build the command-line arguments for this tool.

        Returns:
            List of command-line arguments (including the executable).
        """
        ...

    def run(
        self,
        *,
        timeout: float | None = None,
        dry_run: bool = False,
        **kwargs: object,
    ) -> ToolResult:
        """Execute the tool with the specified arguments.

        The child's stderr is merged into stdout so the captured output
        reads in the order the tool wrote it. The call blocks until the
        process exits; there is no retry.

        Args:
            timeout: Maximum execution time in seconds (None for no limit).
            dry_run: If True, return command without execution.
            **kwargs: Arguments passed to build_command().

        Returns:
            ToolResult with command, exit code, and output.

        Raises:
            ToolNotFoundError: If the tool is not installed.
            ToolTimeoutError: If execution exceeds timeout.
        """
        command = self.build_command(**kwargs)
        command_tuple = tuple(command)

        if dry_run:
            return ToolResult(
                command=command_tuple,
                return_code=0,
                output="[dry-run] Command not executed",
                elapsed_seconds=0.0,
            )

        logger.info("Executing command: %s", shlex.join(command_tuple))
        start_time = time.perf_counter()

        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            partial = e.output or ""
            if isinstance(partial, bytes):
                partial = partial.decode("utf-8", errors="replace")
            raise ToolTimeoutError(
                self.TOOL_NAME,
                timeout or 0,
                command,
                output=partial,
            ) from e
        except FileNotFoundError as e:
            # The executable disappeared between lookup and run
            raise ToolNotFoundError(self.TOOL_NAME, self.INSTALL_HINT) from e

        elapsed = time.perf_counter() - start_time
        logger.info(
            "%s exited with code %d after %.1fs",
            self.TOOL_NAME,
            result.returncode,
            elapsed,
        )

        return ToolResult(
            command=command_tuple,
            return_code=result.returncode,
            output=result.stdout or "",
            elapsed_seconds=elapsed,
        )

    def run_or_raise(
        self,
        *,
        timeout: float | None = None,
        dry_run: bool = False,
        **kwargs: object,
    ) -> ToolResult:
        """Execute the tool and raise an exception on failure.

        Same as run() but raises ToolExecutionError if exit code is non-zero.

        Raises:
            ToolNotFoundError: If the tool is not installed.
            ToolTimeoutError: If execution exceeds timeout.
            ToolExecutionError: If the tool returns non-zero exit code.
        """
        result = self.run(timeout=timeout, dry_run=dry_run, **kwargs)

        if not result.success and not dry_run:
            logger.error("%s failed, output:\n%s", self.TOOL_NAME, result.output)
            raise ToolExecutionError(
                self.TOOL_NAME,
                result.command,
                result.return_code,
                result.output,
            )

        return result
