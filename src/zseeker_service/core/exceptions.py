"""
Custom exceptions with actionable guidance.

Provides the error taxonomy of a ZSeeker job. Each failure kind maps to
one response payload; parameter problems are deliberately absent because
malformed form fields fall back to their defaults.
"""

from __future__ import annotations

import shlex


class ZSeekerServiceError(Exception):
    """Base exception for zseeker-service errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class UploadUnavailableError(ZSeekerServiceError):
    """Raised when the request does not carry a usable FASTA upload."""

    def __init__(self, reason: str = "no 'fasta' file field in the request"):
        super().__init__(
            message=f"Failed to read the fasta file: {reason}",
            suggestion=(
                "Send the sequence as a multipart form file field named 'fasta'."
            ),
        )
        self.reason = reason


class UploadStorageError(UploadUnavailableError):
    """Raised when the uploaded FASTA could not be written to the job workspace."""

    def __init__(self, reason: str):
        ZSeekerServiceError.__init__(
            self,
            message=f"Failed to save the file: {reason}",
            suggestion=(
                "Check that the configured work_dir exists, is writable, "
                "and has free space."
            ),
        )
        self.reason = reason


class ExecutionFailedError(ZSeekerServiceError):
    """Base class for failures of the external tool run.

    Subclasses expose the command that was attempted and whatever output
    was captured, so callers can surface both for diagnosis.
    """

    command: tuple[str, ...] = ()
    output: str = ""

    @property
    def details(self) -> str:
        """Text shown to the caller as the failure details."""
        return self.output or self.message

    @property
    def command_string(self) -> str:
        """Shell-quoted rendering of the attempted command."""
        return shlex.join(self.command)


class ResultError(ZSeekerServiceError):
    """Base class for result artifact errors."""


class ResultUnavailableError(ResultError):
    """Raised when the tool reported success but its result file cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Result file is missing or unreadable: {path}{detail}",
            suggestion=(
                "Check that the ZSeeker version in PATH writes "
                "'<stem>_zdna_score.csv' into the directory given by --output_dir."
            ),
        )
        self.path = path


class ResultMalformedError(ResultError):
    """Raised when the result file is not valid delimited text or is empty."""

    def __init__(self, path: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Result file could not be parsed as CSV: {path}{detail}",
            suggestion=(
                "Inspect the result file by re-running the job with "
                "keep_workspaces enabled."
            ),
        )
        self.path = path


class ConfigurationError(ZSeekerServiceError):
    """Raised when the service configuration is invalid."""
