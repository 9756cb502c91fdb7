"""
Assembly of job response payloads and their HTTP status codes.

Result-file errors are reported with a generic message; their paths and
OS error text only go to the log.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from zseeker_service.core.exceptions import (
    ExecutionFailedError,
    ResultMalformedError,
    ResultUnavailableError,
    UploadStorageError,
    UploadUnavailableError,
    ZSeekerServiceError,
)
from zseeker_service.core.results import ResultTable
from zseeker_service.models.responses import JobError, JobSuccess


@dataclass(frozen=True)
class JobResponse:
    """A response payload together with its HTTP status code."""

    status_code: int
    payload: JobSuccess | JobError

    @property
    def ok(self) -> bool:
        return isinstance(self.payload, JobSuccess)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload with unset optional fields left out."""
        return self.payload.model_dump(exclude_none=True)


def assemble_success(table: ResultTable) -> JobResponse:
    """Build the success payload, keeping header and rows separate."""
    return JobResponse(
        status_code=HTTPStatus.OK,
        payload=JobSuccess(
            csv_headers=list(table.header),
            csv_data=[list(row) for row in table.rows],
        ),
    )


def assemble_failure(error: ZSeekerServiceError) -> JobResponse:
    """
    Build the error payload for a failed job.

    Args:
        error: The service error that ended the job.

    Returns:
        JobResponse with the status code for the failure kind.

    Raises:
        TypeError: If the error does not belong to a job failure kind.
    """
    if isinstance(error, UploadStorageError):
        return JobResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            payload=JobError(error="Failed to save the file", kind="upload_unavailable"),
        )
    if isinstance(error, UploadUnavailableError):
        return JobResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            payload=JobError(
                error="Failed to read the fasta file",
                kind="upload_unavailable",
            ),
        )
    if isinstance(error, ExecutionFailedError):
        return JobResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            payload=JobError(
                error="Failed to execute ZSeeker",
                kind="execution_failed",
                details=error.details,
                command=error.command_string or None,
            ),
        )
    if isinstance(error, ResultUnavailableError):
        return JobResponse(
            status_code=HTTPStatus.BAD_GATEWAY,
            payload=JobError(
                error="Failed to read results file",
                kind="result_unavailable",
            ),
        )
    if isinstance(error, ResultMalformedError):
        return JobResponse(
            status_code=HTTPStatus.BAD_GATEWAY,
            payload=JobError(
                error="Failed to parse results file",
                kind="result_malformed",
            ),
        )

    msg = f"No response mapping for {type(error).__name__}"
    raise TypeError(msg)
