"""
Pydantic models for job response payloads.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FailureKind = Literal[
    "upload_unavailable",
    "execution_failed",
    "result_unavailable",
    "result_malformed",
]


class JobSuccess(BaseModel):
    """Payload returned when ZSeeker ran and its results were parsed."""

    message: str = "Job completed successfully"
    csv_headers: list[str] = Field(description="Column names of the result CSV")
    csv_data: list[list[str]] = Field(
        description="Result rows in file order, one list of cells per row",
    )

    model_config = {"frozen": True}


class JobError(BaseModel):
    """Payload returned when a job could not produce results."""

    error: str = Field(description="Human-readable failure summary")
    kind: FailureKind
    details: str | None = Field(
        default=None,
        description="Combined tool output, for execution failures only",
    )
    command: str | None = Field(
        default=None,
        description="Shell-quoted invocation, for execution failures only",
    )

    model_config = {"frozen": True}
