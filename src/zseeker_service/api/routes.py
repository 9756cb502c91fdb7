"""
API router for ZSeeker job submission.

Thin HTTP layer: reads the multipart form, hands the upload and raw
fields to the JobPipeline, and returns the assembled payload with its
status code.
"""

import logging

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from zseeker_service.core.pipeline import JobPipeline
from zseeker_service.models.responses import JobError, JobSuccess

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["jobs"],
    responses={
        400: {"model": JobError, "description": "No FASTA file in the request"},
        500: {"model": JobError, "description": "Upload storage or ZSeeker run failed"},
        502: {"model": JobError, "description": "ZSeeker result file missing or malformed"},
    },
)


def get_pipeline(request: Request) -> JobPipeline:
    """Pipeline configured for this application instance."""
    return request.app.state.pipeline


@router.post(
    "/submit-job",
    response_model=JobSuccess,
    summary="Run ZSeeker on an uploaded FASTA file",
)
def submit_job(
    request: Request,
    fasta: UploadFile | str | None = File(None, description="FASTA file to scan"),
    gc_weight: str | None = Form(None, alias="GC_weight"),
    at_weight: str | None = Form(None, alias="AT_weight"),
    gt_weight: str | None = Form(None, alias="GT_weight"),
    ac_weight: str | None = Form(None, alias="AC_weight"),
    mismatch_penalty_starting_value: str | None = Form(None),
    mismatch_penalty_linear_delta: str | None = Form(None),
    mismatch_penalty_type: str | None = Form(None),
    method: str | None = Form(None),
    cadence_reward: str | None = Form(None),
    n_jobs: str | None = Form(None),
    threshold: str | None = Form(None),
    consecutive_at_scoring: str | None = Form(None, alias="consecutive_AT_scoring"),
) -> JSONResponse:
    """
    Run one ZSeeker job synchronously.

    All parameter fields are optional strings. Values that do not parse
    fall back to their defaults instead of rejecting the request.

    Returns:
        200 with ``message``, ``csv_headers`` and ``csv_data`` on success;
        otherwise the error payload with a status code per failure kind.
    """
    logger.info("Handling /submit-job request")

    form = {
        "GC_weight": gc_weight,
        "AT_weight": at_weight,
        "GT_weight": gt_weight,
        "AC_weight": ac_weight,
        "mismatch_penalty_starting_value": mismatch_penalty_starting_value,
        "mismatch_penalty_linear_delta": mismatch_penalty_linear_delta,
        "mismatch_penalty_type": mismatch_penalty_type,
        "method": method,
        "cadence_reward": cadence_reward,
        "n_jobs": n_jobs,
        "threshold": threshold,
        "consecutive_AT_scoring": consecutive_at_scoring,
    }

    # a plain text field named "fasta" carries no file
    upload = None if fasta is None or isinstance(fasta, str) else fasta.file
    response = get_pipeline(request).submit(upload, form)

    return JSONResponse(status_code=response.status_code, content=response.to_dict())
