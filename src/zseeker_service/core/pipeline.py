"""
Job pipeline: one upload in, one response payload out.

Ties together parameter resolution, the ZSeeker run, result parsing and
response assembly for a single synchronous job. The pipeline holds no
per-job state, so one instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import BinaryIO

from zseeker_service.core.exceptions import (
    UploadUnavailableError,
    ZSeekerServiceError,
)
from zseeker_service.core.parameters import resolve_parameters
from zseeker_service.core.responses import (
    JobResponse,
    assemble_failure,
    assemble_success,
)
from zseeker_service.core.results import ResultTable, read_result_table
from zseeker_service.core.workspace import JobWorkspace
from zseeker_service.external.zseeker import ZSeeker, result_path
from zseeker_service.models.config import ServiceConfig
from zseeker_service.models.parameters import ParameterSet

logger = logging.getLogger(__name__)


class JobPipeline:
    """Runs ZSeeker jobs according to a ServiceConfig.

    Args:
        config: Service configuration (defaults if None).
        tool: ZSeeker wrapper to use (a new instance if None).
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        tool: ZSeeker | None = None,
    ):
        self.config = config or ServiceConfig()
        self.tool = tool or ZSeeker()

    def submit(
        self,
        upload: BinaryIO | None,
        form: Mapping[str, str | None],
    ) -> JobResponse:
        """
        Run one job for an uploaded FASTA and raw form parameters.

        Args:
            upload: Binary stream of the uploaded FASTA, or None if the
                request had no file.
            form: Raw form fields keyed by ZSeeker flag name.

        Returns:
            JobResponse carrying either the parsed results or the failure.
        """
        try:
            if upload is None:
                raise UploadUnavailableError()

            parameters = resolve_parameters(form)
            logger.debug("Resolved parameters: %s", parameters)

            with JobWorkspace.create(
                self.config.work_dir,
                keep=self.config.keep_workspaces,
            ) as workspace:
                logger.info("Starting job %s", workspace.job_id)
                fasta = workspace.store_upload(upload, self.config.upload_filename)
                table = self.execute(fasta, parameters, workspace.output_dir)
        except ZSeekerServiceError as e:
            logger.warning("Job failed: %s", e.message)
            return assemble_failure(e)

        return assemble_success(table)

    def execute(
        self,
        fasta: Path,
        parameters: ParameterSet,
        output_dir: Path,
    ) -> ResultTable:
        """
        Run ZSeeker on a FASTA file and parse its result CSV.

        The result file is only read when the tool exits with code 0.

        Raises:
            ExecutionFailedError: If the tool is missing, times out, or
                exits non-zero.
            ResultUnavailableError: If the result CSV is missing.
            ResultMalformedError: If the result CSV cannot be parsed.
        """
        self.tool.run_or_raise(
            fasta=fasta,
            parameters=parameters,
            output_dir=output_dir,
            timeout=self.config.tool_timeout_seconds,
        )

        logger.info("Command executed successfully. Reading results")
        table = read_result_table(
            result_path(output_dir, fasta, self.config.result_suffix)
        )
        logger.info(
            "Parsed %d result rows (%d columns)",
            table.num_rows,
            len(table.header),
        )
        return table
