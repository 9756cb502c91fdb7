"""
Per-job working directories.

Every job gets its own directory under the configured work_dir, named by
a random job id, so concurrent jobs never share an input file or an
output directory.

Layout:
    <work_dir>/<job_id>/input/<upload_filename>
    <work_dir>/<job_id>/output/
"""

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO

from zseeker_service.core.exceptions import UploadStorageError

logger = logging.getLogger(__name__)


class JobWorkspace:
    """Directory tree owned by a single job.

    Use as a context manager; the tree is removed on exit unless
    ``keep`` is set.

    Example:
        >>> with JobWorkspace.create(Path("jobs")) as ws:
        ...     fasta = ws.store_upload(stream, "input.fasta")
        ...     # run the tool with --output_dir ws.output_dir
    """

    def __init__(self, job_id: str, root: Path, *, keep: bool = False):
        self.job_id = job_id
        self.root = root
        self.keep = keep

    @classmethod
    def create(cls, base_dir: Path, *, keep: bool = False) -> JobWorkspace:
        """Create a fresh workspace under ``base_dir``.

        Raises:
            UploadStorageError: If the directories cannot be created.
        """
        job_id = uuid.uuid4().hex
        workspace = cls(job_id, base_dir / job_id, keep=keep)
        try:
            workspace.input_dir.mkdir(parents=True)
            workspace.output_dir.mkdir()
        except OSError as e:
            shutil.rmtree(workspace.root, ignore_errors=True)
            raise UploadStorageError(f"cannot create job directory: {e}") from e

        logger.debug("Created workspace %s", workspace.root)
        return workspace

    @property
    def input_dir(self) -> Path:
        return self.root / "input"

    @property
    def output_dir(self) -> Path:
        return self.root / "output"

    def store_upload(self, stream: BinaryIO, filename: str) -> Path:
        """Copy an uploaded file stream into the input directory.

        Args:
            stream: Readable binary stream of the uploaded file.
            filename: Name to store the file under (no directory parts).

        Returns:
            Path to the stored file.

        Raises:
            UploadStorageError: If the file cannot be written.
        """
        dest = self.input_dir / Path(filename).name
        try:
            with dest.open("wb") as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            raise UploadStorageError(str(e)) from e

        logger.info(
            "Saved uploaded file for job %s (%d bytes)",
            self.job_id,
            dest.stat().st_size,
        )
        return dest

    def cleanup(self) -> None:
        """Remove the workspace tree unless it is marked to be kept."""
        if self.keep:
            logger.info("Keeping workspace %s", self.root)
            return
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove workspace %s: %s", self.root, e)

    def __enter__(self) -> JobWorkspace:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()
