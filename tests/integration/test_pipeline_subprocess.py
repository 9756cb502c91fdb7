"""
Integration tests for JobPipeline running a real child process.

Uses the stand-in ZSeeker executable from the shared conftest, so the
full path (workspace, subprocess, result CSV) is exercised without the
actual tool installed.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from zseeker_service.core.pipeline import JobPipeline
from zseeker_service.external.base import ToolExecutionError, ToolTimeoutError
from zseeker_service.models.config import ServiceConfig
from zseeker_service.models.parameters import ParameterSet


class TestPipelineWithChildProcess:
    """Tests for JobPipeline against the stand-in executable."""

    def test_execute(self, fake_zseeker: Path, fasta_file: Path, tmp_path: Path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        table = JobPipeline(ServiceConfig(work_dir=tmp_path)).execute(
            fasta_file, ParameterSet(), out_dir
        )

        assert table.header[0] == "Chromosome"
        assert table.num_rows == 2
        assert (out_dir / "sample_zdna_score.csv").is_file()

    def test_exact_argument_order(
        self,
        fake_zseeker: Path,
        fasta_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        argv_file = tmp_path / "argv.txt"
        monkeypatch.setenv("FAKE_ZSEEKER_ARGV_FILE", str(argv_file))
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        JobPipeline(ServiceConfig(work_dir=tmp_path)).execute(
            fasta_file,
            ParameterSet(gc_weight=6.0, n_jobs=1, consecutive_at_scoring=(0.5, -100.0)),
            out_dir,
        )

        assert argv_file.read_text().splitlines() == [
            "--fasta", str(fasta_file),
            "--GC_weight", "6.00",
            "--AT_weight", "0.50",
            "--GT_weight", "1.00",
            "--AC_weight", "1.00",
            "--mismatch_penalty_starting_value", "1",
            "--mismatch_penalty_linear_delta", "2",
            "--mismatch_penalty_type", "linear",
            "--method", "transitions",
            "--n_jobs", "1",
            "--threshold", "50",
            "--consecutive_AT_scoring", "0.5,-100.0",
            "--output_dir", str(out_dir),
        ]

    def test_timeout(
        self,
        fake_zseeker: Path,
        fasta_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv("FAKE_ZSEEKER_MODE", "sleep")
        config = ServiceConfig(work_dir=tmp_path, tool_timeout_seconds=2)

        with pytest.raises(ToolTimeoutError) as exc_info:
            JobPipeline(config).execute(fasta_file, ParameterSet(), tmp_path)
        assert "timed out after 2 seconds" in str(exc_info.value)

    def test_timeout_response(
        self,
        fake_zseeker: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv("FAKE_ZSEEKER_MODE", "sleep")
        config = ServiceConfig(work_dir=tmp_path / "jobs", tool_timeout_seconds=2)

        response = JobPipeline(config).submit(io.BytesIO(b">s\nGC\n"), {})

        assert response.status_code == 500
        assert response.to_dict()["kind"] == "execution_failed"
        assert list(config.work_dir.iterdir()) == []

    def test_concurrent_jobs_do_not_share_output(
        self,
        fake_zseeker: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        argv_file = tmp_path / "argv.txt"
        monkeypatch.setenv("FAKE_ZSEEKER_ARGV_FILE", str(argv_file))
        pipeline = JobPipeline(ServiceConfig(work_dir=tmp_path / "jobs"))

        output_dirs = []
        for _ in range(2):
            assert pipeline.submit(io.BytesIO(b">s\nGC\n"), {}).ok
            args = argv_file.read_text().splitlines()
            output_dirs.append(args[args.index("--output_dir") + 1])

        assert output_dirs[0] != output_dirs[1]

    def test_undecodable_output_is_kept(
        self,
        fake_zseeker: Path,
        fasta_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv("FAKE_ZSEEKER_MODE", "binary")

        with pytest.raises(ToolExecutionError) as exc_info:
            JobPipeline(ServiceConfig(work_dir=tmp_path)).execute(
                fasta_file, ParameterSet(), tmp_path
            )

        assert exc_info.value.return_code == 3
        assert "bad \ufffd\ufffd byte" in exc_info.value.output
