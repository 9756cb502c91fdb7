"""
ZSeeker wrapper class.

ZSeeker scores every window of a nucleotide sequence for Z-DNA forming
potential using dinucleotide transition weights and mismatch penalties,
and writes the regions scoring above a threshold to a CSV file.
"""

from __future__ import annotations

from pathlib import Path

from zseeker_service.external.base import ExternalTool, validate_path_safe
from zseeker_service.models.parameters import ParameterSet

# ZSeeker names its result file after the input FASTA stem
RESULT_SUFFIX = "_zdna_score.csv"


def format_weight(value: float) -> str:
    """Format a weight with fixed 2-decimal precision."""
    return f"{value:.2f}"


def format_score_curve(values: tuple[float, ...]) -> str:
    """Format a score curve as one comma-joined token, 1 decimal each."""
    return ",".join(f"{v:.1f}" for v in values)


def result_path(output_dir: Path, fasta: Path, suffix: str = RESULT_SUFFIX) -> Path:
    """Location of the CSV ZSeeker writes for ``fasta`` into ``output_dir``."""
    return output_dir / f"{fasta.stem}{suffix}"


class ZSeeker(ExternalTool):
    """Wrapper for the ZSeeker Z-DNA detection tool.

    Example:
        >>> zseeker = ZSeeker()
        >>> result = zseeker.run_or_raise(
        ...     fasta=Path("jobs/3f2a/input/input.fasta"),
        ...     parameters=ParameterSet(),
        ...     output_dir=Path("jobs/3f2a/output"),
        ... )
    """

    TOOL_NAME = "ZSeeker"
    TOOL_ALIASES = ("zseeker",)
    INSTALL_HINT = "pip install ZSeeker"

    @staticmethod
    def build_arguments(
        *,
        fasta: Path,
        parameters: ParameterSet,
        output_dir: Path,
    ) -> list[str]:
        """Build the ZSeeker arguments, without the executable.

        The order is fixed. Weights use 2 decimals, the AT curve 1 decimal,
        integers plain decimal; paths are passed verbatim.

        Args:
            fasta: Input FASTA file.
            parameters: Resolved scoring parameters.
            output_dir: Directory ZSeeker writes its result CSV into.

        Returns:
            Argument list.
        """
        fasta = validate_path_safe(fasta)
        output_dir = validate_path_safe(output_dir)

        return [
            "--fasta", str(fasta),
            "--GC_weight", format_weight(parameters.gc_weight),
            "--AT_weight", format_weight(parameters.at_weight),
            "--GT_weight", format_weight(parameters.gt_weight),
            "--AC_weight", format_weight(parameters.ac_weight),
            "--mismatch_penalty_starting_value",
            str(parameters.mismatch_penalty_starting_value),
            "--mismatch_penalty_linear_delta",
            str(parameters.mismatch_penalty_linear_delta),
            "--mismatch_penalty_type", parameters.mismatch_penalty_type,
            "--method", parameters.method,
            "--n_jobs", str(parameters.n_jobs),
            "--threshold", str(parameters.threshold),
            "--consecutive_AT_scoring",
            format_score_curve(parameters.consecutive_at_scoring),
            "--output_dir", str(output_dir),
        ]

    def build_command(
        self,
        *,
        fasta: Path,
        parameters: ParameterSet,
        output_dir: Path,
    ) -> list[str]:
        """Build the full ZSeeker command.

        Returns:
            Command as list of strings.
        """
        exe = str(self.get_executable())
        return [
            exe,
            *self.build_arguments(
                fasta=fasta,
                parameters=parameters,
                output_dir=output_dir,
            ),
        ]
