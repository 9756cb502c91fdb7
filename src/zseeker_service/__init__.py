"""
zseeker-service: HTTP job runner for ZSeeker Z-DNA detection.

Accepts a FASTA upload and scoring parameters, runs the ZSeeker
command-line tool on it in an isolated job workspace, and returns the
tool's CSV results as structured data.
"""

__version__ = "0.1.0"
__author__ = "zseeker-service Team"

from zseeker_service.core.parameters import resolve_parameters
from zseeker_service.core.pipeline import JobPipeline
from zseeker_service.core.results import ResultTable, read_result_table
from zseeker_service.models.parameters import ParameterSet

__all__ = [
    "JobPipeline",
    "ParameterSet",
    "ResultTable",
    "__version__",
    "read_result_table",
    "resolve_parameters",
]
