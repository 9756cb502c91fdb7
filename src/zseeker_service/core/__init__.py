"""
Core job pipeline for running ZSeeker.

This module contains parameter resolution, result parsing, response
assembly, and the per-job workspace and pipeline that tie them together.
"""

from zseeker_service.core.parameters import resolve_parameters
from zseeker_service.core.results import ResultTable, read_result_table

__all__ = [
    "ResultTable",
    "read_result_table",
    "resolve_parameters",
]
