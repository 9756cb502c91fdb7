"""
Wrappers for external tools.

Provides a Python interface to the ZSeeker command-line tool.
"""

from zseeker_service.external.base import (
    ExternalTool,
    ToolExecutionError,
    ToolNotFoundError,
    ToolResult,
    ToolTimeoutError,
    UnsafePathError,
)
from zseeker_service.external.zseeker import ZSeeker, result_path

__all__ = [
    "ExternalTool",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolResult",
    "ToolTimeoutError",
    "UnsafePathError",
    "ZSeeker",
    "result_path",
]
