"""Filesystem operations.

This module provides deletion with per-path failure isolation, file
details lookup and size helpers.
"""

from diskscope.filesystem.details import FileDetails, get_file_details
from diskscope.filesystem.operator import DeleteResult, DeletionExecutor, FailedPath
from diskscope.filesystem.sizes import (
    calculate_percent,
    format_size,
    get_directory_size,
    is_large_file,
    parse_size,
    size_level,
)

__all__ = [
    "DeleteResult",
    "DeletionExecutor",
    "FailedPath",
    "FileDetails",
    "calculate_percent",
    "format_size",
    "get_directory_size",
    "get_file_details",
    "is_large_file",
    "parse_size",
    "size_level",
]
