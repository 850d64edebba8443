"""Directory scanning engine.

This module provides the sized tree builder, exclusion patterns,
progress reporting and the scan session lifecycle.
"""

from diskscope.scanner.builder import TreeBuilder
from diskscope.scanner.coordinator import (
    ScanCancelledError,
    ScanCoordinator,
    ScanError,
    ScanInProgressError,
    ScanNotFoundError,
    ScanSession,
)
from diskscope.scanner.exclusion import matches_exclusion
from diskscope.scanner.models import FileSystemNode, NodeKind, ScanProgress, ScanStatus
from diskscope.scanner.progress import ProgressChannel, ProgressReporter

__all__ = [
    "FileSystemNode",
    "NodeKind",
    "ProgressChannel",
    "ProgressReporter",
    "ScanCancelledError",
    "ScanCoordinator",
    "ScanError",
    "ScanInProgressError",
    "ScanNotFoundError",
    "ScanProgress",
    "ScanSession",
    "ScanStatus",
    "TreeBuilder",
    "matches_exclusion",
]
