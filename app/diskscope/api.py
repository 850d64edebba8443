"""Request/response boundary for diskscope.

Each operation returns a response object with a ``success`` flag, its
payload and an ``error`` message instead of raising, so front ends (the
CLI, or any other transport) never have to handle internal exceptions.
Scan operations use a process-wide default :class:`ScanCoordinator`
unless one is passed explicitly.
"""

import logging
import subprocess
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from diskscope.filesystem.details import FileDetails, get_file_details
from diskscope.filesystem.operator import DeleteResult, DeletionExecutor
from diskscope.safety.classifier import get_app_association, get_deletion_assessment
from diskscope.safety.models import AppAssociation, DeletionAssessment
from diskscope.scanner.coordinator import ScanCoordinator, ScanError
from diskscope.scanner.models import FileSystemNode, ScanProgress
from diskscope.utils.shell import open_in_file_manager

logger = logging.getLogger(__name__)

_default_coordinator = ScanCoordinator()


def get_default_coordinator() -> ScanCoordinator:
    """Return the process-wide scan coordinator."""
    return _default_coordinator


@dataclass(frozen=True, slots=True)
class ScanResponse:
    """Response of :func:`start_scan`."""

    success: bool
    root: FileSystemNode | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CancelResponse:
    """Response of :func:`cancel_scan` (always successful)."""

    success: bool
    progress: ScanProgress


@dataclass(frozen=True, slots=True)
class AssociationResponse:
    """Response of :func:`get_app_association_response`."""

    success: bool
    association: AppAssociation | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class AssessmentResponse:
    """Response of :func:`get_deletion_assessment_response`."""

    success: bool
    assessment: DeletionAssessment | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeleteResponse:
    """Response of :func:`delete_files`."""

    success: bool
    result: DeleteResult | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DetailsResponse:
    """Response of :func:`get_file_details_response`."""

    success: bool
    details: FileDetails | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class OperationResponse:
    """Response of operations without a payload."""

    success: bool
    error: str | None = None


def _error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


def start_scan(
    path: str,
    max_depth: int | None = None,
    exclude_patterns: Sequence[str] = (),
    *,
    coordinator: ScanCoordinator | None = None,
) -> ScanResponse:
    """Scan a directory on the calling thread.

    Args:
        path: Directory to scan.
        max_depth: Optional depth limit.
        exclude_patterns: Optional exclusion patterns.
        coordinator: Coordinator to use (default: the process-wide one).

    Returns:
        ScanResponse with the root node, or the error message (e.g.
        "Scan cancelled").
    """
    coordinator = coordinator or _default_coordinator
    try:
        root = coordinator.start_scan(path, max_depth=max_depth, exclude_patterns=exclude_patterns)
    except ScanError as e:
        return ScanResponse(success=False, error=_error_message(e))
    return ScanResponse(success=True, root=root)


def cancel_scan(path: str, *, coordinator: ScanCoordinator | None = None) -> CancelResponse:
    """Cancel the scan of a root; succeeds even if no scan is active."""
    coordinator = coordinator or _default_coordinator
    return CancelResponse(success=True, progress=coordinator.cancel_scan(path))


def progress_stream(
    path: str,
    *,
    coordinator: ScanCoordinator | None = None,
) -> Iterator[ScanProgress]:
    """Stream progress of the active scan of a root.

    The stream ends after the terminal-status snapshot. It is empty if
    no scan of the root is active.
    """
    coordinator = coordinator or _default_coordinator
    try:
        session = coordinator.get_session(path)
    except ScanError as e:
        logger.debug("No progress to stream: %s", e)
        return iter(())
    return session.stream()


def get_app_association_response(path: str) -> AssociationResponse:
    """Attribute a path to an application."""
    try:
        association = get_app_association(path)
    except (ValueError, OSError) as e:
        return AssociationResponse(success=False, error=_error_message(e))
    return AssociationResponse(success=True, association=association)


def get_deletion_assessment_response(path: str) -> AssessmentResponse:
    """Assess the risk of deleting a path."""
    try:
        assessment = get_deletion_assessment(path)
    except (ValueError, OSError) as e:
        return AssessmentResponse(success=False, error=_error_message(e))
    return AssessmentResponse(success=True, assessment=assessment)


def delete_files(
    paths: list[str],
    use_trash: bool = True,
    *,
    executor: DeletionExecutor | None = None,
) -> DeleteResponse:
    """Delete paths with per-path failure isolation.

    Every given path is removed: system-path protection is a front-end
    policy and only applies when the caller passes an executor with it
    enabled.

    Returns:
        DeleteResponse whose ``success`` mirrors the aggregated result.
    """
    executor = executor or DeletionExecutor(protect_system=False)
    result = executor.delete(paths, use_trash=use_trash)
    return DeleteResponse(success=result.success, result=result)


def get_file_details_response(path: str) -> DetailsResponse:
    """Collect metadata for a path."""
    try:
        details = get_file_details(path)
    except (OSError, ValueError) as e:
        return DetailsResponse(success=False, error=_error_message(e))
    return DetailsResponse(success=True, details=details)


def open_in_explorer(path: str) -> OperationResponse:
    """Reveal a path in the platform file manager."""
    try:
        result = open_in_file_manager(path)
    except (OSError, subprocess.TimeoutExpired) as e:
        return OperationResponse(success=False, error=_error_message(e))
    if not result.success:
        return OperationResponse(
            success=False,
            error=result.stderr.strip() or f"File manager exited with code {result.returncode}",
        )
    return OperationResponse(success=True)
