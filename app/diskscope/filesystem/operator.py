"""Deletion executor.

Removes explicit paths one at a time, either to the trash or
permanently. Each path is measured before removal so the freed size can
be reported. Failures are isolated per path: a failed path is recorded
and the remaining paths are still processed. Paths already removed stay
removed when a later path fails.
"""

import logging
import os
import shutil
import stat
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from send2trash import send2trash

from diskscope.filesystem.sizes import get_directory_size
from diskscope.safety.classifier import get_app_association
from diskscope.safety.models import AssociationType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FailedPath:
    """A path that could not be deleted.

    Attributes:
        path: Path that was operated on.
        reason: Why the deletion failed.
    """

    path: str
    reason: str


@dataclass(slots=True)
class DeleteResult:
    """Aggregated outcome of a deletion request.

    Attributes:
        success: False if any path failed.
        deleted_paths: Paths removed successfully, in request order.
        freed_size: Total size in bytes of the removed paths.
        failed_paths: Paths that failed, with reasons.
        dry_run: Whether this was a dry-run (nothing removed).
    """

    success: bool = True
    deleted_paths: list[str] = field(default_factory=list)
    freed_size: int = 0
    failed_paths: list[FailedPath] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "deleted_paths": list(self.deleted_paths),
            "freed_size": self.freed_size,
            "failed_paths": [{"path": f.path, "reason": f.reason} for f in self.failed_paths],
            "dry_run": self.dry_run,
        }


DeleteCallback = Callable[[DeleteResult], None]


class DeletionExecutor:
    """Deletes paths with per-path failure isolation.

    Args:
        dry_run: If True, measure and report what would be deleted
            without deleting anything.
        protect_system: If True, refuse to delete paths classified as
            system files.
    """

    def __init__(self, dry_run: bool = False, protect_system: bool = True) -> None:
        self._dry_run = dry_run
        self._protect_system = protect_system
        self._subscribers: list[DeleteCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: DeleteCallback) -> Callable[[], None]:
        """Register a callback for final deletion results.

        Returns:
            A function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def delete(self, paths: list[str], use_trash: bool = True) -> DeleteResult:
        """Delete paths sequentially and aggregate the outcome.

        Args:
            paths: Paths to delete, processed in order.
            use_trash: Move to the trash instead of removing permanently.

        Returns:
            DeleteResult describing every path.
        """
        result = DeleteResult(dry_run=self._dry_run)

        for path in paths:
            try:
                size = self._delete_single(path, use_trash)
            except (OSError, ValueError) as e:
                logger.warning("Failed to delete %s: %s", path, e)
                result.success = False
                result.failed_paths.append(FailedPath(path=path, reason=str(e) or type(e).__name__))
                continue

            result.deleted_paths.append(path)
            result.freed_size += size

        logger.info(
            "Deleted %d path(s), %d failed, %d bytes freed%s",
            len(result.deleted_paths),
            len(result.failed_paths),
            result.freed_size,
            " (dry-run)" if self._dry_run else "",
        )
        self._publish(result)
        return result

    def _delete_single(self, path: str, use_trash: bool) -> int:
        """Measure and remove one path.

        Returns:
            Size of the removed path in bytes.

        Raises:
            OSError: If the path cannot be measured or removed.
            PermissionError: If the path is protected.
            ValueError: If the path is malformed (e.g. contains a NUL byte).
        """
        if self._protect_system and self._is_protected(path):
            msg = f"Protected system path cannot be deleted: {path}"
            raise PermissionError(msg)

        st = os.lstat(path)
        is_directory = stat.S_ISDIR(st.st_mode)
        size = get_directory_size(path) if is_directory else st.st_size

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return size

        if use_trash:
            send2trash(path)
        elif is_directory:
            shutil.rmtree(path)
        else:
            os.unlink(path)

        logger.debug("Deleted %s (%d bytes, trash=%s)", path, size, use_trash)
        return size

    @staticmethod
    def _is_protected(path: str) -> bool:
        association = get_app_association(os.path.abspath(path))
        return association.association_type == AssociationType.SYSTEM

    def _publish(self, result: DeleteResult) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(result)
            except Exception:
                logger.exception("Deletion subscriber failed")
