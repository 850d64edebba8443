"""Scan lifecycle management.

The coordinator hands out one :class:`ScanSession` per scan root. A
session owns the cancellation flag and the progress channel of its
scan, and is unregistered when the scan ends, whatever the outcome.
Scans on distinct roots are independent and may run concurrently on
separate threads; a second scan on a root that is already being
scanned is rejected.
"""

import logging
import os
import threading
from collections.abc import Callable, Iterator, Sequence

from diskscope.scanner.builder import TreeBuilder
from diskscope.scanner.models import FileSystemNode, ScanProgress, ScanStatus
from diskscope.scanner.progress import (
    DEFAULT_PROGRESS_INTERVAL,
    ProgressCallback,
    ProgressChannel,
    ProgressReporter,
)

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Base exception for scan failures."""


class ScanCancelledError(ScanError):
    """Raised when a scan was cancelled before it finished."""


class ScanInProgressError(ScanError):
    """Raised when a scan is requested for a root that is already being scanned."""


class ScanNotFoundError(ScanError):
    """Raised when no active scan exists for a root."""


def normalize_root(path: str) -> str:
    """Normalize a scan root to the absolute key it is tracked under."""
    return os.path.abspath(os.path.expanduser(path))


class ScanSession:
    """Handle for a single scan of one root.

    Sessions are created by :meth:`ScanCoordinator.open_session` and can
    be run once. Subscribe to progress before calling :meth:`run`.

    Attributes:
        root: Absolute scan root path.
        max_depth: Depth limit passed to the tree builder.
        exclude_patterns: Exclusion patterns passed to the tree builder.
    """

    def __init__(
        self,
        root: str,
        *,
        max_depth: int | None = None,
        exclude_patterns: Sequence[str] = (),
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        on_close: Callable[["ScanSession"], None] | None = None,
    ) -> None:
        self.root = root
        self.max_depth = max_depth
        self.exclude_patterns = tuple(exclude_patterns)
        self._reporter = ProgressReporter(root, ProgressChannel(), interval=progress_interval)
        self._cancelled = threading.Event()
        # Reentrant: subscribers may cancel from inside a progress callback
        self._lock = threading.RLock()
        self._started = False
        self._on_close = on_close

    @property
    def cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._cancelled.is_set()

    @property
    def progress(self) -> ScanProgress:
        """Snapshot of the current progress."""
        return self._reporter.snapshot()

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register a progress callback; returns an unsubscribe function."""
        return self._reporter.channel.subscribe(callback)

    def stream(self) -> Iterator[ScanProgress]:
        """Iterate over progress snapshots until the scan reaches a terminal status."""
        return self._reporter.channel.stream()

    def cancel(self) -> ScanProgress:
        """Request cooperative cancellation.

        The walk stops descending into new directories. If the scan has
        not reached a terminal status yet, a CANCELLED snapshot is
        broadcast.

        Returns:
            The current progress snapshot.
        """
        with self._lock:
            self._cancelled.set()
            if self._reporter.status.is_terminal:
                return self._reporter.snapshot()
            logger.info("Cancelling scan of %s", self.root)
            return self._reporter.transition(ScanStatus.CANCELLED)

    def run(self) -> FileSystemNode:
        """Walk the root and return the sized hierarchy.

        Returns:
            Root node of the scanned tree.

        Raises:
            ScanCancelledError: If cancellation was observed before the
                walk finished.
            ScanError: If the walk failed unexpectedly, or the session was
                already run.
        """
        with self._lock:
            if self._started:
                msg = f"Scan session for {self.root} has already been run"
                raise ScanError(msg)
            self._started = True
            if not self.cancelled:
                self._reporter.transition(ScanStatus.SCANNING)

        logger.info("Scanning %s", self.root)
        try:
            try:
                builder = TreeBuilder(
                    self._reporter,
                    max_depth=self.max_depth,
                    exclude_patterns=self.exclude_patterns,
                    is_cancelled=self._cancelled.is_set,
                )
                root = builder.build(self.root)
            except Exception as e:
                logger.exception("Scan of %s failed", self.root)
                message = str(e) or type(e).__name__
                with self._lock:
                    if not self._reporter.status.is_terminal:
                        self._reporter.transition(ScanStatus.ERROR, error=message)
                raise ScanError(message) from e

            with self._lock:
                if self.cancelled:
                    msg = "Scan cancelled"
                    raise ScanCancelledError(msg)
                snapshot = self._reporter.transition(ScanStatus.COMPLETED)

            logger.info(
                "Scanned %s: %d entries, %d bytes",
                self.root,
                snapshot.scanned_count,
                root.size,
            )
            return root
        finally:
            if self._on_close is not None:
                self._on_close(self)


class ScanCoordinator:
    """Registry of active scan sessions keyed by root path.

    Args:
        progress_interval: Entries between periodic progress broadcasts.
    """

    def __init__(self, progress_interval: int = DEFAULT_PROGRESS_INTERVAL) -> None:
        self._progress_interval = progress_interval
        self._sessions: dict[str, ScanSession] = {}
        self._lock = threading.Lock()

    def open_session(
        self,
        root: str,
        *,
        max_depth: int | None = None,
        exclude_patterns: Sequence[str] = (),
        progress_interval: int | None = None,
    ) -> ScanSession:
        """Create and register a session for ``root``.

        Args:
            root: Directory to scan.
            max_depth: Optional depth limit.
            exclude_patterns: Optional exclusion patterns.
            progress_interval: Entries between progress broadcasts
                (default: the coordinator's interval).

        Returns:
            The new session, ready to be subscribed to and run.

        Raises:
            ScanInProgressError: If a session for the same root is active.
        """
        key = normalize_root(root)
        with self._lock:
            if key in self._sessions:
                msg = f"A scan of {key} is already in progress"
                raise ScanInProgressError(msg)
            session = ScanSession(
                key,
                max_depth=max_depth,
                exclude_patterns=exclude_patterns,
                progress_interval=progress_interval or self._progress_interval,
                on_close=self._close_session,
            )
            self._sessions[key] = session
        return session

    def start_scan(
        self,
        root: str,
        *,
        max_depth: int | None = None,
        exclude_patterns: Sequence[str] = (),
    ) -> FileSystemNode:
        """Scan ``root`` on the calling thread and return its tree.

        Raises:
            ScanInProgressError: If the root is already being scanned.
            ScanCancelledError: If the scan was cancelled.
            ScanError: If the scan failed unexpectedly.
        """
        session = self.open_session(root, max_depth=max_depth, exclude_patterns=exclude_patterns)
        return session.run()

    def get_session(self, root: str) -> ScanSession:
        """Return the active session for ``root``.

        Raises:
            ScanNotFoundError: If no scan of the root is active.
        """
        key = normalize_root(root)
        with self._lock:
            session = self._sessions.get(key)
        if session is None:
            msg = f"No active scan for {key}"
            raise ScanNotFoundError(msg)
        return session

    def is_active(self, root: str) -> bool:
        """Check if a scan of ``root`` is active."""
        with self._lock:
            return normalize_root(root) in self._sessions

    def cancel_scan(self, root: str) -> ScanProgress:
        """Cancel the scan of ``root``; always succeeds.

        When no scan is active (already finished or never started), a
        minimal CANCELLED snapshot is synthesized instead.

        Returns:
            The CANCELLED (or already terminal) progress snapshot.
        """
        key = normalize_root(root)
        with self._lock:
            session = self._sessions.get(key)
        if session is not None:
            return session.cancel()

        logger.debug("No active scan for %s, reporting cancelled", key)
        return ScanProgress(status=ScanStatus.CANCELLED, current_path=key)

    def _close_session(self, session: ScanSession) -> None:
        with self._lock:
            if self._sessions.get(session.root) is session:
                del self._sessions[session.root]
