"""Progress reporting for a single scan session.

The reporter owns the progress counters of one scan and publishes
snapshots to the subscribers of that session only. Snapshots are sent
every ``interval`` visited entries and on every status transition.
"""

import logging
import queue
import threading
from collections.abc import Callable, Iterator

from diskscope.scanner.models import ScanProgress, ScanStatus

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 100

ProgressCallback = Callable[[ScanProgress], None]


class ProgressChannel:
    """Publish/subscribe channel for progress snapshots.

    Callbacks run synchronously on the publishing thread and must not
    block. A failing callback is logged and does not affect the others.
    """

    def __init__(self) -> None:
        self._subscribers: list[ProgressCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Register a callback for future snapshots.

        Args:
            callback: Called with each published snapshot.

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

    def publish(self, snapshot: ScanProgress) -> None:
        """Deliver a snapshot to every current subscriber."""
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Progress subscriber failed for %s", snapshot.current_path)

    def stream(self) -> Iterator[ScanProgress]:
        """Iterate over snapshots until a terminal status arrives.

        The subscription is registered when this method is called, so
        snapshots published before the first ``next()`` are buffered.

        Yields:
            Snapshots in publication order, ending with the terminal one.
        """
        buffer: queue.SimpleQueue[ScanProgress] = queue.SimpleQueue()
        unsubscribe = self.subscribe(buffer.put)
        return self._drain(buffer, unsubscribe)

    @staticmethod
    def _drain(
        buffer: "queue.SimpleQueue[ScanProgress]",
        unsubscribe: Callable[[], None],
    ) -> Iterator[ScanProgress]:
        try:
            while True:
                snapshot = buffer.get()
                yield snapshot
                if snapshot.status.is_terminal:
                    return
        finally:
            unsubscribe()


class ProgressReporter:
    """Tracks the counters of one scan and broadcasts snapshots.

    Args:
        root: Scan root path (initial ``current_path``).
        channel: Channel the snapshots are published on.
        interval: Number of visited entries between periodic broadcasts.
    """

    def __init__(
        self,
        root: str,
        channel: ProgressChannel | None = None,
        interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        if interval < 1:
            msg = f"Progress interval must be at least 1, got {interval}"
            raise ValueError(msg)
        self._root = root
        self._progress = ScanProgress(status=ScanStatus.IDLE, current_path=root)
        self._channel = channel if channel is not None else ProgressChannel()
        self._interval = interval

    @property
    def channel(self) -> ProgressChannel:
        """Channel the snapshots are published on."""
        return self._channel

    @property
    def status(self) -> ScanStatus:
        """Current scan status."""
        return self._progress.status

    def snapshot(self) -> ScanProgress:
        """Return a copy of the current counters."""
        return self._progress.snapshot()

    def record_entry(self, path: str) -> None:
        """Count a visited entry and broadcast every ``interval`` entries."""
        self._progress.scanned_count += 1
        self._progress.current_path = path
        # Periodic snapshots stop once a terminal snapshot went out
        if self.status.is_terminal:
            return
        if self._progress.scanned_count % self._interval == 0:
            self._channel.publish(self._progress.snapshot())

    def record_file_size(self, size: int) -> None:
        """Add the size of a successfully stat'd file."""
        self._progress.scanned_size += size

    def transition(self, status: ScanStatus, error: str | None = None) -> ScanProgress:
        """Move to a new status and broadcast unconditionally.

        Args:
            status: New status.
            error: Error message (kept only for ERROR).

        Returns:
            The snapshot that was broadcast.
        """
        logger.debug("Scan %s: %s -> %s", self._root, self.status.value, status.value)
        self._progress.status = status
        self._progress.error = error if status == ScanStatus.ERROR else None
        snapshot = self._progress.snapshot()
        self._channel.publish(snapshot)
        return snapshot
