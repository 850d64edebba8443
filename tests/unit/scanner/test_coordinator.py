"""Unit tests for ScanCoordinator and ScanSession.

Tests the scan lifecycle, cancellation, per-session progress delivery
and rejection of concurrent scans on the same root.
"""

import threading
from pathlib import Path
from unittest.mock import patch

import pytest
from diskscope.scanner.coordinator import (
    ScanCancelledError,
    ScanCoordinator,
    ScanError,
    ScanInProgressError,
    ScanNotFoundError,
    normalize_root,
)
from diskscope.scanner.models import ScanProgress, ScanStatus


class TestStartScan:
    """Tests for completed scans."""

    def test_returns_tree_and_removes_session(self, sample_tree: Path) -> None:
        """A finished scan returns the root and unregisters the session."""
        coordinator = ScanCoordinator()

        root = coordinator.start_scan(str(sample_tree))

        assert root.path == str(sample_tree)
        assert root.size == 555
        assert coordinator.is_active(str(sample_tree)) is False

    def test_max_depth_zero(self, sample_tree: Path) -> None:
        """Depth 0 returns an empty root of size 0."""
        root = ScanCoordinator().start_scan(str(sample_tree), max_depth=0)

        assert root.children == ()
        assert root.size == 0

    def test_progress_sequence(self, sample_tree: Path) -> None:
        """Subscribers see scanning, periodic updates and completed."""
        coordinator = ScanCoordinator(progress_interval=2)
        session = coordinator.open_session(str(sample_tree))
        received: list[ScanProgress] = []
        session.subscribe(received.append)

        session.run()

        assert received[0].status == ScanStatus.SCANNING
        assert received[-1].status == ScanStatus.COMPLETED
        assert received[-1].scanned_count == 9
        assert received[-1].scanned_size == 555
        periodic = [s.scanned_count for s in received[1:-1]]
        assert periodic == [2, 4, 6, 8]

    def test_session_progress_interval_override(self, sample_tree: Path) -> None:
        """A per-session interval replaces the coordinator default."""
        coordinator = ScanCoordinator(progress_interval=2)
        session = coordinator.open_session(str(sample_tree), progress_interval=4)
        received: list[ScanProgress] = []
        session.subscribe(received.append)

        session.run()

        assert [s.scanned_count for s in received[1:-1]] == [4, 8]

    def test_session_runs_once(self, sample_tree: Path) -> None:
        """A session cannot be reused."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree))
        session.run()

        with pytest.raises(ScanError, match="already been run"):
            session.run()

    def test_unexpected_failure_reports_error(self, sample_tree: Path) -> None:
        """Unexpected exceptions end the scan with an ERROR snapshot."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree))
        received: list[ScanProgress] = []
        session.subscribe(received.append)

        with (
            patch(
                "diskscope.scanner.coordinator.TreeBuilder.build",
                side_effect=RuntimeError("walker exploded"),
            ),
            pytest.raises(ScanError, match="walker exploded"),
        ):
            session.run()

        assert received[-1].status == ScanStatus.ERROR
        assert received[-1].error == "walker exploded"
        assert coordinator.is_active(str(sample_tree)) is False

    def test_negative_depth_ends_with_error_snapshot(self, sample_tree: Path) -> None:
        """An invalid depth limit still ends the stream with an ERROR snapshot."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree), max_depth=-1)
        stream = session.stream()

        with pytest.raises(ScanError, match="cannot be negative"):
            session.run()

        statuses = [snapshot.status for snapshot in stream]
        assert statuses == [ScanStatus.SCANNING, ScanStatus.ERROR]
        assert coordinator.is_active(str(sample_tree)) is False


class TestSessions:
    """Tests for session registration."""

    def test_same_root_rejected_while_active(self, sample_tree: Path) -> None:
        """A second scan of an active root is rejected."""
        coordinator = ScanCoordinator()
        coordinator.open_session(str(sample_tree))

        with pytest.raises(ScanInProgressError):
            coordinator.open_session(str(sample_tree) + "/")

    def test_distinct_roots_are_independent(self, sample_tree: Path) -> None:
        """Sessions of different roots do not share state."""
        coordinator = ScanCoordinator()
        docs = coordinator.open_session(str(sample_tree / "docs"))
        logs = coordinator.open_session(str(sample_tree / "logs"))

        docs.cancel()

        assert docs.cancelled is True
        assert logs.cancelled is False
        assert logs.run().size == 80

    def test_get_session(self, sample_tree: Path) -> None:
        """get_session finds active sessions by normalized root."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree))

        assert coordinator.get_session(str(sample_tree / "docs" / "..")) is session

    def test_get_session_missing(self, tmp_path: Path) -> None:
        """get_session raises for unknown roots."""
        with pytest.raises(ScanNotFoundError):
            ScanCoordinator().get_session(str(tmp_path))

    def test_normalize_root(self, tmp_path: Path) -> None:
        """Roots are tracked as absolute normalized paths."""
        assert normalize_root(str(tmp_path / "a" / "..")) == str(tmp_path)


class TestCancelScan:
    """Tests for cancellation."""

    def test_cancel_mid_scan(self, sample_tree: Path) -> None:
        """Cancelling from a progress callback ends the scan as cancelled."""
        coordinator = ScanCoordinator(progress_interval=1)
        session = coordinator.open_session(str(sample_tree))
        received: list[ScanProgress] = []

        def on_progress(snapshot: ScanProgress) -> None:
            received.append(snapshot)
            if snapshot.scanned_count == 1:
                coordinator.cancel_scan(str(sample_tree))

        session.subscribe(on_progress)

        with pytest.raises(ScanCancelledError, match="Scan cancelled"):
            session.run()

        assert ScanStatus.CANCELLED in [s.status for s in received]
        assert received[-1].status == ScanStatus.CANCELLED
        assert coordinator.is_active(str(sample_tree)) is False

    def test_cancel_finished_root_synthesizes_snapshot(self, sample_tree: Path) -> None:
        """Cancelling a root with no active scan still succeeds."""
        coordinator = ScanCoordinator()
        coordinator.start_scan(str(sample_tree))

        snapshot = coordinator.cancel_scan(str(sample_tree))

        assert snapshot.status == ScanStatus.CANCELLED
        assert snapshot.current_path == str(sample_tree)
        assert snapshot.scanned_count == 0

    def test_cancel_twice(self, sample_tree: Path) -> None:
        """A second cancel returns the terminal snapshot without a new broadcast."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree))
        received: list[ScanProgress] = []
        session.subscribe(received.append)

        first = session.cancel()
        second = session.cancel()

        assert first.status == ScanStatus.CANCELLED
        assert second.status == ScanStatus.CANCELLED
        assert len(received) == 1

    def test_cancel_before_run(self, sample_tree: Path) -> None:
        """A session cancelled before running raises without walking."""
        coordinator = ScanCoordinator()
        session = coordinator.open_session(str(sample_tree))
        session.cancel()

        with pytest.raises(ScanCancelledError):
            session.run()

        assert session.progress.status == ScanStatus.CANCELLED
        assert session.progress.scanned_count == 0

    def test_stream_from_worker_thread(self, sample_tree: Path) -> None:
        """A stream opened before the run ends with the terminal snapshot."""
        coordinator = ScanCoordinator(progress_interval=1)
        session = coordinator.open_session(str(sample_tree))
        stream = session.stream()

        worker = threading.Thread(target=session.run)
        worker.start()
        snapshots = list(stream)
        worker.join(timeout=10)

        assert snapshots[0].status == ScanStatus.SCANNING
        assert snapshots[-1].status == ScanStatus.COMPLETED
        assert not worker.is_alive()
