"""Unit tests for scanner domain models."""

import pytest
from diskscope.scanner.models import FileSystemNode, NodeKind, ScanProgress, ScanStatus


def _file(path: str, size: int, depth: int = 1) -> FileSystemNode:
    return FileSystemNode(
        path=path,
        name=path.rsplit("/", 1)[-1],
        kind=NodeKind.FILE,
        size=size,
        depth=depth,
        parent_path=path.rsplit("/", 1)[0],
    )


class TestScanStatus:
    """Tests for ScanStatus enum."""

    @pytest.mark.parametrize(
        ("status", "terminal"),
        [
            (ScanStatus.IDLE, False),
            (ScanStatus.SCANNING, False),
            (ScanStatus.COMPLETED, True),
            (ScanStatus.ERROR, True),
            (ScanStatus.CANCELLED, True),
        ],
    )
    def test_is_terminal(self, status: ScanStatus, terminal: bool) -> None:
        """Only completed, error and cancelled are terminal."""
        assert status.is_terminal is terminal

    def test_string_values(self) -> None:
        """Statuses serialize as lowercase strings."""
        assert ScanStatus.CANCELLED.value == "cancelled"
        assert NodeKind.DIRECTORY.value == "directory"


class TestFileSystemNode:
    """Tests for FileSystemNode dataclass."""

    def test_id_is_path(self) -> None:
        """The node id is its path."""
        node = _file("/data/a.txt", 10)
        assert node.id == "/data/a.txt"
        assert node.is_directory is False

    def test_rejects_empty_path(self) -> None:
        """Empty path raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            FileSystemNode(path="", name="", kind=NodeKind.FILE, size=0, depth=0)

    def test_rejects_negative_size(self) -> None:
        """Negative size raises ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            FileSystemNode(path="/a", name="a", kind=NodeKind.FILE, size=-1, depth=0)

    def test_rejects_file_with_children(self) -> None:
        """A file node cannot carry children."""
        child = _file("/a/b", 1)
        with pytest.raises(ValueError, match="cannot have children"):
            FileSystemNode(
                path="/a", name="a", kind=NodeKind.FILE, size=1, depth=0, children=(child,)
            )

    def test_is_immutable(self) -> None:
        """Nodes are frozen."""
        node = _file("/data/a.txt", 10)
        with pytest.raises(AttributeError):
            node.size = 20  # type: ignore[misc]

    def test_walk_and_find(self) -> None:
        """walk yields pre-order in child order and find looks up by path."""
        a = _file("/data/a.txt", 10)
        b = _file("/data/b.txt", 5)
        root = FileSystemNode(
            path="/data",
            name="data",
            kind=NodeKind.DIRECTORY,
            size=15,
            depth=0,
            children=(a, b),
        )

        assert [n.path for n in root.walk()] == ["/data", "/data/a.txt", "/data/b.txt"]
        assert root.find("/data/b.txt") is b
        assert root.find("/elsewhere") is None

    def test_to_dict(self) -> None:
        """Directories serialize children; files do not."""
        a = _file("/data/a.txt", 10)
        root = FileSystemNode(
            path="/data", name="data", kind=NodeKind.DIRECTORY, size=10, depth=0, children=(a,)
        )

        data = root.to_dict()

        assert data["id"] == "/data"
        assert data["type"] == "directory"
        assert data["parent_path"] is None
        assert data["children"][0]["name"] == "a.txt"
        assert "children" not in data["children"][0]


class TestScanProgress:
    """Tests for ScanProgress dataclass."""

    def test_snapshot_is_independent(self) -> None:
        """Mutating the source does not change a snapshot."""
        progress = ScanProgress(status=ScanStatus.SCANNING, current_path="/data")
        snapshot = progress.snapshot()

        progress.scanned_count = 42
        progress.status = ScanStatus.COMPLETED

        assert snapshot.scanned_count == 0
        assert snapshot.status == ScanStatus.SCANNING
        assert snapshot.start_time == progress.start_time

    def test_to_dict(self) -> None:
        """to_dict uses plain values."""
        progress = ScanProgress(
            status=ScanStatus.ERROR, current_path="/data", scanned_count=3, error="boom"
        )

        data = progress.to_dict()

        assert data["status"] == "error"
        assert data["scanned_count"] == 3
        assert data["error"] == "boom"
