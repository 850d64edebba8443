"""Scanner domain models.

This module defines the sized node hierarchy produced by a directory
scan and the progress snapshot published while a scan is running.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Kind of a scanned filesystem entry.

    Attributes:
        FILE: Regular file (or an entry that could not be stat'd as a directory).
        DIRECTORY: Directory.
    """

    FILE = "file"
    DIRECTORY = "directory"


class ScanStatus(str, Enum):
    """Lifecycle status of a scan.

    Attributes:
        IDLE: No scan has started on the root yet.
        SCANNING: The walk is in progress.
        COMPLETED: The walk finished and the tree was returned.
        ERROR: The walk aborted on an unexpected failure.
        CANCELLED: The scan was cancelled by the caller.
    """

    IDLE = "idle"
    SCANNING = "scanning"
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions follow this status."""
        return self in (ScanStatus.COMPLETED, ScanStatus.ERROR, ScanStatus.CANCELLED)


@dataclass(frozen=True, slots=True)
class FileSystemNode:
    """A single entry in the scanned hierarchy.

    Nodes are immutable once built. Directory sizes are the sum of the
    sizes of their children, and children are ordered by size, largest
    first (ties keep listing order).

    Attributes:
        path: Absolute path, unique within a tree.
        name: Base name of the entry.
        kind: File or directory.
        size: Size in bytes (aggregated for directories).
        depth: Distance from the scan root (root is 0).
        parent_path: Path of the parent node, None for the scan root.
        accessible: False if stat or listing the entry failed.
        modified_at: Last modification time in ISO 8601 (None if unavailable).
        children: Child nodes (always empty for files).
    """

    path: str
    name: str
    kind: NodeKind
    size: int
    depth: int
    parent_path: str | None = None
    accessible: bool = True
    modified_at: str | None = None
    children: tuple["FileSystemNode", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate node data after initialization."""
        if not self.path:
            msg = "Node path cannot be empty"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Node size cannot be negative, got {self.size}"
            raise ValueError(msg)
        if self.kind == NodeKind.FILE and self.children:
            msg = f"File node cannot have children: {self.path}"
            raise ValueError(msg)

    @property
    def id(self) -> str:
        """Unique key of the node (its path)."""
        return self.path

    @property
    def is_directory(self) -> bool:
        """Check if the node is a directory."""
        return self.kind == NodeKind.DIRECTORY

    def walk(self) -> Iterator["FileSystemNode"]:
        """Yield this node and all descendants, depth-first in child order."""
        stack: list[FileSystemNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, path: str) -> "FileSystemNode | None":
        """Find a node by path within this subtree.

        Args:
            path: Absolute path of the node to look up.

        Returns:
            The matching node, or None if it is not part of the tree.
        """
        for node in self.walk():
            if node.path == path:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "id": self.path,
            "name": self.name,
            "path": self.path,
            "type": self.kind.value,
            "size": self.size,
            "depth": self.depth,
            "parent_path": self.parent_path,
            "accessible": self.accessible,
            "modified_at": self.modified_at,
        }
        if self.is_directory:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(slots=True)
class ScanProgress:
    """Mutable progress counters of a running scan.

    Subscribers never see this object directly; they receive copies made
    by :meth:`snapshot`.

    Attributes:
        status: Current lifecycle status.
        scanned_count: Number of entries visited so far.
        scanned_size: Total bytes of successfully stat'd files so far.
        current_path: Path of the most recently visited entry.
        start_time: ISO 8601 timestamp of the scan start.
        error: Error message when status is ERROR.
    """

    status: ScanStatus
    current_path: str
    scanned_count: int = 0
    scanned_size: int = 0
    start_time: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    error: str | None = None

    def snapshot(self) -> "ScanProgress":
        """Return an independent copy of the current counters."""
        return ScanProgress(
            status=self.status,
            current_path=self.current_path,
            scanned_count=self.scanned_count,
            scanned_size=self.scanned_size,
            start_time=self.start_time,
            error=self.error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "scanned_count": self.scanned_count,
            "scanned_size": self.scanned_size,
            "current_path": self.current_path,
            "start_time": self.start_time,
            "error": self.error,
        }
