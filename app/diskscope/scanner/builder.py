"""Tree builder for directory scans.

Walks a directory tree depth-first and produces a sized, immutable
:class:`FileSystemNode` hierarchy. The walk uses an explicit stack of
directory frames instead of recursion, so very deep trees cannot
exhaust the interpreter stack. A directory node is only built once
every entry beneath it has been resolved.
"""

import logging
import os
import stat
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from diskscope.scanner.exclusion import matches_exclusion
from diskscope.scanner.models import FileSystemNode, NodeKind
from diskscope.scanner.progress import ProgressReporter

logger = logging.getLogger(__name__)


def _format_mtime(st: os.stat_result) -> str:
    return datetime.fromtimestamp(st.st_mtime, tz=UTC).isoformat()


def _base_name(path: str) -> str:
    return os.path.basename(os.path.normpath(path)) or path


@dataclass(slots=True)
class _DirectoryFrame:
    """A directory whose entries are still being processed."""

    path: str
    depth: int
    parent_path: str | None
    modified_at: str | None
    entries: list[os.DirEntry[str]]
    accessible: bool = True
    position: int = 0
    children: list[FileSystemNode] = field(default_factory=list)

    def next_entry(self) -> os.DirEntry[str] | None:
        if self.position >= len(self.entries):
            return None
        entry = self.entries[self.position]
        self.position += 1
        return entry

    def finish(self) -> FileSystemNode:
        # sorted() with reverse=True keeps equal sizes in listing order
        children = tuple(sorted(self.children, key=lambda n: n.size, reverse=True))
        return FileSystemNode(
            path=self.path,
            name=_base_name(self.path),
            kind=NodeKind.DIRECTORY,
            size=sum(child.size for child in children),
            depth=self.depth,
            parent_path=self.parent_path,
            accessible=self.accessible,
            modified_at=self.modified_at,
            children=children,
        )


class TreeBuilder:
    """Builds the sized node hierarchy for one scan.

    Args:
        reporter: Progress reporter updated for every visited entry.
        max_depth: Directories at this depth are not listed (None = unlimited).
        exclude_patterns: Exclusion patterns; matching entries are skipped
            together with their subtree.
        is_cancelled: Polled before listing each directory. Once it returns
            True, remaining directories are returned without children.
    """

    def __init__(
        self,
        reporter: ProgressReporter,
        *,
        max_depth: int | None = None,
        exclude_patterns: Sequence[str] = (),
        is_cancelled: Callable[[], bool] = lambda: False,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            msg = f"max_depth cannot be negative, got {max_depth}"
            raise ValueError(msg)
        self._reporter = reporter
        self._max_depth = max_depth
        self._exclude_patterns = tuple(exclude_patterns)
        self._is_cancelled = is_cancelled

    def build(self, root: str) -> FileSystemNode:
        """Walk ``root`` and return its fully sized node.

        Args:
            root: Absolute path to start from.

        Returns:
            Root node of the scanned hierarchy.
        """
        opened = self._open(root, depth=0, parent_path=None)
        if isinstance(opened, FileSystemNode):
            return opened

        stack: list[_DirectoryFrame] = [opened]
        while True:
            frame = stack[-1]
            entry = frame.next_entry()

            if entry is None:
                node = frame.finish()
                stack.pop()
                if not stack:
                    return node
                stack[-1].children.append(node)
                continue

            child = self._visit_entry(entry, frame)
            if isinstance(child, _DirectoryFrame):
                stack.append(child)
            elif child is not None:
                frame.children.append(child)

    def _visit_entry(
        self,
        entry: os.DirEntry[str],
        frame: _DirectoryFrame,
    ) -> FileSystemNode | _DirectoryFrame | None:
        """Process one listing entry of ``frame``.

        Returns:
            A leaf node, a new frame to descend into, or None if the entry
            is skipped.
        """
        path = entry.path

        if matches_exclusion(path, self._exclude_patterns):
            return None

        self._reporter.record_entry(path)

        try:
            if entry.is_symlink():
                return None
            if entry.is_dir(follow_symlinks=False):
                return self._open(path, depth=frame.depth + 1, parent_path=frame.path)
            if not entry.is_file(follow_symlinks=False):
                return None
        except OSError as e:
            logger.debug("Cannot determine type of %s: %s", path, e)
            return None

        return self._file_leaf(path, frame.depth + 1, frame.path)

    def _file_leaf(self, path: str, depth: int, parent_path: str) -> FileSystemNode:
        try:
            st = os.stat(path, follow_symlinks=False)
        except OSError as e:
            logger.debug("Cannot stat file %s: %s", path, e)
            return self._inaccessible(path, NodeKind.FILE, depth, parent_path)

        self._reporter.record_file_size(st.st_size)
        return FileSystemNode(
            path=path,
            name=_base_name(path),
            kind=NodeKind.FILE,
            size=st.st_size,
            depth=depth,
            parent_path=parent_path,
            modified_at=_format_mtime(st),
        )

    def _open(
        self,
        path: str,
        depth: int,
        parent_path: str | None,
    ) -> FileSystemNode | _DirectoryFrame:
        """Stat a path and, for directories, read its listing.

        Returns:
            A finished node for files, inaccessible paths, depth-limited or
            cancelled directories; otherwise a frame holding the listing.
        """
        try:
            st = os.stat(path)
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return self._inaccessible(path, NodeKind.DIRECTORY, depth, parent_path)

        modified_at = _format_mtime(st)

        if not stat.S_ISDIR(st.st_mode):
            self._reporter.record_file_size(st.st_size)
            return FileSystemNode(
                path=path,
                name=_base_name(path),
                kind=NodeKind.FILE,
                size=st.st_size,
                depth=depth,
                parent_path=parent_path,
                modified_at=modified_at,
            )

        frame = _DirectoryFrame(
            path=path,
            depth=depth,
            parent_path=parent_path,
            modified_at=modified_at,
            entries=[],
        )

        if self._max_depth is not None and depth >= self._max_depth:
            return frame.finish()

        if self._is_cancelled():
            return frame.finish()

        try:
            with os.scandir(path) as it:
                frame.entries = list(it)
        except OSError as e:
            logger.debug("Cannot list directory %s: %s", path, e)
            frame.accessible = False
            return frame.finish()

        return frame

    @staticmethod
    def _inaccessible(
        path: str,
        kind: NodeKind,
        depth: int,
        parent_path: str | None,
    ) -> FileSystemNode:
        return FileSystemNode(
            path=path,
            name=_base_name(path),
            kind=kind,
            size=0,
            depth=depth,
            parent_path=parent_path,
            accessible=False,
        )
