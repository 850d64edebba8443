"""File details lookup.

Collects size, timestamps and attribute flags of a single path. The
hidden/system/read-only flags come from the host OS where it has the
concept and fall back to conventions elsewhere (dotfiles are hidden on
POSIX, no system flag outside Windows).
"""

import os
import stat
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from diskscope.safety.classifier import get_extension
from diskscope.scanner.models import NodeKind


@dataclass(frozen=True, slots=True)
class FileDetails:
    """Metadata of a single file or directory.

    Attributes:
        name: Base name.
        path: Path as requested.
        size: Size in bytes as reported by stat (not aggregated).
        kind: File or directory.
        created_at: Creation time in ISO 8601 (metadata change time where
            the platform has no birth time).
        modified_at: Last modification time in ISO 8601.
        accessed_at: Last access time in ISO 8601.
        extension: Lowercase extension for files, None for directories.
        is_hidden: Hidden attribute (or dotfile convention).
        is_system: Windows system attribute.
        is_read_only: Read-only attribute (or not writable by this user).
    """

    name: str
    path: str
    size: int
    kind: NodeKind
    created_at: str
    modified_at: str
    accessed_at: str
    extension: str | None
    is_hidden: bool
    is_system: bool
    is_read_only: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "type": self.kind.value,
            "created_at": self.created_at,
            "modified_at": self.modified_at,
            "accessed_at": self.accessed_at,
            "extension": self.extension,
            "is_hidden": self.is_hidden,
            "is_system": self.is_system,
            "is_read_only": self.is_read_only,
        }


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=UTC).isoformat()


def _attribute_flags(path: str, name: str, st: os.stat_result) -> tuple[bool, bool, bool]:
    """Return (hidden, system, read_only) for a stat result."""
    attributes: int | None = getattr(st, "st_file_attributes", None)
    if attributes is not None:
        return (
            bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN),
            bool(attributes & stat.FILE_ATTRIBUTE_SYSTEM),
            bool(attributes & stat.FILE_ATTRIBUTE_READONLY),
        )

    flags: int = getattr(st, "st_flags", 0)
    is_hidden = name.startswith(".") or bool(flags & getattr(stat, "UF_HIDDEN", 0))
    is_read_only = not os.access(path, os.W_OK)
    return is_hidden, False, is_read_only


def get_file_details(path: str) -> FileDetails:
    """Collect metadata for a path.

    Args:
        path: File or directory to inspect.

    Returns:
        FileDetails for the path.

    Raises:
        OSError: If the path cannot be stat'd.
    """
    st = os.stat(path)
    name = os.path.basename(os.path.normpath(path)) or path
    is_directory = stat.S_ISDIR(st.st_mode)
    created: float = getattr(st, "st_birthtime", None) or st.st_ctime
    is_hidden, is_system, is_read_only = _attribute_flags(path, name, st)

    return FileDetails(
        name=name,
        path=path,
        size=st.st_size,
        kind=NodeKind.DIRECTORY if is_directory else NodeKind.FILE,
        created_at=_iso(created),
        modified_at=_iso(st.st_mtime),
        accessed_at=_iso(st.st_atime),
        extension=None if is_directory else get_extension(path),
        is_hidden=is_hidden,
        is_system=is_system,
        is_read_only=is_read_only,
    )
