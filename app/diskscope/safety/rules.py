"""Ordered path rules used to attribute paths to applications.

Each table is evaluated top to bottom and the first matching rule wins,
so the order of the entries is part of the classification result.
Rules are written as path segments rather than raw strings so they work
the same for ``C:\\Users\\me\\...`` and ``/home/me/...`` style paths.

A rule matches when its segments appear contiguously among the ancestor
directories of a path (every segment except the final name). Anchored
rules must start at the filesystem root; a Windows drive segment such
as ``C:`` is ignored for anchoring.
"""

import re
from dataclasses import dataclass

from diskscope.safety.models import AssociationType

_SEPARATORS = re.compile(r"[\\/]+")


def split_segments(path: str) -> tuple[str, ...]:
    """Split a path into its non-empty segments on either separator."""
    return tuple(part for part in _SEPARATORS.split(path) if part)


def _fold(segments: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(segment.casefold() for segment in segments)


def _is_drive(segment: str) -> bool:
    return len(segment) == 2 and segment[1] == ":" and segment[0].isalpha()


@dataclass(frozen=True, slots=True)
class PathRule:
    """A segment sequence and the association it implies.

    Attributes:
        segments: Consecutive directory names to look for.
        app_name: Application name reported on a match.
        association_type: Association category reported on a match.
        anchored: If True, the segments must start at the filesystem root.
    """

    segments: tuple[str, ...]
    app_name: str
    association_type: AssociationType
    anchored: bool = False

    def matches(self, ancestors: tuple[str, ...]) -> bool:
        """Check the rule against casefolded ancestor segments."""
        wanted = _fold(self.segments)
        size = len(wanted)

        if self.anchored:
            if ancestors and _is_drive(ancestors[0]):
                ancestors = ancestors[1:]
            return ancestors[:size] == wanted

        return any(
            ancestors[i : i + size] == wanted for i in range(len(ancestors) - size + 1)
        )


def _rule(
    *segments: str,
    app: str,
    kind: AssociationType,
    anchored: bool = False,
) -> PathRule:
    return PathRule(segments=segments, app_name=app, association_type=kind, anchored=anchored)


_APP = AssociationType.APP_DATA
_CACHE = AssociationType.CACHE
_INSTALLED = AssociationType.INSTALLED
_SYSTEM = AssociationType.SYSTEM

# Known application locations (confidence 90).
APP_RULES: tuple[PathRule, ...] = (
    # Browsers
    _rule("Google", "Chrome", app="Google Chrome", kind=_APP),
    _rule("Mozilla", "Firefox", app="Mozilla Firefox", kind=_APP),
    _rule("Microsoft", "Edge", app="Microsoft Edge", kind=_APP),
    # Developer tools
    _rule("Microsoft", "VSCode", app="Visual Studio Code", kind=_APP),
    _rule("Code", app="Visual Studio Code", kind=_APP),
    _rule("JetBrains", app="JetBrains IDE", kind=_APP),
    _rule("npm", app="npm", kind=_CACHE),
    _rule("node_modules", app="Node.js", kind=_APP),
    _rule(".nuget", app="NuGet", kind=_CACHE),
    _rule(".gradle", app="Gradle", kind=_CACHE),
    _rule(".m2", app="Maven", kind=_CACHE),
    # Game platforms
    _rule("Steam", app="Steam", kind=_APP),
    _rule("Epic Games", app="Epic Games", kind=_INSTALLED),
    _rule("Riot Games", app="Riot Games", kind=_INSTALLED),
    # Communication
    _rule("WeChat", app="WeChat", kind=_APP),
    _rule("Tencent", "QQ", app="QQ", kind=_APP),
    _rule("Discord", app="Discord", kind=_APP),
    _rule("Slack", app="Slack", kind=_APP),
    _rule("Zoom", app="Zoom", kind=_APP),
    # Office
    _rule("Microsoft", "Office", app="Microsoft Office", kind=_APP),
    _rule("Adobe", app="Adobe", kind=_APP),
    # Windows system and install locations
    _rule("Windows", app="Windows System", kind=_SYSTEM),
    _rule("System32", app="Windows System", kind=_SYSTEM),
    _rule("SysWOW64", app="Windows System", kind=_SYSTEM),
    _rule("Program Files", app="Installed App", kind=_INSTALLED),
    _rule("Program Files (x86)", app="Installed App (32-bit)", kind=_INSTALLED),
    # POSIX and macOS system and install locations
    _rule("usr", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("bin", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("sbin", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("lib", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("lib64", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("boot", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("etc", app="Operating System", kind=_SYSTEM, anchored=True),
    _rule("System", app="macOS System", kind=_SYSTEM, anchored=True),
    _rule("opt", app="Installed App", kind=_INSTALLED, anchored=True),
    _rule("snap", app="Snap", kind=_INSTALLED, anchored=True),
    _rule("Applications", app="Installed App", kind=_INSTALLED, anchored=True),
    _rule(".local", "share", "flatpak", app="Flatpak", kind=_INSTALLED),
    _rule("__pycache__", app="Python", kind=_CACHE),
)

# Personal folders (confidence 85).
PERSONAL_SEGMENTS: tuple[str, ...] = (
    "Documents",
    "Downloads",
    "Desktop",
    "Pictures",
    "Videos",
    "Music",
)

# Cache and temporary folders (confidence 80).
CACHE_SEGMENTS: tuple[str, ...] = (
    "Temp",
    "Cache",
    "tmp",
    ".cache",
    "Temporary Internet Files",
    "Caches",
)

# Extensions (lowercase, without dot) that drive the assessment.
INSTALLED_CORE_EXTENSIONS: frozenset[str] = frozenset({"exe", "dll", "sys", "msi"})
DISPOSABLE_EXTENSIONS: frozenset[str] = frozenset({"log", "tmp", "temp"})
CONFIG_EXTENSIONS: frozenset[str] = frozenset({"json", "xml", "ini", "config", "cfg"})
DATABASE_EXTENSIONS: frozenset[str] = frozenset({"db", "sqlite", "sqlite3", "ldb"})


def contains_segment(ancestors: tuple[str, ...], names: tuple[str, ...]) -> bool:
    """Check if any casefolded ancestor equals one of ``names``."""
    folded = {name.casefold() for name in names}
    return any(segment in folded for segment in ancestors)


def app_name_under_root(segments: tuple[str, ...], root: str) -> str | None:
    """Return the first segment beneath ``root``, if the path lies under it.

    Args:
        segments: Segments of the path being classified (original case).
        root: Application data root path.

    Returns:
        The segment directly below the root, or None if the path is not
        strictly beneath it.
    """
    root_segments = _fold(split_segments(root))
    if not root_segments or len(segments) <= len(root_segments):
        return None
    if _fold(segments[: len(root_segments)]) != root_segments:
        return None
    return segments[len(root_segments)]
