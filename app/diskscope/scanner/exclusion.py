"""Exclusion patterns for directory scans.

A pattern skips a path (and, since it is never descended into, its
whole subtree). Matching is case-insensitive and treats ``/`` and ``\\``
as the same separator, so a pattern written for one host convention
also works on the other.

Pattern forms:
- ``*suffix``: path ends with ``suffix`` (e.g. ``*.log``)
- ``prefix*``: path contains ``prefix`` (e.g. ``node_modules*``)
- ``text``: path contains ``text`` (e.g. ``/.git``)
"""

from collections.abc import Iterable


def _normalize(value: str) -> str:
    return value.replace("\\", "/").lower()


def matches_exclusion(path: str, patterns: Iterable[str]) -> bool:
    """Check if a path matches any exclusion pattern.

    Patterns are tried in order and the first match wins. An empty
    pattern collection matches nothing.

    Args:
        path: Full path of the candidate entry.
        patterns: Exclusion patterns supplied by the user.

    Returns:
        True if the path should be skipped, False otherwise.
    """
    normalized = _normalize(path)

    for pattern in patterns:
        if pattern.startswith("*"):
            if normalized.endswith(_normalize(pattern[1:])):
                return True
        elif pattern.endswith("*"):
            if _normalize(pattern[:-1]) in normalized:
                return True
        elif _normalize(pattern) in normalized:
            return True

    return False
