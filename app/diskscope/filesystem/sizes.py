"""Size measurement and formatting helpers."""

import logging
import os
import re
from typing import Literal

logger = logging.getLogger(__name__)

SizeLevel = Literal["tiny", "small", "medium", "large", "huge"]

_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")
_SIZE_PATTERN = re.compile(r"^([\d.]+)\s*([A-Za-z]*)$")


def get_directory_size(path: str) -> int:
    """Sum the sizes of all files beneath a directory.

    Symbolic links are not followed. Entries that cannot be read
    contribute 0.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes.
    """
    total = 0
    pending = [path]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot list %s: %s", current, e)
            continue

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                else:
                    total += entry.stat(follow_symlinks=False).st_size
            except OSError:
                continue
    return total


def format_size(size_bytes: int | None, decimals: int = 2) -> str:
    """Format a byte count as a human-readable string.

    Args:
        size_bytes: Size in bytes (None is treated as 0).
        decimals: Maximum number of decimal places.

    Returns:
        String such as "0 B", "512 B" or "1.5 GB".
    """
    if not size_bytes:
        return "0 B"
    decimals = max(decimals, 0)
    value = float(size_bytes)
    index = 0
    while abs(value) >= 1024 and index < len(_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.{decimals}f}"
    if decimals:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[index]}"


def parse_size(text: str) -> int:
    """Parse a human-readable size such as "1.5 GB" into bytes.

    Units are case-insensitive; an unknown unit counts as bytes.

    Args:
        text: Size string.

    Returns:
        Size in bytes, or 0 if the string cannot be parsed.
    """
    match = _SIZE_PATTERN.match(text.strip())
    if not match:
        return 0
    try:
        value = float(match.group(1))
    except ValueError:
        return 0
    unit = match.group(2).upper()
    exponent = _UNITS.index(unit) if unit in _UNITS else 0
    return round(value * 1024**exponent)


def calculate_percent(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total`` (0 when total is 0)."""
    if total == 0:
        return 0.0
    return part / total * 100


def size_level(size: int, total: int) -> SizeLevel:
    """Bucket a size by its share of a total.

    Returns:
        "huge" (>= 50%), "large" (>= 25%), "medium" (>= 10%),
        "small" (>= 1%) or "tiny".
    """
    percent = calculate_percent(size, total)
    if percent >= 50:
        return "huge"
    if percent >= 25:
        return "large"
    if percent >= 10:
        return "medium"
    if percent >= 1:
        return "small"
    return "tiny"


def is_large_file(size: int, threshold_mb: int = 100) -> bool:
    """Check if a size reaches the large-file threshold."""
    return size >= threshold_mb * 1024 * 1024
