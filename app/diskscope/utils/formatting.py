"""Shared consoles and one-line status messages.

Command results (tables, trees, JSON) and info/success lines go to
``console`` on stdout so they can be piped; warnings and errors go to
``err_console`` on stderr.
"""

import sys

from rich.console import Console

from diskscope.core.theme import get_theme


def _make_console(*, stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Hex theme colors need truecolor; elsewhere Rich decides
    color_system = "truecolor" if stream.isatty() else "auto"
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def _labelled(style: str, label: str, message: str) -> str:
    return f"[{style}]{label}:[/] {message}"


def print_info(message: str) -> None:
    console.print(message, style="info")


def print_success(message: str) -> None:
    console.print(message, style="success")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(_labelled("warning", "Warning", message))


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(_labelled("error", "Error", message))
