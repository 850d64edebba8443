"""Utility modules for diskscope.

This module exports commonly used utility functions.
"""

from diskscope.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from diskscope.utils.shell import CommandResult, command_exists, open_in_file_manager, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "open_in_file_manager",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
