"""CLI commands for diskscope.

This package contains all subcommand implementations.
"""

from diskscope.cli.commands import assess, config, delete, details, scan

__all__ = ["assess", "config", "delete", "details", "scan"]
