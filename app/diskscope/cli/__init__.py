"""CLI package for diskscope.

This package contains the Typer application and all subcommands.
"""

from diskscope.cli.main import app

__all__ = ["app"]
