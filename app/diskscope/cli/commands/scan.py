"""Scan command implementation.

Walks a directory into a size-sorted tree and displays the largest
entries. The walk runs on a worker thread while the main thread renders
progress; Ctrl-C cancels the scan cooperatively.
"""

import json
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from diskscope.api import get_default_coordinator
from diskscope.cli.display import create_entries_table, create_tree
from diskscope.core.config import ConfigError, get_settings
from diskscope.filesystem.sizes import format_size, parse_size
from diskscope.safety.classifier import get_deletion_assessment
from diskscope.safety.models import DeletionAssessment
from diskscope.scanner.coordinator import (
    ScanCancelledError,
    ScanError,
    ScanSession,
)
from diskscope.scanner.models import FileSystemNode, ScanProgress
from diskscope.utils.formatting import console, print_error, print_info, print_warning

# Conventional exit code for SIGINT
EXIT_CANCELLED = 130


class OutputFormat(str, Enum):
    """Output format options for scan results."""

    TABLE = "table"
    TREE = "tree"
    JSON = "json"


def scan(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(
            help="Directory to scan.",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", min=0, help="Maximum depth to descend (default: unlimited)."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Exclusion pattern ('*.log' suffix, 'cache*' or plain substring). Repeatable.",
        ),
    ] = None,
    top: Annotated[
        int,
        typer.Option("--top", "-n", min=1, help="Number of entries to show per directory."),
    ] = 20,
    min_size: Annotated[
        str | None,
        typer.Option("--min-size", help="Hide entries smaller than this size (e.g. '10 MB')."),
    ] = None,
    levels: Annotated[
        int,
        typer.Option("--levels", min=1, help="Levels rendered by the tree format."),
    ] = 2,
    assess: Annotated[
        bool,
        typer.Option("--assess", help="Add a deletion safety column to the table."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the full tree to a JSON file.",
        ),
    ] = None,
) -> None:
    """Scan a directory and show what uses the most space."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        settings = get_settings()
    except ConfigError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    min_bytes = 0
    if min_size:
        min_bytes = parse_size(min_size)
        if min_bytes == 0:
            print_error(f"Invalid size: {min_size}")
            raise typer.Exit(code=2)

    coordinator = get_default_coordinator()
    try:
        session = coordinator.open_session(
            str(path),
            max_depth=depth if depth is not None else settings.max_depth,
            exclude_patterns=[*settings.exclude_patterns, *(exclude or [])],
            progress_interval=settings.progress_interval,
        )
    except ScanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    started = time.monotonic()
    try:
        root = _run_session(session, show_progress=not quiet)
    except ScanCancelledError as e:
        print_warning("Scan cancelled.")
        raise typer.Exit(code=EXIT_CANCELLED) from e
    except ScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e
    elapsed = time.monotonic() - started

    if export_path is not None:
        _export_tree(root, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(root.to_dict()))
        return

    if output_format == OutputFormat.TREE:
        console.print(create_tree(root, levels=levels, limit=top, min_size=min_bytes))
    else:
        assessments = _assess_children(root) if assess else None
        console.print(create_entries_table(root, limit=top, min_size=min_bytes, assessments=assessments))

    if not quiet:
        progress = session.progress
        console.print(
            f"\n[dim]Scanned {progress.scanned_count} entries, "
            f"{format_size(root.size)} total in {elapsed:.1f}s[/dim]"
        )
        if not root.accessible:
            print_warning(f"{root.path} could not be read.")


# === Private helper functions ===


def _run_session(session: ScanSession, show_progress: bool) -> FileSystemNode:
    """Run a scan session on a worker thread and follow its progress.

    Raises:
        ScanCancelledError: If the scan was cancelled (including Ctrl-C).
        ScanError: If the scan failed.
    """
    # Subscribe before the worker starts so no snapshot is missed
    with (
        closing(session.stream()) as stream,
        ThreadPoolExecutor(max_workers=1, thread_name_prefix="diskscope-scan") as pool,
    ):
        future = pool.submit(session.run)
        try:
            if show_progress:
                with console.status(f"Scanning {session.root}...") as status:
                    for snapshot in stream:
                        status.update(_describe_progress(snapshot))
            else:
                for _ in stream:
                    pass
        except KeyboardInterrupt:
            session.cancel()
        return future.result()


def _describe_progress(snapshot: ScanProgress) -> str:
    return (
        f"Scanning... {snapshot.scanned_count} entries, "
        f"{format_size(snapshot.scanned_size)} [dim]{snapshot.current_path}[/dim]"
    )


def _assess_children(root: FileSystemNode) -> dict[str, DeletionAssessment]:
    return {child.path: get_deletion_assessment(child.path) for child in root.children}


def _export_tree(root: FileSystemNode, export_path: Path) -> None:
    """Export the scanned tree to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(root.to_dict(), indent=2))
        print_info(f"Tree exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
