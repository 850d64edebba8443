"""Shared Rich display functions for scan trees, assessments and deletions.

Provides reusable table and tree builders used across CLI commands.
"""

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from diskscope.filesystem.details import FileDetails
from diskscope.filesystem.operator import DeleteResult
from diskscope.filesystem.sizes import calculate_percent, format_size, is_large_file, size_level
from diskscope.safety.models import DeletionAssessment, SafetyLevel
from diskscope.scanner.models import FileSystemNode


def format_safety(level: SafetyLevel) -> str:
    """Format a safety level with its theme style."""
    return f"[{level.value}]{level.value}[/]"


def _node_label(node: FileSystemNode) -> str:
    name = escape(node.name)
    if not node.accessible:
        return f"[inaccessible]{name} (inaccessible)[/]"
    if node.is_directory:
        return f"[directory]{name}/[/]"
    if is_large_file(node.size):
        return f"[file]{name}[/] [warning](large)[/]"
    return f"[file]{name}[/]"


def _visible_children(
    node: FileSystemNode,
    limit: int | None,
    min_size: int,
) -> list[FileSystemNode]:
    children = [child for child in node.children if child.size >= min_size]
    return children[:limit] if limit else children


def create_entries_table(
    root: FileSystemNode,
    limit: int | None = None,
    min_size: int = 0,
    assessments: dict[str, DeletionAssessment] | None = None,
) -> Table:
    """Create a table of the direct children of a scanned directory.

    Children are already ordered largest first. The share column is
    relative to the size of ``root`` and colored by size level.

    Args:
        root: Scanned directory node.
        limit: Maximum number of rows.
        min_size: Hide entries smaller than this many bytes.
        assessments: Optional deletion assessments keyed by path.

    Returns:
        Rich Table with one row per entry.
    """
    table = Table(
        title=f"{escape(root.path)} ({format_size(root.size)})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Type", width=9)
    table.add_column("Size", justify="right", width=10)
    table.add_column("Share", justify="right", width=7)
    if assessments is not None:
        table.add_column("Safety", width=8)

    for child in _visible_children(root, limit, min_size):
        style = f"size.{size_level(child.size, root.size)}"
        share = calculate_percent(child.size, root.size)
        row = [
            _node_label(child),
            child.kind.value,
            format_size(child.size),
            f"[{style}]{share:.1f}%[/]",
        ]
        if assessments is not None:
            assessment = assessments.get(child.path)
            row.append(format_safety(assessment.safety_level) if assessment else "-")
        table.add_row(*row)

    return table


def create_tree(
    root: FileSystemNode,
    levels: int = 2,
    limit: int | None = 10,
    min_size: int = 0,
) -> Tree:
    """Render a scanned hierarchy as a Rich tree.

    Args:
        root: Scanned root node.
        levels: Number of levels below the root to render.
        limit: Maximum number of children rendered per directory.
        min_size: Hide entries smaller than this many bytes.

    Returns:
        Rich Tree of the largest entries.
    """
    tree = Tree(f"{_node_label(root)} [info]{format_size(root.size)}[/]")
    pending: list[tuple[FileSystemNode, Tree, int]] = [(root, tree, 0)]

    while pending:
        node, branch, level = pending.pop()
        if level >= levels:
            continue
        for child in _visible_children(node, limit, min_size):
            share = calculate_percent(child.size, node.size)
            sub = branch.add(
                f"{_node_label(child)} [info]{format_size(child.size)}[/] [muted]{share:.1f}%[/]"
            )
            if child.is_directory:
                pending.append((child, sub, level + 1))

    return tree


def create_assessment_table(assessments: dict[str, DeletionAssessment]) -> Table:
    """Create a table of deletion assessments keyed by path."""
    table = Table(
        title="Deletion Assessment",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold", no_wrap=True)
    table.add_column("Application")
    table.add_column("Type", width=10)
    table.add_column("Confidence", justify="right", width=10)
    table.add_column("Safety", width=8)
    table.add_column("Reason", style="muted")

    for path, assessment in assessments.items():
        app = assessment.associated_app
        reason = assessment.reason
        if assessment.impact:
            reason = f"{reason}. {assessment.impact}"
        table.add_row(
            escape(path),
            escape(app.app_name) if app else "-",
            app.association_type.value if app else "-",
            f"{app.confidence}%" if app else "-",
            format_safety(assessment.safety_level),
            reason,
        )

    return table


def create_details_table(details: FileDetails) -> Table:
    """Create a two-column table of file details."""
    table = Table(title=escape(details.path), show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value")

    flags = [
        name
        for name, enabled in (
            ("hidden", details.is_hidden),
            ("system", details.is_system),
            ("read-only", details.is_read_only),
        )
        if enabled
    ]

    table.add_row("Name", escape(details.name))
    table.add_row("Type", details.kind.value)
    table.add_row("Size", f"{format_size(details.size)} ({details.size} bytes)")
    table.add_row("Extension", details.extension or "-")
    table.add_row("Created", details.created_at)
    table.add_row("Modified", details.modified_at)
    table.add_row("Accessed", details.accessed_at)
    table.add_row("Attributes", ", ".join(flags) or "-")
    return table


def create_deletion_results_table(result: DeleteResult) -> Table:
    """Create a table with one row per requested path."""
    table = Table(title="Deletion Results", show_lines=False, border_style="border")
    table.add_column("Path", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    for path in result.deleted_paths:
        status = "[info]dry-run[/]" if result.dry_run else "[success]deleted[/]"
        table.add_row(escape(path), status, "Would delete" if result.dry_run else "")
    for failed in result.failed_paths:
        table.add_row(escape(failed.path), "[error]failed[/]", escape(failed.reason))

    return table
