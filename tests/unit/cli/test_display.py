"""Unit tests for cli/display.py.

Tests for the shared Rich tables and trees used by the commands.
"""

import io

import pytest
from diskscope.cli.display import (
    create_assessment_table,
    create_deletion_results_table,
    create_details_table,
    create_entries_table,
    create_tree,
)
from diskscope.core.theme import get_theme
from diskscope.filesystem.details import FileDetails
from diskscope.filesystem.operator import DeleteResult, FailedPath
from diskscope.safety.classifier import get_deletion_assessment
from diskscope.scanner.models import FileSystemNode, NodeKind
from rich.console import Console, RenderableType

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _leaf(parent: str, name: str, size: int, depth: int = 1) -> FileSystemNode:
    return FileSystemNode(
        path=f"{parent}/{name}",
        name=name,
        kind=NodeKind.FILE,
        size=size,
        depth=depth,
        parent_path=parent,
    )


@pytest.fixture
def scanned_root() -> FileSystemNode:
    """A scanned root with a nested directory and three files."""
    photos = FileSystemNode(
        path="/data/photos",
        name="photos",
        kind=NodeKind.DIRECTORY,
        size=600,
        depth=1,
        parent_path="/data",
        children=(_leaf("/data/photos", "beach.jpg", 600, depth=2),),
    )
    return FileSystemNode(
        path="/data",
        name="data",
        kind=NodeKind.DIRECTORY,
        size=1000,
        depth=0,
        children=(
            photos,
            _leaf("/data", "[draft].txt", 300),
            _leaf("/data", "tiny.log", 100),
        ),
    )


def _render(renderable: RenderableType) -> str:
    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)
    test_console.print(renderable)
    return buf.getvalue()


# ===========================================================================
# create_entries_table
# ===========================================================================


class TestCreateEntriesTable:
    """Tests for create_entries_table."""

    def test_columns(self, scanned_root: FileSystemNode) -> None:
        """Table has Name, Type, Size and Share columns."""
        table = create_entries_table(scanned_root)
        assert [col.header for col in table.columns] == ["Name", "Type", "Size", "Share"]

    def test_rows_and_shares(self, scanned_root: FileSystemNode) -> None:
        """Each child is listed with its share of the root."""
        output = _render(create_entries_table(scanned_root))

        assert "photos/" in output
        assert "60.0%" in output
        assert "[draft].txt" in output
        assert "30.0%" in output

    def test_limit_and_min_size(self, scanned_root: FileSystemNode) -> None:
        """limit and min_size reduce the rows."""
        assert create_entries_table(scanned_root, limit=2).row_count == 2
        assert create_entries_table(scanned_root, min_size=200).row_count == 2

    def test_safety_column(self, scanned_root: FileSystemNode) -> None:
        """Assessments add a Safety column."""
        assessments = {c.path: get_deletion_assessment(c.path) for c in scanned_root.children}

        table = create_entries_table(scanned_root, assessments=assessments)

        assert table.columns[-1].header == "Safety"
        assert "caution" in _render(table)


# ===========================================================================
# create_tree
# ===========================================================================


class TestCreateTree:
    """Tests for create_tree."""

    def test_levels(self, scanned_root: FileSystemNode) -> None:
        """Only the requested number of levels is rendered."""
        assert "beach.jpg" in _render(create_tree(scanned_root, levels=2))
        assert "beach.jpg" not in _render(create_tree(scanned_root, levels=1))

    def test_limit(self, scanned_root: FileSystemNode) -> None:
        """Each directory shows at most limit children."""
        output = _render(create_tree(scanned_root, levels=1, limit=1))

        assert "photos/" in output
        assert "tiny.log" not in output


# ===========================================================================
# Other tables
# ===========================================================================


class TestOtherTables:
    """Tests for assessment, details and deletion result tables."""

    def test_assessment_table(self) -> None:
        """Assessments show application, type, confidence and safety."""
        path = r"C:\Windows\System32\kernel32.dll"

        output = _render(create_assessment_table({path: get_deletion_assessment(path)}))

        assert "Windows System" in output
        assert "system" in output
        assert "90%" in output
        assert "danger" in output

    def test_details_table(self) -> None:
        """Details list size and attributes."""
        details = FileDetails(
            name=".env",
            path="/srv/app/.env",
            size=2048,
            kind=NodeKind.FILE,
            created_at="2024-01-01T00:00:00+00:00",
            modified_at="2024-01-02T00:00:00+00:00",
            accessed_at="2024-01-03T00:00:00+00:00",
            extension=None,
            is_hidden=True,
            is_system=False,
            is_read_only=True,
        )

        output = _render(create_details_table(details))

        assert "2 KB (2048 bytes)" in output
        assert "hidden, read-only" in output

    def test_deletion_results_table(self) -> None:
        """Deleted and failed paths each get a row."""
        result = DeleteResult(
            success=False,
            deleted_paths=["/tmp/a"],
            freed_size=1,
            failed_paths=[FailedPath(path="/tmp/b", reason="Permission denied")],
        )

        table = create_deletion_results_table(result)
        output = _render(table)

        assert table.row_count == 2
        assert "deleted" in output
        assert "failed" in output
        assert "Permission denied" in output

    def test_dry_run_rows(self) -> None:
        """Dry-run rows are labelled as such."""
        result = DeleteResult(deleted_paths=["/tmp/a"], dry_run=True)
        assert "dry-run" in _render(create_deletion_results_table(result))
