"""Delete command implementation.

Moves paths to the trash (or removes them permanently) after showing
their deletion assessment and asking for confirmation.
"""

from typing import Annotated

import typer

from diskscope.api import delete_files
from diskscope.cli.display import create_assessment_table, create_deletion_results_table
from diskscope.core.config import ConfigError, get_settings
from diskscope.filesystem.operator import DeleteResult, DeletionExecutor
from diskscope.filesystem.sizes import format_size
from diskscope.safety.classifier import get_deletion_assessment
from diskscope.safety.models import SafetyLevel
from diskscope.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def delete(
    paths: Annotated[
        list[str],
        typer.Argument(help="Paths to delete."),
    ],
    permanent: Annotated[
        bool,
        typer.Option("--permanent", help="Remove permanently instead of moving to the trash."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    allow_system: Annotated[
        bool,
        typer.Option("--allow-system", help="Allow deleting paths classified as system files."),
    ] = False,
) -> None:
    """Delete files and directories, to the trash by default."""
    try:
        settings = get_settings()
    except ConfigError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    use_trash = settings.use_trash and not permanent
    protect_system = settings.protect_system and not allow_system

    # Display planned deletions with their risk
    assessments = {path: get_deletion_assessment(path) for path in paths}
    table = create_assessment_table(assessments)
    table.title = "Planned Deletions (dry-run)" if dry_run else "Planned Deletions"
    console.print(table)

    dangerous = [p for p, a in assessments.items() if a.safety_level == SafetyLevel.DANGER]
    if dangerous:
        print_warning(f"{len(dangerous)} path(s) are rated dangerous to delete.")
    if not use_trash and not dry_run:
        print_warning("Paths will be removed permanently and cannot be restored.")

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {len(paths)} path(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    executor = DeletionExecutor(dry_run=dry_run, protect_system=protect_system)
    response = delete_files(paths, use_trash=use_trash, executor=executor)
    if response.result is None:
        print_error(f"Deletion failed: {response.error}")
        raise typer.Exit(code=1)

    _print_deletion_results(response.result)

    # Exit with error if any deletion failed
    if not response.success:
        raise typer.Exit(code=1)


def _print_deletion_results(result: DeleteResult) -> None:
    """Display deletion results and a summary line."""
    console.print(create_deletion_results_table(result))

    freed = format_size(result.freed_size)
    if result.dry_run:
        print_info(f"Dry-run: {len(result.deleted_paths)} path(s) would be deleted ({freed}).")
    elif result.failed_paths:
        print_warning(
            f"{len(result.deleted_paths)} succeeded, {len(result.failed_paths)} failed ({freed} freed)"
        )
    else:
        print_success(f"All {len(result.deleted_paths)} path(s) deleted, {freed} freed.")
