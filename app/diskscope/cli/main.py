"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from diskscope import __version__
from diskscope.cli.commands import assess, config, delete, details, scan

# Create main Typer app
app = typer.Typer(
    name="diskscope",
    help="Disk usage analysis and safe cleanup.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"diskscope version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """diskscope - Find what fills your disk and clean it up safely.

    Scan a directory into a size-sorted tree, see which application
    owns a path and how risky deleting it is, then move it to the trash.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="assess")(assess.assess)
app.command(name="delete")(delete.delete)
app.command(name="details")(details.details)
app.command(name="open")(details.reveal)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
