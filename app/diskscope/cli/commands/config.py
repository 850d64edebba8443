"""Config commands.

Show, create and locate the settings file.
"""

import json
from typing import Annotated

import typer

from diskscope.core.config import ConfigError, ScanSettings, get_settings, save_settings
from diskscope.core.paths import ensure_config_dir, get_config_path
from diskscope.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage diskscope settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print settings as JSON."),
    ] = False,
) -> None:
    """Show the effective settings."""
    try:
        settings = get_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if as_json:
        console.print_json(settings.model_dump_json())
        return

    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "defaults (no settings file)"
    console.print(f"[bold_header]Settings[/] [muted]from {source}[/]")
    for name, value in settings.model_dump().items():
        console.print(f"  {name} = {json.dumps(value)}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Create a settings file with default values."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Settings file already exists: {config_path}")
        print_info("Use --force to overwrite it with defaults.")
        return

    try:
        ensure_config_dir()
        saved = save_settings(ScanSettings(), config_path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")


@app.command()
def path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_config_path()))
