"""Details and open command implementations."""

import json
from typing import Annotated

import typer

from diskscope.api import get_file_details_response, open_in_explorer
from diskscope.cli.display import create_details_table
from diskscope.utils.formatting import console, print_error, print_success


def details(
    path: Annotated[
        str,
        typer.Argument(help="File or directory to inspect."),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print details as JSON."),
    ] = False,
) -> None:
    """Show size, timestamps and attributes of a path."""
    response = get_file_details_response(path)
    if response.details is None:
        print_error(f"Cannot read details of {path}: {response.error}")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(response.details.to_dict()))
        return

    console.print(create_details_table(response.details))


def reveal(
    path: Annotated[
        str,
        typer.Argument(help="File or directory to reveal."),
    ],
) -> None:
    """Reveal a path in the system file manager."""
    response = open_in_explorer(path)
    if not response.success:
        print_error(f"Cannot open {path}: {response.error}")
        raise typer.Exit(code=1)

    print_success(f"Opened {path}")
