"""Assess command implementation.

Shows which application a path belongs to and how risky deleting it is.
Classification is lexical, so paths do not need to exist.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from diskscope.api import get_deletion_assessment_response
from diskscope.cli.display import create_assessment_table
from diskscope.safety.models import DeletionAssessment
from diskscope.utils.formatting import console, print_error


class OutputFormat(str, Enum):
    """Output format options for assessments."""

    TABLE = "table"
    JSON = "json"


def assess(
    paths: Annotated[
        list[str],
        typer.Argument(help="Paths to assess."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the owning application and deletion risk of paths."""
    assessments: dict[str, DeletionAssessment] = {}
    failed = False

    for path in paths:
        response = get_deletion_assessment_response(path)
        if response.assessment is None:
            print_error(f"Cannot assess {path}: {response.error}")
            failed = True
            continue
        assessments[path] = response.assessment

    if output_format == OutputFormat.JSON:
        data = {path: assessment.to_dict() for path, assessment in assessments.items()}
        console.print_json(json.dumps(data))
    elif assessments:
        console.print(create_assessment_table(assessments))

    if failed:
        raise typer.Exit(code=1)
