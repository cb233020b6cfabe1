"""The ``validate`` command: check a job file without optimising it."""

from pathlib import Path
from typing import Annotated

import typer

from slabcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Check a job file and report pieces that will need joins.

    Exit codes:
        0 - the job is valid
        1 - the job has errors and cannot be optimised
        2 - the job is valid but some pieces will be split or left unplaced

    Example:
        slabcut validate kitchen.json
    """
    typer.echo(f"Checking {config_file}")
    typer.echo()

    try:
        job = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    outcome = validate_config(job)
    if not outcome.is_valid:
        _report_errors(outcome)
    elif outcome.has_warnings:
        _report_warnings(outcome)
    else:
        typer.echo(f"Validation passed. {len(job.pieces)} pieces.")
    if outcome.exit_code:
        raise typer.Exit(code=outcome.exit_code)


def _report_errors(outcome: ValidationResult) -> None:
    lines = ["Errors:"]
    lines += [
        f"  {issue.path}: {issue.message}" if issue.path else f"  {issue.message}"
        for issue in outcome.errors
    ]
    _echo_failure(lines)


def _report_warnings(outcome: ValidationResult) -> None:
    typer.echo("Warnings:")
    for advisory in outcome.warnings:
        typer.echo(f"  {advisory.path}: {advisory.message}")
        if advisory.suggestion:
            typer.echo(f"    Suggestion: {advisory.suggestion}")
    typer.echo()
    typer.echo(f"Validation passed with {len(outcome.warnings)} warning(s)")


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["  Invalid JSON syntax"] + [
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'unknown error')}"
            for d in error.details
        ]
    if error.error_type == "validation":
        lines = []
        for d in error.details:
            lines.append(f"  {d.get('path') or '(root)'}: {d.get('message', 'invalid value')}")
            if d.get("value") is not None:
                lines.append(f"    Value: {d['value']!r}")
        return lines
    return [f"  {error.message}"]


def _echo_failure(lines: list[str]) -> None:
    for line in lines:
        typer.echo(line, err=True)
    typer.echo()
    typer.echo("Validation failed.", err=True)


def display_load_error(error: ConfigError) -> None:
    """Print a job loading error to stderr.

    Shared by every command that reads a job file.
    """
    _echo_failure(["Errors:", *_load_error_lines(error)])
