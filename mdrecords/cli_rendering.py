"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and batch import summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import ImportStageError
from .models.datatypes import ImportSummary, WriteStatus


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ImportStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_import_summary(summary: ImportSummary) -> None:
    """Print per-status counts followed by one line per failed record."""

    typer.echo(f"Records: {summary.total}")
    for status in WriteStatus:
        typer.echo(f"{status.value}: {summary.counts[status]}")
    for failure in summary.failures:
        typer.secho(
            f"Record {failure.position} failed: {failure.reason}",
            fg=typer.colors.RED,
            err=True,
        )
