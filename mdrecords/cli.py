"""Command-line interface for mdrecords.

Responsibilities:
- Expose user-facing commands for slug normalization and record import.
- Convert CLI arguments into `WriterConfig` and run the importer.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from .cli_rendering import echo_import_summary, exit_with_command_error
from .config import ConfigLoader, WriterConfig
from .errors import ImportStageError, RecordSourceError
from .importer import RecordImporter
from .io.record_source import load_records
from .telemetry.logger import RunLogger
from .text.slug import normalize_slug

app = typer.Typer(
    name="mdrecords",
    no_args_is_help=True,
    help="Write structured records as Markdown documents with YAML frontmatter.",
)


def _load_base_config(config_path: Path | None) -> WriterConfig:
    """Load the YAML config file when given, else environment defaults."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise ImportStageError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Check the `MDRECORDS_*` environment variables.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise ImportStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ImportStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_import_config(
    config_file: Path | None,
    out: Path | None,
    title_field: str | None,
    content_field: str | None,
    never_overwrite: bool | None,
    strict_slugs: bool | None,
) -> WriterConfig:
    """Resolve effective import config from defaults and explicit CLI overrides."""

    base_config = _load_base_config(config_file)
    try:
        return base_config.with_overrides(
            output_dir=out,
            title_field=title_field,
            content_field=content_field,
            never_overwrite=never_overwrite,
            strict_slugs=strict_slugs,
        )
    except ValueError as exc:
        raise ImportStageError(stage="config", detail=str(exc)) from exc


def _load_source_records(source: Path) -> list[dict[str, Any]]:
    """Load source records and map failures to stage errors."""

    try:
        return load_records(source)
    except FileNotFoundError as exc:
        raise ImportStageError(
            stage="source",
            detail=f"Record source not found: `{source}`.",
            hint="Pass an existing `.json`, `.yaml`, or `.yml` file.",
        ) from exc
    except RecordSourceError as exc:
        raise ImportStageError(
            stage="source",
            detail=str(exc),
            hint="Provide a list of records or a mapping with a `records` list.",
        ) from exc


@app.command("slug")
def slug_command(
    text: Annotated[str, typer.Argument(help="Text to normalize.")],
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Drop characters of scripts without a dedicated romanizer.",
        ),
    ] = False,
) -> None:
    """Print the slug for a piece of text."""

    typer.echo(normalize_slug(text, strict=strict))


@app.command("import")
def import_command(
    source: Annotated[Path, typer.Argument(help="JSON or YAML file holding the records.")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with command defaults."),
    ] = None,
    title_field: Annotated[
        str | None,
        typer.Option("--title-field", help="Record field used to derive slugs."),
    ] = None,
    content_field: Annotated[
        str | None,
        typer.Option("--content-field", help="Record field written as the document body."),
    ] = None,
    never_overwrite: Annotated[
        bool | None,
        typer.Option(
            "--never-overwrite/--overwrite",
            help="Leave existing documents untouched instead of merging into them.",
        ),
    ] = None,
    strict_slugs: Annotated[
        bool | None,
        typer.Option(
            "--strict-slugs/--no-strict-slugs",
            help="Drop characters of scripts without a dedicated romanizer.",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Only log warnings and failures."),
    ] = False,
) -> None:
    """Write every record of SOURCE as a Markdown document."""

    try:
        config = _resolve_import_config(
            config_file=config_file,
            out=out,
            title_field=title_field,
            content_field=content_field,
            never_overwrite=never_overwrite,
            strict_slugs=strict_slugs,
        )
        records = _load_source_records(source)
        importer = RecordImporter(
            config,
            run_logger=RunLogger(level="WARNING" if quiet else "INFO"),
        )
        summary = importer.import_records(records)
    except Exception as exc:
        exit_with_command_error("import", exc)

    echo_import_summary(summary)
    if not summary.ok:
        raise typer.Exit(code=1)


def main() -> None:
    """Run the mdrecords CLI."""

    app()
