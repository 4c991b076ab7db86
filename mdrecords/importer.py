"""Batch import of record collections into Markdown documents.

Responsibilities:
- Iterate source records in order and delegate each one to the merge-writer.
- Reject records that cannot be named before any filesystem access.
- Aggregate per-record outcomes into an `ImportSummary`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .config import WriterConfig
from .models.datatypes import ImportSummary
from .parsing import normalize_optional_string
from .telemetry.logger import RunLogger
from .text.slug import SlugNormalizer
from .writer import MarkdownMergeWriter


class RecordImporter:
    """Write a collection of records with one shared writer configuration."""

    def __init__(
        self,
        config: WriterConfig,
        writer: MarkdownMergeWriter | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize the importer, building a default writer from `config`."""

        config.validate()
        self._config = config
        self._run_logger = run_logger
        self._writer = (
            writer
            if writer is not None
            else MarkdownMergeWriter(
                normalizer=SlugNormalizer(strict=config.strict_slugs),
                run_logger=run_logger,
            )
        )

    def import_records(self, records: Iterable[Mapping[str, Any]]) -> ImportSummary:
        """Write every record and return aggregated outcome counts."""

        summary = ImportSummary()
        for position, record in enumerate(records):
            if not self._is_nameable(record):
                reason = (
                    f"Record has no `{self._config.title_field}` value and no usable `slug`."
                )
                if self._run_logger is not None:
                    self._run_logger.log_stage_failure(
                        "resolve", "MissingTitle", position=position
                    )
                summary.record_rejected(position, reason)
                continue

            result = self._writer.write_record(
                self._config.title_field,
                self._config.content_field,
                self._config.output_dir,
                record,
                self._config.never_overwrite,
            )
            summary.record(position, result)

        if self._run_logger is not None:
            self._run_logger.log_import_complete(
                **{status.value: count for status, count in summary.counts.items()}
            )
        return summary

    def _is_nameable(self, record: Mapping[str, Any]) -> bool:
        """Return whether a record carries a title or an explicit slug."""

        slug = normalize_optional_string(record.get("slug"))
        if slug is not None and len(slug) > 1:
            return True
        return record.get(self._config.title_field) is not None
