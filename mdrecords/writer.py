"""Merge-and-write logic for Markdown documents with YAML frontmatter.

Responsibilities:
- Resolve the destination filename of a record from its slug or title.
- Merge record fields into any existing document at that destination.
- Skip redundant writes and turn collaborator I/O failures into results.

Key types:
- `MarkdownMergeWriter`: decides whether and what to write for one record.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from os import PathLike
from typing import Any, Mapping

import yaml

from .io.frontmatter_codec import FrontmatterCodec
from .io.storage import FileSystem, LocalFileSystem
from .models.datatypes import FrontmatterDocument, WriteResult, WriteStatus
from .parsing import coerce_text, normalize_optional_string
from .telemetry.logger import RunLogger
from .text.slug import SlugNormalizer

_MARKDOWN_EXTENSION = "md"
_SLUG_FIELD = "slug"
_DATE_FIELD = "date"
_MIN_EXPLICIT_SLUG_LENGTH = 2
_IO_ERRORS = (OSError, UnicodeError, ValueError, yaml.YAMLError)

_STAGE_ACTIONS = {
    "mkdir": "create directory for",
    "exists": "check existence of",
    "write": "write",
}


def utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and `Z`."""

    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def merge_metadata(
    existing: Mapping[str, Any],
    record: Mapping[str, Any],
    content_field: str | None,
) -> dict[str, Any]:
    """Return the shallow union of existing metadata and record fields.

    Record values win on key collisions. The content field never survives in
    the result, even when an existing document carried it.
    """

    merged = dict(existing)
    merged.update(record)
    if content_field:
        merged.pop(content_field, None)
    return merged


def select_body(existing_body: str, candidate_body: str) -> str:
    """Return the longer body, preferring the candidate on ties."""

    if len(existing_body) > len(candidate_body):
        return existing_body
    return candidate_body


class MarkdownMergeWriter:
    """Write one record at a time as a Markdown document with frontmatter."""

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        codec: FrontmatterCodec | None = None,
        normalizer: Callable[[object], str] | None = None,
        clock: Callable[[], str] | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize collaborators, defaulting to local disk and UTC time."""

        self._filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self._codec = codec if codec is not None else FrontmatterCodec()
        self._normalizer = normalizer if normalizer is not None else SlugNormalizer()
        self._clock = clock if clock is not None else utc_timestamp
        self._run_logger = run_logger

    def resolve_stem(self, title_field: str, record: Mapping[str, Any]) -> str:
        """Return the filename stem for a record.

        An explicit `slug` longer than one character (after trimming) is used
        verbatim; otherwise the title field is normalized.
        """

        explicit = normalize_optional_string(record.get(_SLUG_FIELD))
        if explicit is not None and len(explicit) >= _MIN_EXPLICIT_SLUG_LENGTH:
            return str(record[_SLUG_FIELD])
        return self._normalizer(record.get(title_field))

    @staticmethod
    def destination_path(directory: str | PathLike[str], stem: str) -> str:
        """Append `<stem>.md` to the directory without normalizing separators."""

        return f"{directory}/{stem}.{_MARKDOWN_EXTENSION}"

    def write(
        self,
        title_field: str,
        content_field: str | None,
        directory: str | PathLike[str],
        record: Mapping[str, Any],
        never_overwrite: bool = False,
    ) -> bool:
        """Merge `record` into its destination document and report success."""

        return self.write_record(
            title_field, content_field, directory, record, never_overwrite
        ).succeeded

    def write_record(
        self,
        title_field: str,
        content_field: str | None,
        directory: str | PathLike[str],
        record: Mapping[str, Any],
        never_overwrite: bool = False,
    ) -> WriteResult:
        """Merge `record` into its destination document.

        Args:
            title_field: Record key whose value names the document.
            content_field: Record key holding the body text, or `None`.
            directory: Target directory, created when missing.
            record: Field mapping to persist.
            never_overwrite: Leave an existing destination untouched.

        Returns:
            The write decision. Directory, existence-check, and write failures
            produce `FAILED`; an unreadable existing document is treated as
            absent.
        """

        directory_text = str(directory)
        destination = self.destination_path(
            directory_text, self.resolve_stem(title_field, record)
        )

        try:
            self._filesystem.make_directory(directory_text)
        except _IO_ERRORS as exc:
            return self._failed("mkdir", destination, exc)

        try:
            exists = self._filesystem.path_exists(destination)
        except _IO_ERRORS as exc:
            return self._failed("exists", destination, exc)

        existing = FrontmatterDocument()
        if exists:
            if never_overwrite:
                if self._run_logger is not None:
                    self._run_logger.log_document_skipped(destination)
                return WriteResult(status=WriteStatus.SKIPPED_EXISTING, path=destination)
            existing = self._read_existing(destination)

        metadata = merge_metadata(existing.metadata, record, content_field)
        if metadata.get(_DATE_FIELD) is None:
            existing_date = existing.metadata.get(_DATE_FIELD)
            metadata[_DATE_FIELD] = existing_date if existing_date is not None else self._clock()

        candidate_body = ""
        if content_field:
            candidate_body = self._codec.canonical_body(coerce_text(record.get(content_field)))
        body = select_body(existing.body, candidate_body)

        # Compare in re-read form so non-YAML types such as tuples match.
        try:
            text = self._codec.serialize(metadata, body)
            rendered = self._codec.parse(text)
        except _IO_ERRORS as exc:
            return self._failed("write", destination, exc)

        if rendered == existing:
            if self._run_logger is not None:
                self._run_logger.log_document_unchanged(destination)
            return WriteResult(status=WriteStatus.UNCHANGED, path=destination)

        try:
            self._filesystem.write_file(destination, text)
        except _IO_ERRORS as exc:
            return self._failed("write", destination, exc)

        if self._run_logger is not None:
            self._run_logger.log_document_written(destination)
        return WriteResult(status=WriteStatus.WRITTEN, path=destination)

    def _read_existing(self, destination: str) -> FrontmatterDocument:
        """Read and parse an existing document, degrading to an empty one."""

        try:
            text = self._filesystem.read_file(destination, "utf-8")
            return self._codec.parse(text)
        except _IO_ERRORS as exc:
            if self._run_logger is not None:
                self._run_logger.log_read_fallback(destination, type(exc).__name__)
            return FrontmatterDocument()

    def _failed(self, stage: str, destination: str, exc: Exception) -> WriteResult:
        """Build a failure result for a fatal collaborator error."""

        if self._run_logger is not None:
            self._run_logger.log_stage_failure(stage, type(exc).__name__, path=destination)
        return WriteResult(
            status=WriteStatus.FAILED,
            path=destination,
            reason=f"Failed to {_STAGE_ACTIONS[stage]} `{destination}`: {exc}",
        )
