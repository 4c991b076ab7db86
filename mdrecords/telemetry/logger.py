"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic event logs for document writes and imports.
- Route every line through `loguru` with a plain message format.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic event lines for merge-writes and batch imports."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level=level, colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured log line."""

        line = f"[mdrecords] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_document_written(self, path: str) -> None:
        """Emit a document-written event."""

        self._emit("INFO", "written", "write", path=path)

    def log_document_unchanged(self, path: str) -> None:
        """Emit an event for a merge that produced no changes."""

        self._emit("DEBUG", "unchanged", "merge", path=path)

    def log_document_skipped(self, path: str) -> None:
        """Emit an event for an existing document left untouched."""

        self._emit("INFO", "skipped_existing", "exists", path=path)

    def log_read_fallback(self, path: str, error_type: str) -> None:
        """Emit a warning when an existing document could not be read."""

        self._emit("WARNING", "read_fallback", "read", path=path, error_type=error_type)

    def log_stage_failure(self, stage: str, error_type: str, **context: object) -> None:
        """Emit a stage-failure event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type, **context)

    def log_import_complete(self, **counts: object) -> None:
        """Emit the per-status counts of a finished batch import."""

        self._emit("INFO", "complete", "import", **counts)
