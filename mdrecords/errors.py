"""Domain exceptions for record import and CLI diagnostics."""

from __future__ import annotations


class ImportStageError(RuntimeError):
    """Raised when a specific import stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped import error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class FrontmatterError(ValueError):
    """Raised when a document's metadata block cannot be read as a mapping."""


class RecordSourceError(ValueError):
    """Raised when a record source file does not hold a list of mappings."""
