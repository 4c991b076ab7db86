"""Typed models used by the slug, writer, and import layers."""

from .datatypes import (
    FrontmatterDocument,
    ImportFailure,
    ImportSummary,
    WriteResult,
    WriteStatus,
)

__all__ = [
    "FrontmatterDocument",
    "ImportFailure",
    "ImportSummary",
    "WriteResult",
    "WriteStatus",
]
