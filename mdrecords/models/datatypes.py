"""Core datatypes shared across mdrecords modules.

Responsibilities:
- Represent parsed frontmatter documents and merge-write outcomes.
- Provide explicit typing for batch import summaries.

Key types:
- `FrontmatterDocument`, `WriteStatus`, `WriteResult`, `ImportFailure`,
  and `ImportSummary`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class FrontmatterDocument:
    """A Markdown document split into its metadata block and body.

    Attributes:
        metadata: Parsed frontmatter mapping. Empty when the text has no block.
        body: Text following the closing metadata marker.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""


class WriteStatus(str, Enum):
    """Outcome of one merge-write call."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED_EXISTING = "skipped_existing"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Result of merging one record into its destination document.

    Attributes:
        status: Final write decision.
        path: Destination path the record resolved to.
        reason: Failure description for `FAILED` results.
    """

    status: WriteStatus
    path: str
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the call counts as success at the boolean boundary."""

        return self.status is not WriteStatus.FAILED


@dataclass(frozen=True, slots=True)
class ImportFailure:
    """A record that could not be written during a batch import.

    Attributes:
        position: 0-based position of the record in the source collection.
        reason: Human-readable failure reason.
        path: Destination path, when one was resolved.
    """

    position: int
    reason: str
    path: str | None = None


@dataclass(slots=True)
class ImportSummary:
    """Aggregated outcome counts for one batch import."""

    counts: dict[WriteStatus, int] = field(
        default_factory=lambda: {status: 0 for status in WriteStatus}
    )
    failures: list[ImportFailure] = field(default_factory=list)

    def record(self, position: int, result: WriteResult) -> None:
        """Count one write result, keeping failure details."""

        self.counts[result.status] += 1
        if result.status is WriteStatus.FAILED:
            self.failures.append(
                ImportFailure(
                    position=position,
                    reason=result.reason or "unknown failure",
                    path=result.path,
                )
            )

    def record_rejected(self, position: int, reason: str) -> None:
        """Count a record that was rejected before reaching the writer."""

        self.counts[WriteStatus.FAILED] += 1
        self.failures.append(ImportFailure(position=position, reason=reason))

    @property
    def total(self) -> int:
        """Return the number of processed records."""

        return sum(self.counts.values())

    @property
    def failed(self) -> int:
        """Return the number of failed records."""

        return self.counts[WriteStatus.FAILED]

    @property
    def ok(self) -> bool:
        """Return whether every record succeeded."""

        return self.failed == 0
