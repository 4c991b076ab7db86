"""Filesystem abstraction used by the merge-writer.

Responsibilities:
- Define the filesystem protocol the writer depends on.
- Provide a pathlib-backed default implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for the filesystem operations used by document writes."""

    def path_exists(self, path: str) -> bool:
        """Return whether a file or directory exists at `path`."""

    def make_directory(self, path: str) -> None:
        """Create `path` and any missing parents; succeed when it exists."""

    def read_file(self, path: str, encoding: str = "utf-8") -> str:
        """Return the decoded text content of `path`."""

    def write_file(self, path: str, contents: str) -> None:
        """Replace the content of `path` with UTF-8 encoded `contents`."""


class LocalFileSystem:
    """Filesystem operations on the local disk."""

    def path_exists(self, path: str) -> bool:
        return Path(path).exists()

    def make_directory(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def read_file(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def write_file(self, path: str, contents: str) -> None:
        Path(path).write_text(contents, encoding="utf-8")
