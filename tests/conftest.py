"""Shared pytest fixtures for the full mdrecords test suite."""

from __future__ import annotations

import pytest

from mdrecords.writer import MarkdownMergeWriter

FIXED_TIMESTAMP = "2026-01-02T03:04:05.678Z"


class RecordingFileSystem:
    """In-memory filesystem that records every call and can inject failures."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.directories: list[str] = []
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[str, Exception] = {}

    def _enter(self, operation: str, path: str) -> None:
        self.calls.append((operation, path))
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure

    def operations(self) -> list[str]:
        """Return the recorded operation names in call order."""

        return [operation for operation, _ in self.calls]

    def path_exists(self, path: str) -> bool:
        self._enter("path_exists", path)
        return path in self.files

    def make_directory(self, path: str) -> None:
        self._enter("make_directory", path)
        self.directories.append(path)

    def read_file(self, path: str, encoding: str = "utf-8") -> str:
        self._enter("read_file", path)
        return self.files[path]

    def write_file(self, path: str, contents: str) -> None:
        self._enter("write_file", path)
        self.files[path] = contents


@pytest.fixture
def filesystem() -> RecordingFileSystem:
    """Provide an empty recording filesystem."""

    return RecordingFileSystem()


@pytest.fixture
def writer(filesystem: RecordingFileSystem) -> MarkdownMergeWriter:
    """Provide a merge-writer over the recording filesystem with a fixed clock."""

    return MarkdownMergeWriter(filesystem=filesystem, clock=lambda: FIXED_TIMESTAMP)
