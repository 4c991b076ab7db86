"""Unit tests for record source loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdrecords.errors import RecordSourceError
from mdrecords.io.record_source import load_records, records_from_payload


def test_load_records_reads_json_list(tmp_path: Path) -> None:
    """A JSON list of objects should load as plain dict records."""

    source = tmp_path / "records.json"
    source.write_text('[{"title": "One", "content": "Body"}, {"slug": "two"}]', encoding="utf-8")

    assert load_records(source) == [{"title": "One", "content": "Body"}, {"slug": "two"}]


def test_load_records_reads_yaml_records_mapping(tmp_path: Path) -> None:
    """A YAML mapping with a `records` list should load its records in order."""

    source = tmp_path / "records.YML"
    source.write_text(
        "records:\n  - title: First\n    date: 2025-01-01\n  - title: Second\n    1: one\n",
        encoding="utf-8",
    )

    assert load_records(source) == [
        {"title": "First", "date": "2025-01-01"},
        {"title": "Second", "1": "one"},
    ]


def test_load_records_propagates_missing_file(tmp_path: Path) -> None:
    """A missing source file should surface as `FileNotFoundError`."""

    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "absent.json")


@pytest.mark.parametrize(
    ("filename", "text", "message"),
    [
        ("records.csv", "title\nOne\n", "Unsupported record source"),
        ("records.json", "[{", "Invalid JSON"),
        ("records.yaml", "records: [unclosed\n", "Invalid YAML"),
    ],
)
def test_load_records_rejects_unreadable_sources(
    tmp_path: Path, filename: str, text: str, message: str
) -> None:
    """Unsupported suffixes and undecodable payloads should raise `RecordSourceError`."""

    source = tmp_path / filename
    source.write_text(text, encoding="utf-8")

    with pytest.raises(RecordSourceError, match=message):
        load_records(source)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"items": []}, "must be a list or hold a `records` list"),
        ("just text", "must contain a list of records"),
        ([{"title": "ok"}, "nope"], r"Record 1 in `src` must be a mapping, got `str`"),
    ],
)
def test_records_from_payload_rejects_bad_shapes(payload: object, message: str) -> None:
    """Payloads that are not lists of mappings should be rejected with context."""

    with pytest.raises(RecordSourceError, match=message):
        records_from_payload(payload, source_label="`src`")
