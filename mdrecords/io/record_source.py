"""Record source loading for batch imports.

Responsibilities:
- Read JSON or YAML files holding a collection of records.
- Validate the payload shape before any document is written.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import RecordSourceError
from .frontmatter_codec import load_yaml

_JSON_SUFFIXES = frozenset({".json"})
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load records from a `.json`, `.yaml`, or `.yml` file.

    The payload is either a list of mappings or a mapping with a `records`
    list.

    Raises:
        FileNotFoundError: If `path` does not exist.
        RecordSourceError: If the file type or payload shape is unsupported.
    """

    suffix = path.suffix.lower()
    raw_text = path.read_text(encoding="utf-8")
    if suffix in _JSON_SUFFIXES:
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise RecordSourceError(f"Invalid JSON in `{path}`: {exc}") from exc
    elif suffix in _YAML_SUFFIXES:
        try:
            payload = load_yaml(raw_text)
        except yaml.YAMLError as exc:
            raise RecordSourceError(f"Invalid YAML in `{path}`: {exc}") from exc
    else:
        supported = ", ".join(sorted(_JSON_SUFFIXES | _YAML_SUFFIXES))
        raise RecordSourceError(
            f"Unsupported record source `{path}`; supported suffixes: {supported}."
        )

    return records_from_payload(payload, source_label=f"`{path}`")


def records_from_payload(payload: Any, source_label: str) -> list[dict[str, Any]]:
    """Validate a decoded payload and return its records as plain dicts."""

    if isinstance(payload, Mapping):
        if "records" not in payload:
            raise RecordSourceError(
                f"Record source {source_label} must be a list or hold a `records` list."
            )
        payload = payload["records"]

    if not isinstance(payload, list):
        raise RecordSourceError(f"Record source {source_label} must contain a list of records.")

    records: list[dict[str, Any]] = []
    for position, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise RecordSourceError(
                f"Record {position} in {source_label} must be a mapping, "
                f"got `{type(item).__name__}`."
            )
        records.append({str(key): value for key, value in item.items()})
    return records
