"""Configuration model and loaders for mdrecords imports.

Responsibilities:
- Define import settings as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Resolve CLI overrides on top of loaded defaults.

Key types:
- `WriterConfig`: normalized settings for one batch import.
- `ConfigLoader`: static construction helpers for `WriterConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_required_boolean


_DEFAULT_TITLE_FIELD = "title"
_DEFAULT_CONTENT_FIELD = "content"
_DEFAULT_OUTPUT_DIR = Path("out")


@dataclass(slots=True)
class WriterConfig:
    """Settings for writing a collection of records as Markdown documents.

    Attributes:
        output_dir: Directory receiving the `<slug>.md` documents.
        title_field: Record key used to derive slugs.
        content_field: Record key holding the document body, or `None` when
            records carry metadata only.
        never_overwrite: Leave existing documents untouched.
        strict_slugs: Drop characters of scripts without a registered
            romanizer instead of transliterating them generically.
        extra: Additional metadata for future extensions.
    """

    output_dir: Path = _DEFAULT_OUTPUT_DIR
    title_field: str = _DEFAULT_TITLE_FIELD
    content_field: str | None = _DEFAULT_CONTENT_FIELD
    never_overwrite: bool = False
    strict_slugs: bool = False
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate field names before any record is written."""

        if not isinstance(self.title_field, str) or not self.title_field.strip():
            raise ValueError("`title_field` must be a non-empty string.")
        if self.content_field is not None and not self.content_field.strip():
            raise ValueError("`content_field` must be a non-empty string when set.")

    def with_overrides(self, **overrides: object) -> WriterConfig:
        """Return a validated copy with non-`None` overrides applied."""

        applied = {key: value for key, value in overrides.items() if value is not None}
        applied.setdefault("extra", dict(self.extra))
        updated = replace(self, **applied)
        updated.validate()
        return updated


class ConfigLoader:
    """Factory methods for creating `WriterConfig` from external sources."""

    _REQUIRED_YAML_KEYS = frozenset({"output_dir"})
    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "output_dir",
            "title_field",
            "content_field",
            "never_overwrite",
            "strict_slugs",
            "extra",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> WriterConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> WriterConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        output_dir = normalize_optional_string(env_map.get("MDRECORDS_OUTPUT_DIR"))
        title_field = normalize_optional_string(env_map.get("MDRECORDS_TITLE_FIELD"))
        content_field = normalize_optional_string(env_map.get("MDRECORDS_CONTENT_FIELD"))

        config = WriterConfig(
            output_dir=Path(output_dir) if output_dir is not None else _DEFAULT_OUTPUT_DIR,
            title_field=title_field or _DEFAULT_TITLE_FIELD,
            content_field=content_field or _DEFAULT_CONTENT_FIELD,
            never_overwrite=ConfigLoader._optional_env_boolean(
                env_map, "MDRECORDS_NEVER_OVERWRITE"
            ),
            strict_slugs=ConfigLoader._optional_env_boolean(env_map, "MDRECORDS_STRICT_SLUGS"),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> WriterConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        output_dir = normalize_optional_string(payload.get("output_dir"))
        if output_dir is None:
            raise ValueError(f"{source_label} requires non-empty `output_dir`.")

        title_field = (
            normalize_optional_string(payload.get("title_field")) or _DEFAULT_TITLE_FIELD
        )
        if "content_field" in payload and payload["content_field"] is None:
            content_field = None
        else:
            content_field = (
                normalize_optional_string(payload.get("content_field"))
                or _DEFAULT_CONTENT_FIELD
            )

        config = WriterConfig(
            output_dir=Path(output_dir),
            title_field=title_field,
            content_field=content_field,
            never_overwrite=ConfigLoader._optional_boolean(payload, "never_overwrite"),
            strict_slugs=ConfigLoader._optional_boolean(payload, "strict_slugs"),
            extra=ConfigLoader._optional_string_map(payload, "extra", source_label),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _optional_boolean(payload: Mapping[str, Any], key: str) -> bool:
        """Read an optional boolean field, defaulting to `False`."""

        if key not in payload or normalize_optional_string(payload[key]) is None:
            return False
        return parse_required_boolean(payload[key], key)

    @staticmethod
    def _optional_env_boolean(env_map: Mapping[str, str], key: str) -> bool:
        """Read an optional boolean environment variable, defaulting to `False`."""

        value = normalize_optional_string(env_map.get(key))
        if value is None:
            return False
        return parse_required_boolean(value, key)

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping of stripped string values."""

        if key not in payload or payload[key] is None:
            return {}
        value = payload[key]
        if not isinstance(value, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping.")
        normalized: dict[str, str] = {}
        for item_key, item_value in value.items():
            text = normalize_optional_string(item_value)
            if text is not None:
                normalized[str(item_key)] = text
        return normalized
