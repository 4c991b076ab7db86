"""YAML frontmatter parsing and serialization.

Responsibilities:
- Split Markdown text into a metadata mapping and a body.
- Render metadata with lexicographically sorted keys ahead of the body.
- Keep ISO timestamps as strings so re-read documents compare equal to the
  values originally written.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

import frontmatter
from frontmatter.default_handlers import YAMLHandler
import yaml

from ..errors import FrontmatterError
from ..models.datatypes import FrontmatterDocument

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(resolvers: dict) -> dict:
    return {
        first_char: [(tag, pattern) for tag, pattern in entries if tag != _TIMESTAMP_TAG]
        for first_char, entries in resolvers.items()
    }


class TimestampPreservingLoader(yaml.SafeLoader):
    """Safe YAML loader that leaves timestamp scalars as plain strings."""

    yaml_implicit_resolvers = _without_timestamps(yaml.SafeLoader.yaml_implicit_resolvers)


class TimestampPreservingDumper(yaml.SafeDumper):
    """Safe YAML dumper that writes timestamp-like strings unquoted."""

    yaml_implicit_resolvers = _without_timestamps(yaml.SafeDumper.yaml_implicit_resolvers)


def _represent_isoformat(dumper: yaml.SafeDumper, value: date) -> yaml.ScalarNode:
    return dumper.represent_str(value.isoformat())


TimestampPreservingDumper.add_representer(date, _represent_isoformat)
TimestampPreservingDumper.add_representer(datetime, _represent_isoformat)


def load_yaml(text: str) -> Any:
    """Parse YAML text with timestamp scalars kept as strings."""

    return yaml.load(text, Loader=TimestampPreservingLoader)


class _SortedYAMLHandler(YAMLHandler):
    """Frontmatter handler with string timestamps and sorted key output."""

    def load(self, fm: str, **kwargs: object) -> Any:
        return load_yaml(fm)

    def export(self, metadata: dict[str, object], **kwargs: object) -> str:
        kwargs.setdefault("Dumper", TimestampPreservingDumper)
        kwargs.setdefault("sort_keys", True)
        return super().export(metadata, **kwargs)


class FrontmatterCodec:
    """Parse and render `---` delimited YAML frontmatter documents."""

    def __init__(self) -> None:
        """Initialize the YAML handler shared by parse and serialize."""

        self._handler = _SortedYAMLHandler()

    def parse(self, text: str) -> FrontmatterDocument:
        """Split text into metadata and body.

        Text without a leading metadata block yields empty metadata and the
        whole (trimmed) text as body.

        Raises:
            FrontmatterError: If the metadata block is not valid YAML or not a
                mapping.
        """

        if not self._handler.detect(text.lstrip()):
            return FrontmatterDocument(metadata={}, body=self.canonical_body(text))

        try:
            metadata_text, body = self._handler.split(text.strip())
            metadata = self._handler.load(metadata_text)
        except ValueError as exc:
            raise FrontmatterError(f"Unterminated frontmatter block: {exc}") from exc
        except yaml.YAMLError as exc:
            raise FrontmatterError(f"Invalid frontmatter YAML: {exc}") from exc

        if metadata is None:
            metadata = {}
        if not isinstance(metadata, Mapping):
            raise FrontmatterError(
                f"Frontmatter must be a mapping, got `{type(metadata).__name__}`."
            )
        return FrontmatterDocument(
            metadata=dict(metadata),
            body=self.canonical_body(body),
        )

    def serialize(self, metadata: Mapping[str, Any], body: str) -> str:
        """Render metadata with sorted keys followed by the body."""

        post = frontmatter.Post(body)
        post.metadata.update(metadata)
        return frontmatter.dumps(post, handler=self._handler, sort_keys=True) + "\n"

    @staticmethod
    def canonical_body(body: str) -> str:
        """Return the body as it reads back after a serialize/parse cycle."""

        return body.strip()
