"""Deterministic slug helpers for Markdown document filenames.

Responsibilities:
- Normalize free-form titles in any script into stable ASCII slugs.
- Keep slug behavior locale-independent for reproducible filenames.
"""

from __future__ import annotations

import re
import unicodedata

from slugify import slugify

from .romanizers import DEFAULT_REGISTRY, RomanizerRegistry, romanize_with_unidecode, script_of

_SYMBOL_WORDS = (("&", "-and-"),)
_PATH_SEPARATORS = re.compile(r"[/\\]+")
_ALPHANUMERIC = re.compile(r"[a-z0-9]")
_DROPPED_CATEGORY_PREFIXES = ("S", "M", "C")


class SlugNormalizer:
    """Turn human-readable text into a lowercase hyphen-delimited slug.

    Non-ASCII characters are romanized through a script registry. In strict
    mode only registered scripts are romanized and anything else is dropped;
    otherwise unknown scripts fall back to generic transliteration.
    """

    def __init__(
        self,
        registry: RomanizerRegistry | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize the normalizer with a script registry and mode flag."""

        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._strict = strict

    @property
    def strict(self) -> bool:
        """Return whether unregistered scripts are dropped."""

        return self._strict

    def __call__(self, value: object) -> str:
        return self.normalize(value)

    def normalize(self, value: object) -> str:
        """Return the slug for `value`; never raises."""

        if value is None:
            return ""
        lowered = str(value).lower()
        romanized = "".join(self._romanize_char(char) for char in lowered)
        if not _ALPHANUMERIC.search(romanized):
            return ""

        for symbol, word in _SYMBOL_WORDS:
            romanized = romanized.replace(symbol, word)
        romanized = _PATH_SEPARATORS.sub("-", romanized)
        return slugify(romanized, separator="-", lowercase=True)

    def _romanize_char(self, char: str) -> str:
        """Romanize one lowercase character to ASCII text."""

        if char.isascii():
            return char

        category = unicodedata.category(char)
        if category.startswith("Z"):
            return " "

        romanizer = self._registry.get(script_of(char))
        if romanizer is not None:
            return romanizer(char)
        if category.startswith(_DROPPED_CATEGORY_PREFIXES) or self._strict:
            return ""
        return romanize_with_unidecode(char)


_DEFAULT_NORMALIZER = SlugNormalizer()
_STRICT_NORMALIZER = SlugNormalizer(strict=True)


def normalize_slug(value: object, strict: bool = False) -> str:
    """Return a deterministic URL-safe slug for free-form text.

    Args:
        value: Text to normalize. `None` yields an empty slug.
        strict: Drop characters from scripts without a registered romanizer
            instead of transliterating them generically.

    Returns:
        Slug made of `[a-z0-9-]`, possibly empty.
    """

    normalizer = _STRICT_NORMALIZER if strict else _DEFAULT_NORMALIZER
    return normalizer.normalize(value)
