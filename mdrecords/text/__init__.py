"""Text normalization components.

This package provides deterministic slug normalization and the per-script
romanization strategies it builds on.
"""

from .romanizers import RomanizerRegistry, default_registry, register_romanizer
from .slug import SlugNormalizer, normalize_slug

__all__ = [
    "RomanizerRegistry",
    "SlugNormalizer",
    "default_registry",
    "normalize_slug",
    "register_romanizer",
]
