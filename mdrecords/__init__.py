"""Top-level package for mdrecords.

This package writes structured records as Markdown documents with YAML
frontmatter, merging into documents that already exist. The main entry points
are `MarkdownMergeWriter` and `normalize_slug`.
"""

from .text.slug import SlugNormalizer, normalize_slug
from .writer import MarkdownMergeWriter

__all__ = ["MarkdownMergeWriter", "SlugNormalizer", "normalize_slug", "__version__"]

__version__ = "0.1.0"
