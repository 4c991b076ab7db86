"""Input/output collaborators for mdrecords.

This package contains the filesystem abstraction, the frontmatter codec, and
record source loading used by the writer and importer.
"""

from .frontmatter_codec import FrontmatterCodec
from .record_source import load_records
from .storage import FileSystem, LocalFileSystem

__all__ = ["FileSystem", "FrontmatterCodec", "LocalFileSystem", "load_records"]
