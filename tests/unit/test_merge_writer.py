"""Unit tests for merge-write decisions against a recording filesystem."""

from __future__ import annotations

from datetime import datetime

import pytest

from mdrecords.io.frontmatter_codec import FrontmatterCodec
from mdrecords.models.datatypes import WriteStatus
from mdrecords.writer import MarkdownMergeWriter, merge_metadata, select_body, utc_timestamp

MOCK_PATH = "/test/path"
DESTINATION = f"{MOCK_PATH}/test-title.md"
FIXED_TIMESTAMP = "2026-01-02T03:04:05.678Z"


class RecordingNormalizer:
    """Slug normalizer stand-in that records its inputs."""

    def __init__(self, slug: str = "test-title") -> None:
        self.slug = slug
        self.calls: list[object] = []

    def __call__(self, value: object) -> str:
        self.calls.append(value)
        return self.slug


def _written(filesystem, path: str = DESTINATION):
    """Parse the document written at `path`."""

    return FrontmatterCodec().parse(filesystem.files[path])


def test_write_creates_document_from_record(filesystem, writer) -> None:
    """A new record should create the directory and one sorted document."""

    result = writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "Test content", "author": "Test Author"},
    )

    assert result is True
    assert filesystem.directories == [MOCK_PATH]
    assert filesystem.operations() == ["make_directory", "path_exists", "write_file"]
    document = _written(filesystem)
    assert document.metadata == {
        "author": "Test Author",
        "date": FIXED_TIMESTAMP,
        "title": "Test Title",
    }
    assert document.body == "Test content"


def test_write_uses_explicit_slug_without_normalizing(filesystem) -> None:
    """A slug longer than one character should name the file verbatim."""

    normalizer = RecordingNormalizer()
    writer = MarkdownMergeWriter(filesystem=filesystem, normalizer=normalizer)

    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "slug": "custom-slug", "content": "Test content"},
    )

    assert normalizer.calls == []
    assert f"{MOCK_PATH}/custom-slug.md" in filesystem.files


@pytest.mark.parametrize("slug", ["a", "", "   ", " b ", None])
def test_write_normalizes_title_when_slug_is_too_short(filesystem, slug) -> None:
    """Slugs of trimmed length one or less should fall back to the title."""

    normalizer = RecordingNormalizer()
    writer = MarkdownMergeWriter(filesystem=filesystem, normalizer=normalizer)

    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "slug": slug, "content": "Content"},
    )

    assert normalizer.calls == ["Test Title"]
    assert DESTINATION in filesystem.files


def test_write_derives_filename_from_title(filesystem, writer) -> None:
    """Without a slug the title should be normalized into the filename stem."""

    writer.write("title", "content", MOCK_PATH, {"title": "My Test Article", "content": "C"})

    assert list(filesystem.files) == [f"{MOCK_PATH}/my-test-article.md"]


def test_write_accepts_empty_stem(filesystem, writer) -> None:
    """A title that normalizes to nothing should produce a bare `.md` file."""

    assert writer.write("title", "content", MOCK_PATH, {"title": "!!!", "content": "x"})
    assert list(filesystem.files) == [f"{MOCK_PATH}/.md"]


def test_write_keeps_trailing_directory_separator(filesystem, writer) -> None:
    """The filename should be appended to the directory exactly as given."""

    writer.write("title", "content", "/test/path/", {"title": "Test Title", "content": "C"})

    assert filesystem.directories == ["/test/path/"]
    assert list(filesystem.files) == ["/test/path//test-title.md"]


def test_write_synthesizes_date_when_missing(filesystem, writer) -> None:
    """Records without any date should receive the clock timestamp."""

    writer.write("title", "content", MOCK_PATH, {"title": "Test Title", "content": "C"})

    assert "date:" in filesystem.files[DESTINATION]
    assert _written(filesystem).metadata["date"] == FIXED_TIMESTAMP


def test_write_keeps_record_date(filesystem, writer) -> None:
    """A date supplied by the record should be written unchanged."""

    existing_date = "2025-01-01T00:00:00.000Z"
    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "C", "date": existing_date},
    )

    assert existing_date in filesystem.files[DESTINATION]
    assert _written(filesystem).metadata["date"] == existing_date


def test_write_keeps_existing_document_date(filesystem, writer) -> None:
    """An existing document date should survive when the record has none."""

    filesystem.files[DESTINATION] = (
        "---\ntitle: Test Title\ndate: 2025-01-01T00:00:00.000Z\n---\nOld content"
    )

    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "New content", "newField": "x"},
    )

    assert _written(filesystem).metadata["date"] == "2025-01-01T00:00:00.000Z"


def test_write_without_content_field(filesystem, writer) -> None:
    """A missing content field name should produce an empty body."""

    result = writer.write(
        "title", None, MOCK_PATH, {"title": "Test Title", "author": "Test Author"}
    )

    assert result is True
    document = _written(filesystem)
    assert document.body == ""
    assert document.metadata["author"] == "Test Author"


def test_write_with_empty_content(filesystem, writer) -> None:
    """Empty content should still produce a delimited document."""

    assert writer.write("title", "content", MOCK_PATH, {"title": "Test Title", "content": ""})
    assert filesystem.files[DESTINATION].startswith("---\n")


def test_write_stringifies_non_text_content(filesystem, writer) -> None:
    """Non-string content values should be written as their text form."""

    writer.write("title", "content", MOCK_PATH, {"title": "Test Title", "content": 42})

    assert _written(filesystem).body == "42"


def test_never_overwrite_skips_existing_document(filesystem, writer) -> None:
    """An existing destination should be neither read nor written."""

    filesystem.files[DESTINATION] = "---\ntitle: Old\n---\nOld"

    result = writer.write_record(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "Test content"},
        never_overwrite=True,
    )

    assert result.status is WriteStatus.SKIPPED_EXISTING
    assert result.succeeded
    assert "read_file" not in filesystem.operations()
    assert "write_file" not in filesystem.operations()
    assert filesystem.files[DESTINATION] == "---\ntitle: Old\n---\nOld"


def test_write_merges_existing_fields(filesystem, writer) -> None:
    """Existing fields should be kept and record fields added on top."""

    filesystem.files[DESTINATION] = (
        "---\ntitle: Old Title\nexistingField: Existing value\n"
        "date: 2025-01-01T00:00:00.000Z\n---\nOld content"
    )

    result = writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "New content", "newField": "New value"},
    )

    assert result is True
    assert ("read_file", DESTINATION) in filesystem.calls
    document = _written(filesystem)
    assert document.metadata == {
        "date": "2025-01-01T00:00:00.000Z",
        "existingField": "Existing value",
        "newField": "New value",
        "title": "Test Title",
    }
    assert document.body == "New content"


def test_write_preserves_longer_existing_body(filesystem, writer) -> None:
    """A longer existing body should win over shorter incoming content."""

    filesystem.files[DESTINATION] = (
        "---\ntitle: Test Title\ndate: 2025-01-01T00:00:00.000Z\n---\n"
        "This is much longer existing content"
    )

    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {"title": "Test Title", "content": "New", "newField": "This makes data different"},
    )

    assert _written(filesystem).body == "This is much longer existing content"


def test_write_skips_unchanged_document(filesystem, writer) -> None:
    """Identical metadata and body should not trigger a write."""

    filesystem.files[DESTINATION] = (
        "---\ndate: 2025-01-01T00:00:00.000Z\ntitle: Test Title\n---\nSame content"
    )

    result = writer.write_record(
        "title",
        "content",
        MOCK_PATH,
        {
            "title": "Test Title",
            "content": "Same content",
            "date": "2025-01-01T00:00:00.000Z",
        },
    )

    assert result.status is WriteStatus.UNCHANGED
    assert "write_file" not in filesystem.operations()


def test_write_twice_writes_once(filesystem, writer) -> None:
    """A repeated identical call should be a no-op."""

    record = {
        "title": "Test Title",
        "content": "Test content",
        "tags": ["test", "example"],
        "author": "John Doe",
    }

    first = writer.write_record("title", "content", MOCK_PATH, record)
    second = writer.write_record("title", "content", MOCK_PATH, record)

    assert first.status is WriteStatus.WRITTEN
    assert second.status is WriteStatus.UNCHANGED
    assert filesystem.operations().count("write_file") == 1


def test_write_treats_plain_existing_text_as_body(filesystem, writer) -> None:
    """An existing file without frontmatter should contribute only its body."""

    filesystem.files[DESTINATION] = "Just plain content without YAML"

    result = writer.write(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "New content"}
    )

    assert result is True
    document = _written(filesystem)
    assert document.metadata == {"date": FIXED_TIMESTAMP, "title": "Test Title"}
    assert document.body == "Just plain content without YAML"


def test_write_drops_content_key_from_existing_metadata(filesystem, writer) -> None:
    """Metadata should never carry the content field, even from old documents."""

    filesystem.files[DESTINATION] = "---\ncontent: stale\ntitle: Test Title\n---\nBody"

    writer.write("title", "content", MOCK_PATH, {"title": "Test Title", "content": "Body"})

    document = _written(filesystem)
    assert "content" not in document.metadata
    assert document.body == "Body"


def test_write_reports_write_failure(filesystem, writer) -> None:
    """Write errors should be converted to a failed result."""

    filesystem.failures["write_file"] = OSError("Write error")

    result = writer.write_record(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "Test content"}
    )

    assert result.status is WriteStatus.FAILED
    assert result.succeeded is False
    assert "Write error" in (result.reason or "")
    assert writer.write("title", "content", MOCK_PATH, {"title": "Test Title"}) is False


def test_write_reports_directory_failure_without_writing(filesystem, writer) -> None:
    """Directory creation errors should abort before any other filesystem call."""

    filesystem.failures["make_directory"] = PermissionError("Mkdir error")

    result = writer.write(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "Test content"}
    )

    assert result is False
    assert filesystem.operations() == ["make_directory"]


def test_write_reports_existence_check_failure_without_reading(filesystem, writer) -> None:
    """A failed existence check should abort before any read or write."""

    filesystem.failures["path_exists"] = OSError("Stat error")

    result = writer.write(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "Test content"}
    )

    assert result is False
    assert filesystem.operations() == ["make_directory", "path_exists"]
    assert DESTINATION not in filesystem.files


def test_write_twice_with_tuple_values_writes_once(filesystem, writer) -> None:
    """Values that re-read as a different type should still count as unchanged."""

    record = {"title": "Test Title", "content": "body", "tags": ("a", "b")}

    first = writer.write_record("title", "content", MOCK_PATH, record)
    second = writer.write_record("title", "content", MOCK_PATH, record)

    assert first.status is WriteStatus.WRITTEN
    assert second.status is WriteStatus.UNCHANGED
    assert filesystem.operations().count("write_file") == 1
    assert _written(filesystem).metadata["tags"] == ["a", "b"]


def test_write_recovers_from_read_failure(filesystem, writer) -> None:
    """An unreadable existing document should be treated as absent."""

    filesystem.files[DESTINATION] = "---\ntitle: Old\n---\nOld"
    filesystem.failures["read_file"] = OSError("Read error")

    result = writer.write(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "New content"}
    )

    assert result is True
    document = _written(filesystem)
    assert document.metadata == {"date": FIXED_TIMESTAMP, "title": "Test Title"}
    assert document.body == "New content"


def test_write_recovers_from_malformed_frontmatter(filesystem, writer) -> None:
    """Invalid YAML in an existing document should not block the write."""

    filesystem.files[DESTINATION] = "---\ntitle: [unclosed\n---\nA much longer old body"

    result = writer.write(
        "title", "content", MOCK_PATH, {"title": "Test Title", "content": "New"}
    )

    assert result is True
    assert _written(filesystem).body == "New"


def test_write_sorts_metadata_keys(filesystem, writer) -> None:
    """Serialized metadata keys should appear in lexicographic order."""

    writer.write(
        "title",
        "content",
        MOCK_PATH,
        {
            "title": "Test Title",
            "content": "Test content",
            "zebra": "last",
            "apple": "first",
            "middle": "middle",
        },
    )

    text = filesystem.files[DESTINATION]
    assert text.index("apple:") < text.index("middle:") < text.index("zebra:")
    assert "content:" not in text
    assert text.endswith("\n---\n\nTest content\n")


def test_merge_metadata_prefers_record_values() -> None:
    """Record values should override existing values on key collisions."""

    merged = merge_metadata(
        {"title": "Old", "keep": 1, "content": "x"},
        {"title": "New", "content": "body"},
        "content",
    )

    assert merged == {"title": "New", "keep": 1}


@pytest.mark.parametrize(
    ("existing", "candidate", "expected"),
    [
        ("longer body", "short", "longer body"),
        ("short", "longer body", "longer body"),
        ("same", "SAME", "SAME"),
        ("", "", ""),
    ],
)
def test_select_body_prefers_longer_and_candidate_on_ties(
    existing: str, candidate: str, expected: str
) -> None:
    """Body selection should compare character counts only."""

    assert select_body(existing, candidate) == expected


def test_utc_timestamp_is_parseable_iso_8601() -> None:
    """Synthesized dates should parse as UTC timestamps with milliseconds."""

    value = utc_timestamp()

    assert value.endswith("Z")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    assert parsed.utcoffset() is not None
    assert len(value.split(".")[1]) == 4
