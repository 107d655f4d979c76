"""Tests for loading documents and deriving their properties."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from docnav.ingestion import content_profiler
from docnav.ingestion.document_loader import DocumentLoader, build_document, parse_frontmatter


def test_loads_documents_in_identifier_order(docs_directory: Path) -> None:
    documents = DocumentLoader().load(docs_directory)

    assert [document.identifier for document in documents] == [
        "index.md",
        "setup/README.md",
        "setup/guide.md",
    ]


def test_parsed_document_fields(docs_directory: Path) -> None:
    documents = {d.identifier: d for d in DocumentLoader().load(docs_directory)}

    readme = documents["setup/README.md"]
    assert readme.title == "Getting Started"
    assert readme.metadata == {"title": "Getting Started", "description": "How to get going."}
    assert readme.content.startswith("# Welcome")
    assert readme.category == "setup"
    assert readme.document_type == "setup-guide"
    assert readme.summary == "How to get going."
    assert readme.key_sections == ["Install", "Next Steps"]
    assert readme.read_time_minutes == 1
    assert readme.last_modified is not None

    home = documents["index.md"]
    assert home.title == "Home"
    assert home.category == "general"
    assert home.summary == "Start at setup."

    assert documents["setup/guide.md"].document_type == "guide"


def test_ignored_directories_are_skipped(docs_directory: Path) -> None:
    (docs_directory / "node_modules" / "pkg").mkdir(parents=True)
    (docs_directory / "node_modules" / "pkg" / "README.md").write_text("# Vendored")

    identifiers = [d.identifier for d in DocumentLoader().load(docs_directory)]

    assert "node_modules/pkg/README.md" not in identifiers


def test_unreadable_document_is_skipped(docs_directory: Path) -> None:
    (docs_directory / "binary.md").write_bytes(b"\xff\xfe\x00broken")

    identifiers = [d.identifier for d in DocumentLoader().load(docs_directory)]

    assert "binary.md" not in identifiers
    assert len(identifiers) == 3


def test_malformed_frontmatter_is_treated_as_content() -> None:
    raw_text = "---\ntitle: [unclosed\n---\n# Heading\n\nBody"

    metadata, content = parse_frontmatter(raw_text, source="broken.md")

    assert metadata == {}
    assert content == raw_text


def test_non_mapping_frontmatter_is_treated_as_content() -> None:
    raw_text = "---\n- a\n- b\n---\nBody"

    assert parse_frontmatter(raw_text) == ({}, raw_text)


def test_empty_frontmatter() -> None:
    assert parse_frontmatter("---\n\n---\nBody") == ({}, "Body")
    assert parse_frontmatter("---\n---\n# T\nBody") == ({}, "# T\nBody")


def test_declared_dates_override_file_time() -> None:
    file_time = datetime(2026, 1, 1, tzinfo=timezone.utc)

    from_date = build_document(
        identifier="a.md",
        content="x",
        metadata={"last_updated": datetime(2024, 1, 15).date()},
        file_modified=file_time,
    )
    from_string = build_document(
        identifier="a.md", content="x", metadata={"updated": "2024-02-01"}, file_modified=file_time
    )
    from_file = build_document(identifier="a.md", content="x", file_modified=file_time)

    assert from_date.last_modified == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert from_string.last_modified == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert from_file.last_modified == file_time


def test_title_falls_back_to_identifier() -> None:
    document = build_document(identifier="notes/untitled.md", content="No header here.")

    assert document.title == "notes/untitled.md"


@pytest.mark.parametrize(
    "identifier, title, metadata, expected",
    [
        ("setup/README.md", "Getting Started", {}, "setup-guide"),
        ("setup/guide.md", "Guide", {}, "guide"),
        ("api/payments.md", "Payments", {}, "api-docs"),
        ("platform/rfcs/0001.md", "Caching proposal", {}, "rfc"),
        ("qa/e2e.md", "Browser tests", {}, "testing"),
        ("notes/misc.md", "Misc", {}, "documentation"),
        ("notes/misc.md", "Misc", {"type": "RFC"}, "rfc"),
        ("notes/misc.md", "Misc", {"type": "unknown"}, "documentation"),
    ],
)
def test_classify_document_type(
    identifier: str, title: str, metadata: dict, expected: str
) -> None:
    assert content_profiler.classify_document_type(identifier, title, metadata) == expected


def test_summary_from_first_paragraph() -> None:
    content = "# Title\n\nFirst paragraph with [a link](x.md) and **bold**.\n\n## Section\n"

    assert content_profiler.summarize(content, {}) == "First paragraph with a link and bold."


def test_summary_is_truncated() -> None:
    summary = content_profiler.summarize("word " * 100, {})

    assert len(summary) == content_profiler.SUMMARY_MAX_CHARS
    assert summary.endswith("...")


def test_key_sections_skip_code_blocks() -> None:
    content = "# Title\n## One\n```\n## Not a heading\n```\n### Two\n#### Too deep\n"

    assert content_profiler.extract_key_sections(content) == ["One", "Two"]


def test_read_time() -> None:
    assert content_profiler.estimate_read_time("") == 1
    assert content_profiler.estimate_read_time("word " * 450) == 3
