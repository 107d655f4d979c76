"""Loading markdown files from a docs tree into Document records."""

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from docnav.domain.document import Document

from . import content_profiler

logger = logging.getLogger(__name__)

# YAML front matter: a --- delimited block at the very start of the file
FRONTMATTER_PATTERN = re.compile(r"^---[ \t]*\n(?:---|(.*?)\n---)[ \t]*(?:\n|$)", re.DOTALL)

LAST_MODIFIED_KEYS = ("last_updated", "last_modified", "updated", "date")


class DocumentLoader:
    """Finds and parses markdown documents below a docs root."""

    def __init__(
        self,
        *,
        pattern: str = "**/*.md",
        ignore_dirs: tuple[str, ...] = ("node_modules", ".git"),
    ):
        """Initialize the loader.

        Args:
            pattern: Glob pattern, relative to the docs root, selecting documents
            ignore_dirs: Directory names whose contents are never loaded
        """
        self.pattern = pattern
        self.ignore_dirs = ignore_dirs

    def load(self, folder: Path) -> list[Document]:
        """Load every document below a folder.

        Args:
            folder: Docs root

        Returns:
            Documents sorted by identifier, which defines corpus order
        """
        documents = []
        for file in self.find_documents(folder):
            document = self.load_file(file, folder)
            if document is not None:
                documents.append(document)

        logger.info(f"Loaded {len(documents)} documents from {folder}")
        return documents

    def find_documents(self, folder: Path) -> list[Path]:
        files = [
            file
            for file in folder.glob(self.pattern)
            if file.is_file()
            and not any(part in self.ignore_dirs for part in file.relative_to(folder).parts)
        ]
        return sorted(files, key=lambda file: file.relative_to(folder).as_posix())

    def load_file(self, file: Path, folder: Path) -> Document | None:
        """Parse a single markdown file, or return None if it cannot be read."""
        logger.debug(f"Processing {file}")
        try:
            raw_text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable document {file}: {e}")
            return None

        identifier = file.relative_to(folder).as_posix()
        metadata, content = parse_frontmatter(raw_text, source=identifier)

        return build_document(
            identifier=identifier,
            content=content,
            metadata=metadata,
            file_modified=datetime.fromtimestamp(file.stat().st_mtime, tz=timezone.utc),
        )


def parse_frontmatter(raw_text: str, source: str = "") -> tuple[dict[str, Any], str]:
    """Split YAML front matter from markdown content.

    Args:
        raw_text: Raw file content
        source: Document identifier used in log messages

    Returns:
        Tuple of (metadata, content). Without front matter, or when it cannot be
        parsed, metadata is empty and content is the whole raw text.
    """
    match = FRONTMATTER_PATTERN.match(raw_text)
    if not match:
        return {}, raw_text

    try:
        metadata = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse front matter in {source}, treating as content: {e}")
        return {}, raw_text

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        logger.warning(f"Front matter in {source} is not a mapping, treating as content")
        return {}, raw_text

    return metadata, raw_text[match.end() :]


def build_document(
    *,
    identifier: str,
    content: str,
    metadata: dict[str, Any] | None = None,
    file_modified: datetime | None = None,
) -> Document:
    """Create a Document and compute its derived properties."""
    metadata = metadata or {}
    declared_title = metadata.get("title")
    title = (
        str(declared_title).strip()
        if declared_title
        else content_profiler.extract_title(content) or identifier
    )
    segments = identifier.split("/")
    category = segments[0] if len(segments) > 1 else "general"

    return Document(
        identifier=identifier,
        title=title,
        content=content,
        metadata=metadata,
        category=category,
        document_type=content_profiler.classify_document_type(identifier, title, metadata),
        summary=content_profiler.summarize(content, metadata),
        key_sections=content_profiler.extract_key_sections(content),
        read_time_minutes=content_profiler.estimate_read_time(content),
        last_modified=_declared_last_modified(metadata) or file_modified,
    )


def _declared_last_modified(metadata: dict[str, Any]) -> datetime | None:
    for key in LAST_MODIFIED_KEYS:
        value = metadata.get(key)
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip())
            except ValueError:
                continue
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None
