"""Document domain models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from docnav.domain.relationships import RelationshipEdges

DocumentType = Literal["guide", "api-docs", "setup-guide", "testing", "rfc", "documentation"]

DOCUMENT_TYPES: tuple[DocumentType, ...] = (
    "guide",
    "api-docs",
    "setup-guide",
    "testing",
    "rfc",
    "documentation",
)

MARKDOWN_EXTENSION = ".md"


class Document(BaseModel):
    """Represents a parsed markdown document.

    Attributes:
        identifier: Corpus-relative POSIX path including the .md extension
        title: Title from front matter, first header or path
        content: Markdown body without front matter
        metadata: Parsed front matter
        category: First path segment ("general" for files at the root)
        document_type: Classified document type
        summary: Short description of the document
        key_sections: Section headings in document order
        read_time_minutes: Estimated read time
        last_modified: Last modification time, if known
        internal_links: Raw internal link targets (populated by the graph build)
        external_references: External URLs (populated by the graph build)
        relationships: Relationship edges (populated by the graph build)
    """

    identifier: str
    title: str
    content: str
    metadata: dict[str, Any] = {}
    category: str = "general"
    document_type: DocumentType = "documentation"
    summary: str = ""
    key_sections: list[str] = []
    read_time_minutes: int = 1
    last_modified: datetime | None = None
    internal_links: list[str] = []
    external_references: list[str] = []
    relationships: RelationshipEdges = Field(default_factory=RelationshipEdges)

    @property
    def stem(self) -> str:
        """Identifier without the markdown extension."""
        return strip_markdown_extension(self.identifier)


class DocumentSummary(BaseModel):
    """Lightweight view of a document used for related-document listings."""

    identifier: str
    title: str
    summary: str
    document_type: DocumentType
    read_time_minutes: int
    category: str

    @classmethod
    def from_document(cls, document: Document) -> "DocumentSummary":
        return cls(
            identifier=document.identifier,
            title=document.title,
            summary=document.summary,
            document_type=document.document_type,
            read_time_minutes=document.read_time_minutes,
            category=document.category,
        )


def strip_markdown_extension(path: str) -> str:
    if path.endswith(MARKDOWN_EXTENSION):
        return path[: -len(MARKDOWN_EXTENSION)]
    return path
