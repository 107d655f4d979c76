from datetime import datetime
from typing import Any

from pydantic import BaseModel

from docnav.domain.document import Document, DocumentSummary, DocumentType
from docnav.domain.relationships import EdgeType, RelationshipEdges


class SearchResult(BaseModel):
    """A search hit as returned to clients."""

    identifier: str
    title: str
    category: str
    summary: str
    document_type: DocumentType
    key_sections: list[str]
    read_time_minutes: int
    last_modified: datetime | None
    relationships: RelationshipEdges
    internal_links: list[str]
    external_references: list[str]
    score: int
    excerpt: str | None = None
    content: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_document(
        cls,
        document: Document,
        *,
        score: int,
        include_full_content: bool = False,
        excerpt_chars: int = 200,
    ) -> "SearchResult":
        if include_full_content:
            extra = {"content": document.content, "metadata": document.metadata}
        else:
            extra = {"excerpt": _excerpt(document.content, excerpt_chars)}
        return cls(
            identifier=document.identifier,
            title=document.title,
            category=document.category,
            summary=document.summary,
            document_type=document.document_type,
            key_sections=document.key_sections,
            read_time_minutes=document.read_time_minutes,
            last_modified=document.last_modified,
            relationships=document.relationships,
            internal_links=document.internal_links,
            external_references=document.external_references,
            score=score,
            **extra,
        )


class SearchResponse(BaseModel):
    query: str
    count: int
    results: list[SearchResult]


class DocumentDetail(BaseModel):
    """Full document record, optionally with its resolved related documents."""

    document: Document
    related_documents: dict[EdgeType, list[DocumentSummary]] | None = None

    def to_response(self) -> dict[str, Any]:
        response = self.document.model_dump(mode="json")
        if self.related_documents:
            response["related_documents"] = {
                edge_type: [summary.model_dump(mode="json") for summary in summaries]
                for edge_type, summaries in self.related_documents.items()
            }
        return response


def _excerpt(content: str, limit: int) -> str:
    if len(content) <= limit:
        return content
    return content[:limit] + "..."
