"""Expansion of relationship edges into related-document summaries."""

from docnav.domain.document import Document, DocumentSummary
from docnav.domain.relationships import EDGE_TYPES, EdgeType
from docnav.ingestion.relationship_extraction import IdentifierResolver


class RelatedDocumentResolver:
    """Resolves a document's relationship edges to displayable summaries."""

    def __init__(self, resolver: IdentifierResolver):
        self.resolver = resolver

    def resolve(
        self, document: Document, max_per_type: int = 3
    ) -> dict[EdgeType, list[DocumentSummary]]:
        """Resolve the related documents of a document.

        Only the first max_per_type identifiers of each edge type are resolved.
        Unresolvable identifiers are dropped and edge types left with nothing
        are omitted from the result.

        Args:
            document: Document whose relationships to resolve
            max_per_type: Maximum number of identifiers resolved per edge type

        Returns:
            Mapping of edge type to related document summaries
        """
        related: dict[EdgeType, list[DocumentSummary]] = {}
        for edge_type in EDGE_TYPES:
            identifiers = document.relationships.edges(edge_type)[:max_per_type]
            summaries = [
                DocumentSummary.from_document(target)
                for target in self.resolver.resolve_many(identifiers)
            ]
            if summaries:
                related[edge_type] = summaries
        return related
