"""Building the relationship graph over a loaded corpus."""

import logging

from docnav.domain.document import Document
from docnav.domain.relationships import EDGE_TYPES, RelationshipEdges, RelationshipGraphStats
from docnav.ingestion.link_extractor import LinkExtractor

from .inference import INFERENCE_RULES, InferenceRule
from .resolver import IdentifierResolver

logger = logging.getLogger(__name__)


class RelationshipGraphBuilder:
    """Builds relationship edges for every document of a corpus in one pass."""

    def __init__(
        self,
        link_extractor: LinkExtractor | None = None,
        rules: tuple[InferenceRule, ...] = INFERENCE_RULES,
    ):
        self.link_extractor = link_extractor or LinkExtractor()
        self.rules = rules

    def build(
        self, documents: list[Document], resolver: IdentifierResolver | None = None
    ) -> RelationshipGraphStats:
        """Populate links and relationships on every document.

        Explicit edges are extracted first, dependents are synthesised from the
        resolved internal links of the whole corpus, and inference runs last so it
        can see every document.

        Args:
            documents: Documents in corpus order; mutated in place
            resolver: Resolver over the same documents, built if not given

        Returns:
            Counters describing the build
        """
        resolver = resolver or IdentifierResolver(documents)
        stats = RelationshipGraphStats(documents=len(documents))

        for document in documents:
            self._apply_explicit_links(document)
            stats.internal_links += len(document.internal_links)
            stats.external_references += len(document.external_references)
            stats.explicit_edges += self._count_edges(document.relationships)

        forward_edges = self._collect_forward_edges(documents, resolver)
        stats.dependents = self._synthesize_dependents(documents, forward_edges)

        for document in documents:
            stats.inferred_edges += self._apply_inference(document, documents)

        logger.info(
            f"Built relationship graph for {stats.documents} documents: "
            f"{stats.internal_links} internal links, {stats.explicit_edges} explicit edges, "
            f"{stats.inferred_edges} inferred edges, {stats.dependents} dependents"
        )
        return stats

    def _apply_explicit_links(self, document: Document) -> None:
        extracted = self.link_extractor.extract(document.content, document.identifier)
        document.internal_links = extracted.links.internal
        document.external_references = extracted.links.external
        document.relationships = extracted.relationships

    @staticmethod
    def _collect_forward_edges(
        documents: list[Document], resolver: IdentifierResolver
    ) -> list[tuple[str, str]]:
        """Resolve internal links to (source, target) identifier pairs."""
        edges = []
        for document in documents:
            for target in resolver.resolve_many(document.internal_links):
                if target.identifier != document.identifier:
                    edges.append((document.identifier, target.identifier))
        return edges

    @staticmethod
    def _synthesize_dependents(
        documents: list[Document], forward_edges: list[tuple[str, str]]
    ) -> int:
        """Add each linking source to its target's dependents, once per pair."""
        by_identifier = {document.identifier: document for document in documents}
        added = 0
        for source, target in forward_edges:
            if by_identifier[target].relationships.add("dependents", source):
                added += 1
        return added

    def _apply_inference(self, document: Document, documents: list[Document]) -> int:
        inferred = 0
        for rule in self.rules:
            targets = rule.infer(document, documents)
            for target in targets:
                if document.relationships.add(rule.edge_type, target):
                    inferred += 1
            if targets:
                logger.debug(f"Rule {rule.name} inferred {targets} for {document.identifier}")
        return inferred

    @staticmethod
    def _count_edges(relationships: RelationshipEdges) -> int:
        return sum(len(relationships.edges(edge_type)) for edge_type in EDGE_TYPES)
