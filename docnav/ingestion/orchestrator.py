"""Orchestration of the complete load and graph build pipeline."""

import logging
import threading
from pathlib import Path

from docnav.corpus import Corpus, CorpusHolder
from docnav.domain.document import Document
from docnav.retrieval.freshness import FreshnessAssessor
from docnav.retrieval.scoring import RelevanceScorer

from .document_loader import DocumentLoader
from .relationship_extraction import IdentifierResolver, RelationshipGraphBuilder

logger = logging.getLogger(__name__)


class IngestionOrchestrator:
    """Loads a docs tree, builds its relationship graph and publishes the corpus."""

    def __init__(
        self,
        *,
        holder: CorpusHolder,
        loader: DocumentLoader | None = None,
        graph_builder: RelationshipGraphBuilder | None = None,
        outdated_after_days: int = 365,
    ):
        """Initialize the orchestrator with required services.

        Args:
            holder: Holder the finished corpus is published to
            loader: Loader for markdown files
            graph_builder: Builder for relationship edges
            outdated_after_days: Age after which documents count as outdated
        """
        self.holder = holder
        self.loader = loader or DocumentLoader()
        self.graph_builder = graph_builder or RelationshipGraphBuilder()
        self.outdated_after_days = outdated_after_days
        self._reload_lock = threading.Lock()

    def ingest(self, folder: Path) -> Corpus:
        """Load and build a new corpus from a folder, then publish it.

        The previous corpus stays published until the new one is complete; if
        loading or building fails the previous corpus is kept.

        Args:
            folder: Docs root containing markdown files

        Returns:
            The newly published corpus
        """
        with self._reload_lock:
            logger.info(f"Loading documents from {folder}...")
            documents = self.loader.load(folder)

            corpus = self.build_corpus(documents)
            self.holder.swap(corpus)

            logger.info("Ingestion complete:")
            logger.info(f"  - Documents: {corpus.stats.documents}")
            logger.info(f"  - Internal links: {corpus.stats.internal_links}")
            logger.info(f"  - External references: {corpus.stats.external_references}")
            logger.info(f"  - Inferred edges: {corpus.stats.inferred_edges}")
            return corpus

    def build_corpus(self, documents: list[Document]) -> Corpus:
        """Build the relationship graph over documents and wrap them in a corpus."""
        resolver = IdentifierResolver(documents)
        logger.info("Building relationship graph...")
        stats = self.graph_builder.build(documents, resolver)
        return Corpus(
            documents,
            resolver=resolver,
            stats=stats,
            scorer=RelevanceScorer(FreshnessAssessor(max_age_days=self.outdated_after_days)),
        )
