"""The loaded, fully built document corpus and its atomic publication."""

import threading
from datetime import datetime

from docnav.domain.document import Document, DocumentSummary
from docnav.domain.relationships import EdgeType, RelationshipGraphStats
from docnav.errors import DocumentNotFoundError
from docnav.ingestion.relationship_extraction import IdentifierResolver
from docnav.retrieval.related import RelatedDocumentResolver
from docnav.retrieval.scoring import RelevanceScorer, ScoredDocument, SearchRequest


class Corpus:
    """Documents of one load cycle with their relationship graph already built.

    A corpus is never modified after construction.
    """

    def __init__(
        self,
        documents: list[Document],
        *,
        resolver: IdentifierResolver | None = None,
        stats: RelationshipGraphStats | None = None,
        scorer: RelevanceScorer | None = None,
    ) -> None:
        self._documents = list(documents)
        self._by_identifier = {document.identifier: document for document in self._documents}
        self.resolver = resolver or IdentifierResolver(self._documents)
        self.stats = stats or RelationshipGraphStats(documents=len(self._documents))
        self.scorer = scorer or RelevanceScorer()
        self._related = RelatedDocumentResolver(self.resolver)

    @classmethod
    def empty(cls) -> "Corpus":
        return cls([])

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def get_document(self, identifier: str) -> Document:
        """Get a document by identifier, with or without the markdown extension.

        Raises:
            DocumentNotFoundError: If no document has this identifier
        """
        document = self._by_identifier.get(identifier) or self.resolver.index.get(identifier)
        if document is None:
            raise DocumentNotFoundError(identifier)
        return document

    def categories(self) -> list[str]:
        return sorted({document.category for document in self._documents if document.category})

    def search(self, request: SearchRequest, now: datetime | None = None) -> list[ScoredDocument]:
        return self.scorer.search(self._documents, request, now)

    def related_documents(
        self, document: Document, max_per_type: int = 3
    ) -> dict[EdgeType, list[DocumentSummary]]:
        return self._related.resolve(document, max_per_type)


class CorpusHolder:
    """Holds the current corpus and swaps in rebuilt ones atomically.

    Readers call current() once per request and keep using that corpus, so a
    reload in progress is never observed half built.
    """

    def __init__(self, corpus: Corpus | None = None) -> None:
        self._corpus = corpus if corpus is not None else Corpus.empty()
        self._lock = threading.Lock()

    def current(self) -> Corpus:
        return self._corpus

    def swap(self, corpus: Corpus) -> Corpus:
        """Publish a new corpus and return the one it replaces."""
        with self._lock:
            previous, self._corpus = self._corpus, corpus
        return previous
