"""Resolution of loosely formatted references to documents in the corpus."""

import logging
from typing import Callable, Iterable

from docnav.domain.document import MARKDOWN_EXTENSION, Document, strip_markdown_extension

logger = logging.getLogger(__name__)

ResolutionStrategy = Callable[[str], Document | None]


class IdentifierResolver:
    """Resolve reference strings to documents with clear precedence rules."""

    def __init__(self, documents: Iterable[Document]):
        """Initialize resolver with the documents of a corpus.

        Every document is indexed under its identifier and under its identifier
        without the markdown extension. Index order follows corpus order.

        Args:
            documents: Documents in corpus order
        """
        self.index: dict[str, Document] = {}
        for document in documents:
            self.index.setdefault(document.identifier, document)
            self.index.setdefault(document.stem, document)

        self.strategies: list[tuple[str, ResolutionStrategy]] = [
            ("exact", self._resolve_exact),
            ("with extension", self._resolve_with_extension),
            ("without extension", self._resolve_without_extension),
            ("suffix", self._resolve_suffix),
            ("substring", self._resolve_substring),
        ]

    def resolve(self, reference: str) -> Document | None:
        """Resolve a reference to a document.

        Priority:
        1. Exact identifier match
        2. Identifier match after appending the markdown extension
        3. Identifier match after stripping the markdown extension
        4. Unique document whose identifier ends with the reference, preferring
           matches that start at a path segment
        5. Unique document whose identifier contains the reference

        Args:
            reference: Raw reference as extracted from a document

        Returns:
            Resolved document, or None if no unambiguous match exists
        """
        reference = reference.strip()
        if not reference:
            return None

        for strategy_name, strategy in self.strategies:
            document = strategy(reference)
            if document is not None:
                logger.debug(f"Resolved {reference} -> {document.identifier} ({strategy_name})")
                return document

        logger.debug(f"Could not resolve reference: {reference}")
        return None

    def resolve_many(self, references: Iterable[str]) -> list[Document]:
        """Resolve references, dropping those that do not resolve."""
        resolved = []
        for reference in references:
            document = self.resolve(reference)
            if document is not None:
                resolved.append(document)
        return resolved

    def _resolve_exact(self, reference: str) -> Document | None:
        return self.index.get(reference)

    def _resolve_with_extension(self, reference: str) -> Document | None:
        return self.index.get(f"{reference}{MARKDOWN_EXTENSION}")

    def _resolve_without_extension(self, reference: str) -> Document | None:
        return self.index.get(strip_markdown_extension(reference))

    def _resolve_suffix(self, reference: str) -> Document | None:
        # "guide" should hit "setup/guide" before "setup/userguide"
        segment = reference if reference.startswith("/") else f"/{reference}"
        matches = self._matches(lambda key: key.endswith(segment))
        if not matches:
            matches = self._matches(lambda key: key.endswith(reference))
        return self._unique_match(reference, matches, "suffix")

    def _resolve_substring(self, reference: str) -> Document | None:
        return self._unique_match(
            reference, self._matches(lambda key: reference in key), "substring"
        )

    def _matches(self, predicate: Callable[[str], bool]) -> dict[str, Document]:
        """Distinct documents with an index key satisfying the predicate, in corpus order."""
        matches: dict[str, Document] = {}
        for key, document in self.index.items():
            if predicate(key):
                matches.setdefault(document.identifier, document)
        return matches

    def _unique_match(
        self, reference: str, matches: dict[str, Document], strategy_name: str
    ) -> Document | None:
        """Return the only matching document.

        Several distinct matching documents make the reference ambiguous and it
        resolves to nothing.
        """
        if len(matches) == 1:
            return next(iter(matches.values()))

        if len(matches) > 1:
            logger.warning(
                f"Ambiguous {strategy_name} match for reference {reference}: "
                f"{', '.join(matches)}"
            )
        return None
