"""Multi-signal relevance scoring for document search."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel, Field

from docnav.domain.document import Document

from .freshness import FreshnessAssessor, age_in_days

TITLE_MATCH_SCORE = 100
TITLE_EXACT_SCORE = 50
SUMMARY_MATCH_SCORE = 50
CONTENT_OCCURRENCE_SCORE = 5
GUIDE_TYPE_SCORE = 10

# (maximum age in days, bonus), checked in order
RECENCY_BONUSES = ((30, 20), (90, 10), (180, 5))


class SearchRequest(BaseModel):
    """Search parameters.

    Attributes:
        query: Case-insensitive text that every result must contain
        category: Only return documents of this category
        document_types: Only return documents of these types
        context: Free text describing the searcher's situation, used for bonuses
        exclude_outdated: Drop documents the freshness assessor flags as outdated
        limit: Maximum number of results
    """

    query: str = Field(min_length=1)
    category: str | None = None
    document_types: list[str] | None = None
    context: str | None = None
    exclude_outdated: bool = False
    limit: int = Field(default=10, ge=1)


@dataclass(frozen=True)
class ContextBonus:
    """Bonus applied when the search context and the document both match.

    Attributes:
        triggers: Substrings of the lowercased context that activate the row
        matches: Whether a document qualifies for the bonus
        bonus: Points added to the score
    """

    triggers: tuple[str, ...]
    matches: Callable[[Document], bool]
    bonus: int

    def applies(self, context: str, document: Document) -> bool:
        return any(trigger in context for trigger in self.triggers) and self.matches(document)


def _has_type(*document_types: str) -> Callable[[Document], bool]:
    return lambda document: document.document_type in document_types


def _title_mentions(*keywords: str) -> Callable[[Document], bool]:
    return lambda document: any(keyword in document.title.lower() for keyword in keywords)


def _mentions(*keywords: str) -> Callable[[Document], bool]:
    def matches(document: Document) -> bool:
        text = f"{document.title}\n{document.content}".lower()
        return any(keyword in text for keyword in keywords)

    return matches


NEW_DEVELOPER = ("new developer", "getting started", "onboarding")
INTEGRATION = ("api", "integration")

CONTEXT_BONUSES: tuple[ContextBonus, ...] = (
    ContextBonus(NEW_DEVELOPER, _has_type("setup-guide"), 30),
    ContextBonus(
        NEW_DEVELOPER, _title_mentions("readme", "overview", "introduction", "getting started"), 15
    ),
    ContextBonus(INTEGRATION, _has_type("api-docs"), 25),
    ContextBonus(INTEGRATION, _title_mentions("api", "integration", "endpoint"), 15),
    ContextBonus(
        ("troubleshoot", "debug", "error"), _mentions("troubleshoot", "debug", "error", "faq"), 20
    ),
    ContextBonus(("deploy", "release"), _mentions("deploy", "release"), 20),
    ContextBonus(("test", "testing", "qa"), _has_type("testing"), 20),
)


@dataclass
class ScoredDocument:
    document: Document
    score: int


class RelevanceScorer:
    """Filters and ranks documents against a search request."""

    def __init__(
        self,
        freshness_assessor: FreshnessAssessor | None = None,
        context_bonuses: tuple[ContextBonus, ...] = CONTEXT_BONUSES,
    ):
        self.freshness_assessor = freshness_assessor or FreshnessAssessor()
        self.context_bonuses = context_bonuses

    def search(
        self, documents: list[Document], request: SearchRequest, now: datetime | None = None
    ) -> list[ScoredDocument]:
        """Return matching documents ordered by descending score.

        Ties keep corpus order. No match is an empty list.

        Args:
            documents: Corpus documents in corpus order
            request: Search parameters
            now: Reference time for freshness and recency, defaults to now (UTC)

        Returns:
            At most request.limit scored documents
        """
        now = now or datetime.now(timezone.utc)
        query = request.query.lower()

        results = [
            ScoredDocument(document=document, score=self.score(document, request, now))
            for document in documents
            if self._passes_filters(document, request, query, now)
        ]
        # list.sort is stable, so equal scores keep corpus order
        results.sort(key=lambda result: result.score, reverse=True)
        return results[: request.limit]

    def score(self, document: Document, request: SearchRequest, now: datetime | None = None) -> int:
        """Score a document against a request; higher is better."""
        query = request.query.lower()
        title = document.title.lower()

        score = 0
        if query in title:
            score += TITLE_MATCH_SCORE
            if title == query:
                score += TITLE_EXACT_SCORE

        if query in document.summary.lower():
            score += SUMMARY_MATCH_SCORE

        score += CONTENT_OCCURRENCE_SCORE * document.content.lower().count(query)

        if request.context:
            score += self.context_bonus(document, request.context)

        if document.document_type in ("guide", "setup-guide"):
            score += GUIDE_TYPE_SCORE

        score += recency_bonus(document, now)
        return score

    def context_bonus(self, document: Document, context: str) -> int:
        context = context.lower()
        return sum(row.bonus for row in self.context_bonuses if row.applies(context, document))

    def _passes_filters(
        self, document: Document, request: SearchRequest, query: str, now: datetime
    ) -> bool:
        if request.category and document.category != request.category:
            return False
        if request.document_types and document.document_type not in request.document_types:
            return False
        if request.exclude_outdated and self.freshness_assessor.is_outdated(document, now):
            return False
        return query in searchable_text(document)


def searchable_text(document: Document) -> str:
    """Lowercased title, content and serialized metadata of a document."""
    metadata = json.dumps(document.metadata, default=str, ensure_ascii=False)
    return " ".join([document.title, document.content, metadata]).lower()


def recency_bonus(document: Document, now: datetime | None = None) -> int:
    age = age_in_days(document, now)
    if age is None:
        return 0
    for max_age, bonus in RECENCY_BONUSES:
        if age < max_age:
            return bonus
    return 0
