"""Heuristic rules that fill relationship edges left empty by their authors."""

import re
from dataclasses import dataclass
from typing import Callable

from docnav.domain.document import Document
from docnav.domain.relationships import EdgeType

DEPENDENCY_LANGUAGE = re.compile(r"\b(?:before|first|prerequisites?)\b", re.IGNORECASE)
SETUP_TITLE = re.compile(r"set\s*up|getting started|install|introduction", re.IGNORECASE)


@dataclass(frozen=True)
class InferenceRule:
    """A named rule: when it applies to a document, which candidates to attach.

    Attributes:
        name: Rule name used in logs and tests
        edge_type: Edge list the rule fills
        applies: Whether the rule fires for a document
        selects: Whether a candidate qualifies for a document
        limit: Maximum number of inferred targets
    """

    name: str
    edge_type: EdgeType
    applies: Callable[[Document], bool]
    selects: Callable[[Document, Document], bool]
    limit: int

    def infer(self, document: Document, documents: list[Document]) -> list[str]:
        """Return inferred targets for a document, or an empty list.

        The rule never fires for an edge list that is already populated.
        """
        if document.relationships.edges(self.edge_type) or not self.applies(document):
            return []

        targets = []
        for candidate in documents:
            if len(targets) >= self.limit:
                break
            if candidate.identifier == document.identifier:
                continue
            if self.selects(document, candidate):
                targets.append(candidate.stem)
        return targets


def _mentions_dependencies(document: Document) -> bool:
    return bool(DEPENDENCY_LANGUAGE.search(document.content)) and not SETUP_TITLE.search(
        document.title
    )


def _is_setup_document(document: Document) -> bool:
    return document.document_type == "setup-guide" or "getting started" in document.title.lower()


def _same_category_setup_guide(document: Document, candidate: Document) -> bool:
    return candidate.category == document.category and candidate.document_type == "setup-guide"


def _same_category_guide_or_testing(document: Document, candidate: Document) -> bool:
    return candidate.category == document.category and candidate.document_type in (
        "guide",
        "testing",
    )


SETUP_PREREQUISITES = InferenceRule(
    name="setup-prerequisites",
    edge_type="prerequisites",
    applies=_mentions_dependencies,
    selects=_same_category_setup_guide,
    limit=2,
)

SETUP_FOLLOW_UPS = InferenceRule(
    name="setup-follow-ups",
    edge_type="follow_ups",
    applies=_is_setup_document,
    selects=_same_category_guide_or_testing,
    limit=3,
)

INFERENCE_RULES: tuple[InferenceRule, ...] = (SETUP_PREREQUISITES, SETUP_FOLLOW_UPS)
