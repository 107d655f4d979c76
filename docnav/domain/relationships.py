"""Relationship domain models."""

from typing import Literal

from pydantic import BaseModel

EdgeType = Literal["prerequisites", "follow_ups", "see_also", "dependents"]

EDGE_TYPES: tuple[EdgeType, ...] = ("prerequisites", "follow_ups", "see_also", "dependents")


class RelationshipEdges(BaseModel):
    """Named relationship edges of a single document.

    Values are document identifiers (or raw targets) and may not resolve to a
    document in the corpus.

    Attributes:
        prerequisites: Documents to read before this one
        follow_ups: Documents to read after this one
        see_also: Loosely related documents
        dependents: Documents that link to this one (computed, never declared)
    """

    prerequisites: list[str] = []
    follow_ups: list[str] = []
    see_also: list[str] = []
    dependents: list[str] = []

    def edges(self, edge_type: EdgeType) -> list[str]:
        return getattr(self, edge_type)

    def add(self, edge_type: EdgeType, target: str) -> bool:
        """Append a target to an edge list unless it is already there."""
        targets = self.edges(edge_type)
        if target in targets:
            return False
        targets.append(target)
        return True


class LinkSet(BaseModel):
    """Links found in a document's content, deduplicated in first-seen order."""

    internal: list[str] = []
    external: list[str] = []


class RelationshipGraphStats(BaseModel):
    """Counters describing one graph build."""

    documents: int = 0
    internal_links: int = 0
    external_references: int = 0
    explicit_edges: int = 0
    inferred_edges: int = 0
    dependents: int = 0
