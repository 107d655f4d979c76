"""Resolve document references and build the relationship graph."""

from docnav.ingestion.relationship_extraction.graph_builder import RelationshipGraphBuilder
from docnav.ingestion.relationship_extraction.inference import INFERENCE_RULES, InferenceRule
from docnav.ingestion.relationship_extraction.resolver import IdentifierResolver

__all__ = [
    "INFERENCE_RULES",
    "IdentifierResolver",
    "InferenceRule",
    "RelationshipGraphBuilder",
]
