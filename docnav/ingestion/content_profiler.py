"""Derived document properties: type, summary, key sections and read time."""

import math
import re
from typing import Any

from docnav.domain.document import DOCUMENT_TYPES, DocumentType

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$", re.MULTILINE)
CODE_FENCE_PATTERN = re.compile(r"^```.*?^```", re.MULTILINE | re.DOTALL)

WORDS_PER_MINUTE = 200
SUMMARY_MAX_CHARS = 200
MAX_KEY_SECTIONS = 10

# Checked in order, first match wins
TYPE_KEYWORDS: list[tuple[DocumentType, re.Pattern[str]]] = [
    ("rfc", re.compile(r"\brfcs?\b|\badrs?\b|proposal|decision record", re.IGNORECASE)),
    ("api-docs", re.compile(r"\bapis?\b|endpoints?|swagger|openapi", re.IGNORECASE)),
    (
        "setup-guide",
        re.compile(r"set[\s\-_]?up|install|getting[\s\-_]started|onboarding", re.IGNORECASE),
    ),
    ("testing", re.compile(r"\btest(?:s|ing)?\b|\bqa\b|e2e", re.IGNORECASE)),
    ("guide", re.compile(r"guide|how[\s\-_]to|tutorial|walkthrough|playbook", re.IGNORECASE)),
]


def classify_document_type(identifier: str, title: str, metadata: dict[str, Any]) -> DocumentType:
    """Classify a document from its front matter, path and title.

    An explicit "type" (or "document_type") in the front matter wins when it is
    a known document type.
    """
    declared = metadata.get("type") or metadata.get("document_type")
    if isinstance(declared, str) and declared.strip().lower() in DOCUMENT_TYPES:
        return declared.strip().lower()  # type: ignore[return-value]

    directory, _, filename = identifier.rpartition("/")
    # File name and title are more specific than the folders a document sits in
    for haystack in (f"{filename} {title}", directory):
        for document_type, pattern in TYPE_KEYWORDS:
            if pattern.search(haystack):
                return document_type
    return "documentation"


def extract_title(content: str) -> str | None:
    """Return the text of the first level-one header, if any."""
    match = re.search(r"^#\s+(.+)$", content, re.MULTILINE)
    return match.group(1).strip() if match else None


def extract_key_sections(content: str) -> list[str]:
    """Return level two and three headings in document order."""
    content = CODE_FENCE_PATTERN.sub("", content)
    return [
        match.group(2).strip()
        for match in HEADING_PATTERN.finditer(content)
        if len(match.group(1)) in (2, 3)
    ][:MAX_KEY_SECTIONS]


def summarize(content: str, metadata: dict[str, Any]) -> str:
    """Build a short summary from front matter or the first paragraph.

    Args:
        content: Markdown content without front matter
        metadata: Parsed front matter

    Returns:
        Summary of at most SUMMARY_MAX_CHARS characters, possibly empty
    """
    for key in ("summary", "description"):
        value = metadata.get(key)
        if isinstance(value, str) and value.strip():
            return _truncate(" ".join(value.split()))

    content = CODE_FENCE_PATTERN.sub("", content)
    for paragraph in re.split(r"\n\s*\n", content):
        lines = [
            line.strip()
            for line in paragraph.splitlines()
            if line.strip() and not line.lstrip().startswith(("#", "|", "<!--", "![", "---"))
        ]
        if lines:
            text = re.sub(r"\[([^\]]*)\]\([^)]*\)", r"\1", " ".join(lines))
            text = re.sub(r"[*_`]", "", text)
            return _truncate(" ".join(text.split()))
    return ""


def estimate_read_time(content: str) -> int:
    """Estimate read time in whole minutes, at least one."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def _truncate(text: str) -> str:
    if len(text) <= SUMMARY_MAX_CHARS:
        return text
    return text[: SUMMARY_MAX_CHARS - 3].rstrip() + "..."
