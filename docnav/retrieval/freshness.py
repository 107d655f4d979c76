"""Detection of potentially outdated documents."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from docnav.domain.document import Document

OUTDATED_MARKERS = (
    "deprecated",
    "outdated",
    "no longer maintained",
    "archive",
    "legacy",
    "obsolete",
    "old version",
)

LEGACY_VERSION_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("Python 2", re.compile(r"\bpython\s*2(?:\.\d+)?\b", re.IGNORECASE)),
    (
        "Node.js 14 or older",
        re.compile(r"\bnode(?:\.?js)?\s*v?(?:[0-9]|1[0-4])(?:\.\d+)*\b", re.IGNORECASE),
    ),
    ("Ruby 2.5 or older", re.compile(r"\bruby\s*(?:1\.\d+|2\.[0-5])\b", re.IGNORECASE)),
    ("Rails 5 or older", re.compile(r"\brails\s*[1-5](?:\.\d+)*\b", re.IGNORECASE)),
    ("React 15 or older", re.compile(r"\breact\s*v?(?:0\.\d+|1[0-5])(?:\.\d+)*\b", re.IGNORECASE)),
    ("AngularJS", re.compile(r"\bangular\s*js\b|\bangular\s*1\.\d+", re.IGNORECASE)),
    ("jQuery 1.x", re.compile(r"\bjquery\s*1\.\d+", re.IGNORECASE)),
    ("Java 7 or older", re.compile(r"\bjava\s*[1-7]\b", re.IGNORECASE)),
]


@dataclass
class FreshnessReport:
    """Outcome of a freshness assessment; reasons are for diagnostics only."""

    outdated: bool = False
    reasons: list[str] = field(default_factory=list)


class FreshnessAssessor:
    """Classifies documents as outdated from their age and content."""

    def __init__(self, max_age_days: int = 365):
        self.max_age_days = max_age_days

    def assess(self, document: Document, now: datetime | None = None) -> FreshnessReport:
        """Assess a document. Any single trigger marks it outdated.

        Args:
            document: Document to assess
            now: Reference time, defaults to the current UTC time

        Returns:
            FreshnessReport with the outdated flag and the reasons found
        """
        reasons = []

        age = modified_age(document, now)
        if age is not None and age > timedelta(days=self.max_age_days):
            reasons.append(f"Last modified {age.days} days ago")

        content = document.content.lower()
        for marker in OUTDATED_MARKERS:
            if marker in content:
                reasons.append(f"Contains outdated marker: {marker}")

        for label, pattern in LEGACY_VERSION_PATTERNS:
            if pattern.search(document.content):
                reasons.append(f"Mentions legacy version: {label}")

        return FreshnessReport(outdated=bool(reasons), reasons=reasons)

    def is_outdated(self, document: Document, now: datetime | None = None) -> bool:
        return self.assess(document, now).outdated


def modified_age(document: Document, now: datetime | None = None) -> timedelta | None:
    """Time since the document was last modified, or None if unknown."""
    if document.last_modified is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    last_modified = document.last_modified
    if last_modified.tzinfo is None:
        last_modified = last_modified.replace(tzinfo=timezone.utc)
    return now - last_modified


def age_in_days(document: Document, now: datetime | None = None) -> int | None:
    """Whole days since the document was last modified, or None if unknown."""
    age = modified_age(document, now)
    return None if age is None else age.days
