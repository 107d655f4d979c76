"""Link and explicit relationship extraction from markdown content."""

import logging
import posixpath
import re
from dataclasses import dataclass, field

from docnav.domain.document import MARKDOWN_EXTENSION, strip_markdown_extension
from docnav.domain.relationships import EdgeType, LinkSet, RelationshipEdges
from docnav.ingestion.content_profiler import CODE_FENCE_PATTERN

logger = logging.getLogger(__name__)

# [text](target "optional title"), also matches image syntax ![alt](target)
INLINE_LINK_PATTERN = re.compile(r"\[[^\]]*\]\(\s*<?([^)\s>]*)>?(?:\s+[\"'(][^)]*)?\)")
# [label]: target
REFERENCE_LINK_PATTERN = re.compile(
    r"^[ \t]{0,3}\[[^\]]+\]:[ \t]*<?([^\s>]+)>?(?:[ \t]+.*)?$", re.MULTILINE
)
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")

BULLET_PATTERN = re.compile(r"^\s*[-*+]\s+(.*\S)\s*$")
HEADING_LABEL_PATTERN = re.compile(r"^\s{0,3}#{1,6}\s+(?P<label>.+?)\s*:?\s*#*\s*$")
INLINE_LABEL_PATTERN = re.compile(
    r"^\s*(?:\*\*|__)?(?P<label>[A-Za-z][A-Za-z \-]*?)\s*(?:\*\*|__)?\s*:"
    r"\s*(?:\*\*|__)?\s*(?P<rest>.*)$"
)

RELATIONSHIP_LABELS: dict[EdgeType, tuple[str, ...]] = {
    "prerequisites": ("prerequisite", "prerequisites", "prereq", "prereqs"),
    "see_also": ("see also", "related", "related docs", "related documents", "related links"),
    "follow_ups": (
        "next",
        "next steps",
        "next step",
        "follow-up",
        "follow-ups",
        "follow up",
        "follow ups",
    ),
}


@dataclass
class ExtractedLinks:
    """Links and explicitly declared relationships of one document."""

    links: LinkSet = field(default_factory=LinkSet)
    relationships: RelationshipEdges = field(default_factory=RelationshipEdges)


class LinkExtractor:
    """Extracts markdown links and explicit relationship sections from a document."""

    def extract(self, content: str, identifier: str) -> ExtractedLinks:
        """Extract links and explicit relationships from a document.

        Args:
            content: Markdown content of the document
            identifier: Corpus-relative path of the document, used for relative links

        Returns:
            ExtractedLinks with the link set and explicit relationship edges
        """
        return ExtractedLinks(
            links=self.extract_links(content, identifier),
            relationships=self.extract_relationships(content, identifier),
        )

    def extract_links(self, content: str, identifier: str) -> LinkSet:
        """Extract internal and external links from inline and reference-style links."""
        content = CODE_FENCE_PATTERN.sub("", content)
        targets = INLINE_LINK_PATTERN.findall(content) + REFERENCE_LINK_PATTERN.findall(content)

        link_set = LinkSet()
        for target in targets:
            target = target.strip()
            if not target or target.startswith("#"):
                continue

            if SCHEME_PATTERN.match(target):
                if target not in link_set.external:
                    link_set.external.append(target)
                continue

            internal = normalize_internal_target(target, identifier)
            if internal and internal not in link_set.internal:
                link_set.internal.append(internal)

        return link_set

    def extract_relationships(self, content: str, identifier: str) -> RelationshipEdges:
        """Extract relationships declared under a recognised heading or label.

        A section starts at a heading such as "## Prerequisites" or a label line
        such as "See also:" and collects the bulleted list that follows it.
        """
        content = CODE_FENCE_PATTERN.sub("", content)
        edges = RelationshipEdges()
        current: EdgeType | None = None

        for line in content.splitlines():
            edge_type, rest = _match_relationship_label(line)
            if edge_type is not None:
                current = edge_type
                if rest:
                    # First bullet may share the label line: "See also: - guide"
                    bullet = BULLET_PATTERN.match(rest)
                    if bullet:
                        self._add_bullet_target(edges, current, bullet.group(1), identifier)
                    else:
                        current = None
                continue

            if current is None:
                continue

            bullet = BULLET_PATTERN.match(line)
            if bullet:
                self._add_bullet_target(edges, current, bullet.group(1), identifier)
            elif line.strip():
                current = None

        return edges

    @staticmethod
    def _add_bullet_target(
        edges: RelationshipEdges, edge_type: EdgeType, bullet_text: str, identifier: str
    ) -> None:
        link = INLINE_LINK_PATTERN.search(bullet_text)
        if link:
            raw = link.group(1).strip()
            if not raw or raw.startswith("#") or SCHEME_PATTERN.match(raw):
                return
            target = normalize_internal_target(raw, identifier, require_path_like=False)
        else:
            raw = bullet_text.strip().strip("`").strip()
            target = normalize_internal_target(raw, identifier, require_path_like=False)

        if target:
            edges.add(edge_type, target)
        else:
            logger.debug(f"Ignoring relationship bullet in {identifier}: {bullet_text}")


def normalize_internal_target(
    target: str, identifier: str, *, require_path_like: bool = True
) -> str | None:
    """Turn an internal link target into a raw corpus-relative target.

    Relative targets ("./", "../") are resolved against the directory of the
    referencing document. The markdown extension and leading slashes are removed.

    Args:
        target: Link target as written in the document
        identifier: Identifier of the referencing document
        require_path_like: Only accept targets ending in .md or without a file extension

    Returns:
        Raw target string, or None if the target does not point at a document
    """
    target = re.split(r"[#?]", target, maxsplit=1)[0].strip()
    if not target:
        return None

    if require_path_like and not _looks_like_document_path(target):
        return None

    if target.startswith(("./", "../")):
        target = _resolve_relative(posixpath.dirname(identifier), target)

    target = strip_markdown_extension(target).lstrip("/")
    return target or None


def _looks_like_document_path(target: str) -> bool:
    if target.endswith(MARKDOWN_EXTENSION):
        return True
    last_segment = target.rstrip("/").rsplit("/", 1)[-1]
    return "/" in target and "." not in last_segment


def _resolve_relative(base_dir: str, target: str) -> str:
    segments = [segment for segment in base_dir.split("/") if segment]
    for segment in target.split("/"):
        if segment == "..":
            if segments:
                segments.pop()
        elif segment and segment != ".":
            segments.append(segment)
    return "/".join(segments)


def _match_relationship_label(line: str) -> tuple[EdgeType | None, str]:
    heading = HEADING_LABEL_PATTERN.match(line)
    if heading:
        return _edge_type_for_label(heading.group("label")), ""

    label = INLINE_LABEL_PATTERN.match(line)
    if label:
        edge_type = _edge_type_for_label(label.group("label"))
        if edge_type is not None:
            return edge_type, label.group("rest").strip()

    return None, ""


def _edge_type_for_label(label: str) -> EdgeType | None:
    normalized = re.sub(r"[*_`:]", "", label).strip().lower()
    for edge_type, synonyms in RELATIONSHIP_LABELS.items():
        if normalized in synonyms:
            return edge_type
    return None
