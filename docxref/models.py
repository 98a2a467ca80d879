"""Core data models shared across docxref components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class DocumentMeta:
    """A corpus document identified by its corpus-relative path."""

    path: str
    line_count: int
    readable: bool = True


@dataclass
class CorpusManifest:
    """Normalized view of the documentation tree for extractors."""

    root: str
    documents: List[DocumentMeta] = field(default_factory=list)

    def paths(self) -> List[str]:
        return [document.path for document in self.documents]


@dataclass(frozen=True)
class Anchor:
    """An identifier declared inside a document.

    ``order`` is the 1-based global declaration sequence; the lowest order
    within a document marks its page-level anchor.
    """

    id: str
    document: str
    order: int


@dataclass(frozen=True)
class Reference:
    """One occurrence of a reference target inside a source document."""

    source: str
    target: str


class LinkKind(str, Enum):
    """Resolution of a reference against the global anchor map."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    DANGLING = "dangling"


@dataclass(frozen=True)
class ClassifiedReference:
    """A reference together with its resolution."""

    source: str
    target: str
    kind: LinkKind
    target_document: Optional[str] = None


@dataclass
class FileMetrics:
    """Per-document anchor, reference and link counters."""

    path: str
    num_lines: int = 0
    num_anchors: int = 0
    num_anchors_referenced: int = 0
    num_anchors_not_referenced: int = 0
    num_anchors_referenced_internal: int = 0
    num_anchors_referenced_external: int = 0
    num_references: int = 0
    num_references_internal: int = 0
    num_references_external: int = 0
    num_links: int = 0
    num_links_internal: int = 0
    num_links_external: int = 0
    num_links_dangling: int = 0
    num_distinct_links: int = 0
    num_distinct_links_internal: int = 0
    num_distinct_links_external: int = 0
    num_distinct_links_dangling: int = 0
    primary_anchor: Optional[str] = None
