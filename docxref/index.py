"""Global anchor index and reference classification."""

from __future__ import annotations

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .logging import get_logger
from .models import Anchor, ClassifiedReference, LinkKind

logger = get_logger("index")


class DuplicateAnchorError(RuntimeError):
    """Raised when an anchor id is declared more than once in the corpus."""

    def __init__(self, anchor_id: str, first: str, second: str) -> None:
        location = f"{first} and {second}" if first != second else f"{first} (twice)"
        super().__init__(f"Anchor id '{anchor_id}' is declared in {location}")
        self.anchor_id = anchor_id
        self.first = first
        self.second = second


class CrossReferenceIndex:
    """Maps every anchor id to its owning document and classifies references.

    Instances are built once with :meth:`build` and are read-only afterwards.
    """

    def __init__(
        self,
        anchors: Mapping[str, Anchor],
        references: Sequence[ClassifiedReference],
        documents: Sequence[str],
    ) -> None:
        self._anchors = MappingProxyType(dict(anchors))
        self._references: Tuple[ClassifiedReference, ...] = tuple(references)
        self._documents: Tuple[str, ...] = tuple(documents)

        by_document: Dict[str, List[Anchor]] = defaultdict(list)
        for anchor in sorted(self._anchors.values(), key=lambda item: item.order):
            by_document[anchor.document].append(anchor)
        self._anchors_by_document = {key: tuple(value) for key, value in by_document.items()}

        outgoing: Dict[str, List[ClassifiedReference]] = defaultdict(list)
        incoming: Dict[str, List[ClassifiedReference]] = defaultdict(list)
        for reference in self._references:
            outgoing[reference.source].append(reference)
            incoming[reference.target].append(reference)
        self._outgoing = {key: tuple(value) for key, value in outgoing.items()}
        self._incoming = {key: tuple(value) for key, value in incoming.items()}

    @classmethod
    def build(
        cls,
        anchors: Iterable[Tuple[str, Iterable[str]]],
        references: Iterable[Tuple[str, Iterable[str]]],
    ) -> "CrossReferenceIndex":
        """Build the index from per-document anchor and reference sequences.

        Every anchor is inserted before any reference is resolved. A repeated
        anchor id raises :class:`DuplicateAnchorError`.
        """
        anchor_map: Dict[str, Anchor] = {}
        documents: Dict[str, None] = {}
        order = 0
        for document, ids in anchors:
            documents.setdefault(document, None)
            for anchor_id in ids:
                existing = anchor_map.get(anchor_id)
                if existing is not None:
                    raise DuplicateAnchorError(anchor_id, existing.document, document)
                order += 1
                anchor_map[anchor_id] = Anchor(id=anchor_id, document=document, order=order)

        classified: List[ClassifiedReference] = []
        for source, targets in references:
            documents.setdefault(source, None)
            for target in targets:
                classified.append(_classify(anchor_map, source, target))

        index = cls(anchor_map, classified, list(documents))
        logger.debug(
            "Indexed %d anchors and %d references (%d dangling)",
            len(anchor_map),
            len(classified),
            len(index.dangling),
        )
        return index

    @property
    def anchors(self) -> Mapping[str, Anchor]:
        return self._anchors

    @property
    def references(self) -> Tuple[ClassifiedReference, ...]:
        return self._references

    @property
    def documents(self) -> Tuple[str, ...]:
        """Documents that contributed anchors or references, in input order."""
        return self._documents

    @property
    def dangling(self) -> Tuple[ClassifiedReference, ...]:
        return tuple(ref for ref in self._references if ref.kind is LinkKind.DANGLING)

    def owner_of(self, anchor_id: str) -> Optional[str]:
        anchor = self._anchors.get(anchor_id)
        return anchor.document if anchor is not None else None

    def anchors_of(self, document: str) -> Tuple[Anchor, ...]:
        """Anchors declared by ``document`` in declaration order."""
        return self._anchors_by_document.get(document, ())

    def primary_anchor(self, document: str) -> Optional[Anchor]:
        anchors = self.anchors_of(document)
        return anchors[0] if anchors else None

    def references_from(self, document: str) -> Tuple[ClassifiedReference, ...]:
        return self._outgoing.get(document, ())

    def references_to(self, anchor_id: str) -> Tuple[ClassifiedReference, ...]:
        return self._incoming.get(anchor_id, ())


def _classify(anchors: Mapping[str, Anchor], source: str, target: str) -> ClassifiedReference:
    anchor = anchors.get(target)
    if anchor is None:
        return ClassifiedReference(source=source, target=target, kind=LinkKind.DANGLING)
    kind = LinkKind.INTERNAL if anchor.document == source else LinkKind.EXTERNAL
    return ClassifiedReference(
        source=source, target=target, kind=kind, target_document=anchor.document
    )


__all__ = ["CrossReferenceIndex", "DuplicateAnchorError"]
