"""Ranking reports that flag pages needing finer-grained anchors."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from ..config import DEFAULT_MIN_LINES, DEFAULT_MIN_REFERENCES
from ..index import CrossReferenceIndex
from ..models import FileMetrics


@dataclass
class SingleAnchorRow:
    path: str
    num_references: int
    num_lines: int
    score: int


@dataclass
class PartialAdoptionRow:
    path: str
    num_references: int
    num_lines: int
    num_anchors: int
    num_anchors_referenced: int
    pct_anchors_referenced: float

    @property
    def pct_display(self) -> str:
        return f"{self.pct_anchors_referenced:.2f}"


@dataclass
class SingleTargetRow:
    path: str
    num_references: int
    num_anchors: int
    referenced_anchor: Optional[str]
    score: int


@dataclass
class DanglingRow:
    """A reference target that resolves to no declared anchor."""

    target: str
    occurrences: int
    sources: List[str] = field(default_factory=list)


@dataclass
class ScoringReports:
    """The three ranked reports plus the dangling-reference diagnostics."""

    single_anchor: List[SingleAnchorRow] = field(default_factory=list)
    partial_adoption: List[PartialAdoptionRow] = field(default_factory=list)
    single_target: List[SingleTargetRow] = field(default_factory=list)
    dangling: List[DanglingRow] = field(default_factory=list)


class ScoringReportGenerator:
    """Filters and ranks :class:`FileMetrics` rows.

    The scores are deliberately simple products and percentages. Ties left by
    each report's ordering are broken by document path.
    """

    def __init__(
        self,
        *,
        min_lines: int = DEFAULT_MIN_LINES,
        min_references: int = DEFAULT_MIN_REFERENCES,
    ) -> None:
        self.min_lines = min_lines
        self.min_references = min_references

    def generate(
        self, metrics: Sequence[FileMetrics], index: CrossReferenceIndex
    ) -> ScoringReports:
        return ScoringReports(
            single_anchor=self.single_anchor_report(metrics),
            partial_adoption=self.partial_adoption_report(metrics),
            single_target=self.single_target_report(metrics, index),
            dangling=self.dangling_report(index),
        )

    def single_anchor_report(self, metrics: Sequence[FileMetrics]) -> List[SingleAnchorRow]:
        """Pages exposing a single link that are referenced often and are large."""
        rows = [
            SingleAnchorRow(
                path=row.path,
                num_references=row.num_references,
                num_lines=row.num_lines,
                score=row.num_references * row.num_lines,
            )
            for row in metrics
            if row.num_links == 1
            and row.num_references >= self.min_references
            and row.num_lines >= self.min_lines
        ]
        rows.sort(key=lambda item: (-item.score, item.path))
        return rows

    def partial_adoption_report(
        self, metrics: Sequence[FileMetrics]
    ) -> List[PartialAdoptionRow]:
        """Pages with fine-grained anchors that references mostly ignore."""
        rows = [
            PartialAdoptionRow(
                path=row.path,
                num_references=row.num_references,
                num_lines=row.num_lines,
                num_anchors=row.num_anchors,
                num_anchors_referenced=row.num_anchors_referenced,
                pct_anchors_referenced=100.0 * row.num_anchors_referenced / row.num_anchors,
            )
            for row in metrics
            if row.num_anchors > 1
            and row.num_references >= self.min_references
            and 0 < row.num_anchors_referenced < row.num_anchors
            and row.num_lines >= self.min_lines
        ]
        rows.sort(key=lambda item: (item.pct_anchors_referenced, -item.num_anchors, item.path))
        return rows

    def single_target_report(
        self, metrics: Sequence[FileMetrics], index: CrossReferenceIndex
    ) -> List[SingleTargetRow]:
        """Pages with several anchors of which exactly one is ever referenced."""
        rows = [
            SingleTargetRow(
                path=row.path,
                num_references=row.num_references,
                num_anchors=row.num_anchors,
                referenced_anchor=_only_referenced_anchor(row.path, index),
                score=row.num_anchors * row.num_references,
            )
            for row in metrics
            if row.num_anchors_referenced == 1
            and row.num_anchors > 1
            and row.num_references > 1
        ]
        rows.sort(key=lambda item: (-item.score, item.path))
        return rows

    def dangling_report(self, index: CrossReferenceIndex) -> List[DanglingRow]:
        """Targets that match no anchor, most frequent first."""
        counts: Counter[str] = Counter()
        sources: Dict[str, Set[str]] = defaultdict(set)
        for ref in index.dangling:
            counts[ref.target] += 1
            sources[ref.target].add(ref.source)
        rows = [
            DanglingRow(target=target, occurrences=count, sources=sorted(sources[target]))
            for target, count in counts.items()
        ]
        rows.sort(key=lambda item: (-item.occurrences, item.target))
        return rows


def _only_referenced_anchor(path: str, index: CrossReferenceIndex) -> Optional[str]:
    for anchor in index.anchors_of(path):
        if index.references_to(anchor.id):
            return anchor.id
    return None


__all__ = [
    "DanglingRow",
    "PartialAdoptionRow",
    "ScoringReportGenerator",
    "ScoringReports",
    "SingleAnchorRow",
    "SingleTargetRow",
]
