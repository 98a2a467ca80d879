"""Per-document metrics derived from the cross-reference index."""

from __future__ import annotations

from typing import Dict, List, Set

from .index import CrossReferenceIndex
from .logging import get_logger
from .models import CorpusManifest, FileMetrics, LinkKind

logger = get_logger("metrics")


class FileMetricsAggregator:
    """Computes one :class:`FileMetrics` row for every known document.

    Dangling references count toward a source's ``num_links`` and
    ``num_distinct_links`` and their ``*_dangling`` counterparts, but never
    toward internal, external or inbound reference counters.
    """

    def aggregate(
        self, manifest: CorpusManifest, index: CrossReferenceIndex
    ) -> List[FileMetrics]:
        line_counts: Dict[str, int] = {doc.path: doc.line_count for doc in manifest.documents}
        paths = set(line_counts)
        paths.update(index.documents)

        rows = [self._metrics_for(path, line_counts.get(path, 0), index) for path in sorted(paths)]
        logger.debug("Aggregated metrics for %d documents", len(rows))
        return rows

    def _metrics_for(
        self, path: str, num_lines: int, index: CrossReferenceIndex
    ) -> FileMetrics:
        metrics = FileMetrics(path=path, num_lines=num_lines)

        anchors = index.anchors_of(path)
        metrics.num_anchors = len(anchors)
        if anchors:
            metrics.primary_anchor = anchors[0].id

        for anchor in anchors:
            inbound = index.references_to(anchor.id)
            if not inbound:
                metrics.num_anchors_not_referenced += 1
                continue
            metrics.num_anchors_referenced += 1
            internal = sum(1 for ref in inbound if ref.kind is LinkKind.INTERNAL)
            external = len(inbound) - internal
            if internal:
                metrics.num_anchors_referenced_internal += 1
            if external:
                metrics.num_anchors_referenced_external += 1
            metrics.num_references += len(inbound)
            metrics.num_references_internal += internal
            metrics.num_references_external += external

        distinct: Dict[LinkKind, Set[str]] = {kind: set() for kind in LinkKind}
        for ref in index.references_from(path):
            metrics.num_links += 1
            distinct[ref.kind].add(ref.target)
            if ref.kind is LinkKind.INTERNAL:
                metrics.num_links_internal += 1
            elif ref.kind is LinkKind.EXTERNAL:
                metrics.num_links_external += 1
            else:
                metrics.num_links_dangling += 1

        metrics.num_distinct_links_internal = len(distinct[LinkKind.INTERNAL])
        metrics.num_distinct_links_external = len(distinct[LinkKind.EXTERNAL])
        metrics.num_distinct_links_dangling = len(distinct[LinkKind.DANGLING])
        metrics.num_distinct_links = (
            metrics.num_distinct_links_internal
            + metrics.num_distinct_links_external
            + metrics.num_distinct_links_dangling
        )
        return metrics


__all__ = ["FileMetricsAggregator"]
