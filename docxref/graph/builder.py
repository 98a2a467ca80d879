"""Document-level reference graph construction."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from ..index import CrossReferenceIndex
from ..models import FileMetrics, LinkKind

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class GraphNode:
    node_id: str
    label: str


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: int


@dataclass
class ReferenceGraph:
    """Directed, weighted graph of cross-document references.

    ``edges`` refer to nodes by document path and are sorted heaviest first.
    """

    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> Dict[str, str]:
        return {node.label: node.node_id for node in self.nodes}


def node_id_for(path: str) -> str:
    """Return a graph-safe identifier for a document path."""
    pure = PurePosixPath(path)
    stem = str(pure.with_suffix("")) if pure.suffix else path
    candidate = _UNSAFE_CHARS.sub("_", stem) or "_"
    if candidate[0].isdigit():
        candidate = f"n_{candidate}"
    return candidate


class ReferenceGraphBuilder:
    """Aggregates external references into document-to-document edges."""

    def build(
        self, metrics: Sequence[FileMetrics], index: CrossReferenceIndex
    ) -> ReferenceGraph:
        nodes = _build_nodes(row.path for row in metrics)
        known = {node.label for node in nodes}

        weights: Counter[Tuple[str, str]] = Counter()
        for ref in index.references:
            if ref.kind is not LinkKind.EXTERNAL or ref.target_document is None:
                continue
            if ref.source not in known or ref.target_document not in known:
                continue
            weights[(ref.source, ref.target_document)] += 1

        edges = [
            GraphEdge(source=source, target=target, weight=weight)
            for (source, target), weight in weights.items()
        ]
        edges.sort(key=lambda edge: (-edge.weight, edge.source, edge.target))
        return ReferenceGraph(nodes=nodes, edges=edges)


def _build_nodes(paths: Iterable[str]) -> List[GraphNode]:
    nodes: List[GraphNode] = []
    used: Set[str] = set()
    for path in paths:
        base = node_id_for(path)
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        nodes.append(GraphNode(node_id=candidate, label=path))
    return nodes


__all__ = [
    "GraphEdge",
    "GraphNode",
    "ReferenceGraph",
    "ReferenceGraphBuilder",
    "node_id_for",
]
