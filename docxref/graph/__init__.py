"""Reference graph construction and export."""

from __future__ import annotations

from .builder import GraphEdge, GraphNode, ReferenceGraph, ReferenceGraphBuilder, node_id_for
from .exporters import DotExporter, GraphExporter, JsonExporter, get_exporter

__all__ = [
    "DotExporter",
    "GraphEdge",
    "GraphExporter",
    "GraphNode",
    "JsonExporter",
    "ReferenceGraph",
    "ReferenceGraphBuilder",
    "get_exporter",
    "node_id_for",
]
