"""Serializers turning a :class:`ReferenceGraph` into text."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Protocol

from jinja2 import Environment, FileSystemLoader

from .builder import ReferenceGraph

_TEMPLATES_DIR = Path(__file__).with_name("templates")


class GraphExporter(Protocol):
    """Protocol implemented by graph serializers."""

    name: str
    suffix: str

    def export(self, graph: ReferenceGraph) -> str:
        """Return the textual form of ``graph``."""


def _dot_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class DotExporter:
    """Graphviz ``digraph`` description, heaviest edges first."""

    name = "dot"
    suffix = ".dot"

    def __init__(self, *, edge_weights: bool = False, templates_dir: Path | None = None) -> None:
        self.edge_weights = edge_weights
        loader = FileSystemLoader(str(templates_dir or _TEMPLATES_DIR))
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["dot_escape"] = _dot_escape

    def export(self, graph: ReferenceGraph) -> str:
        template = self._env.get_template("digraph.dot.j2")
        rendered = template.render(
            nodes=graph.nodes,
            edges=graph.edges,
            ids=graph.node_ids(),
            edge_weights=self.edge_weights,
        )
        return rendered.rstrip("\n") + "\n"


class JsonExporter:
    """Node and edge lists as JSON."""

    name = "json"
    suffix = ".json"

    def __init__(self, *, edge_weights: bool = True) -> None:
        self.edge_weights = edge_weights

    def export(self, graph: ReferenceGraph) -> str:
        ids = graph.node_ids()
        edges = []
        for edge in graph.edges:
            payload: Dict[str, object] = {"from": ids[edge.source], "to": ids[edge.target]}
            if self.edge_weights:
                payload["weight"] = edge.weight
            edges.append(payload)
        data = {
            "nodes": [{"id": node.node_id, "label": node.label} for node in graph.nodes],
            "edges": edges,
        }
        return json.dumps(data, indent=2) + "\n"


_EXPORTERS: Dict[str, Callable[..., GraphExporter]] = {
    "dot": DotExporter,
    "json": JsonExporter,
}


def get_exporter(name: str, *, edge_weights: bool = False) -> GraphExporter:
    """Return an exporter instance by format name."""
    factory = _EXPORTERS.get(name.lower())
    if factory is None:
        known = ", ".join(sorted(_EXPORTERS))
        raise ValueError(f"Unknown graph format '{name}' (expected one of: {known})")
    return factory(edge_weights=edge_weights)


__all__ = ["DotExporter", "GraphExporter", "JsonExporter", "get_exporter"]
