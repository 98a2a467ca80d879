"""Tests for graph exporters."""

from __future__ import annotations

import json

import pytest

from docxref.graph import (
    DotExporter,
    GraphEdge,
    GraphNode,
    JsonExporter,
    ReferenceGraph,
    get_exporter,
)


def _graph() -> ReferenceGraph:
    return ReferenceGraph(
        nodes=[
            GraphNode(node_id="func", label="func.sgml"),
            GraphNode(node_id="ref_select", label="ref/select.sgml"),
        ],
        edges=[
            GraphEdge(source="ref/select.sgml", target="func.sgml", weight=4),
            GraphEdge(source="func.sgml", target="ref/select.sgml", weight=1),
        ],
    )


def test_dot_exporter_renders_nodes_then_edges() -> None:
    output = DotExporter().export(_graph())

    assert output.splitlines() == [
        "digraph {",
        '    func [ label="func.sgml" ];',
        '    ref_select [ label="ref/select.sgml" ];',
        "    ref_select -> func;",
        "    func -> ref_select;",
        "}",
    ]
    assert output.endswith("}\n")


def test_dot_exporter_can_emit_weights() -> None:
    output = DotExporter(edge_weights=True).export(_graph())
    assert "    ref_select -> func [ weight=4 ];" in output.splitlines()


def test_dot_exporter_escapes_labels() -> None:
    graph = ReferenceGraph(nodes=[GraphNode(node_id="odd", label='odd"name.sgml')])
    output = DotExporter().export(graph)
    assert '    odd [ label="odd\\"name.sgml" ];' in output.splitlines()


def test_empty_graph_still_has_markers() -> None:
    assert DotExporter().export(ReferenceGraph()).splitlines() == ["digraph {", "}"]


def test_json_exporter_lists_nodes_and_weighted_edges() -> None:
    payload = json.loads(JsonExporter().export(_graph()))

    assert payload["nodes"][1] == {"id": "ref_select", "label": "ref/select.sgml"}
    assert payload["edges"][0] == {"from": "ref_select", "to": "func", "weight": 4}


def test_get_exporter_by_name() -> None:
    assert isinstance(get_exporter("DOT"), DotExporter)
    assert isinstance(get_exporter("json"), JsonExporter)
    with pytest.raises(ValueError):
        get_exporter("svg")
