"""Tests for the reference graph builder."""

from __future__ import annotations

from docxref.graph import ReferenceGraphBuilder, node_id_for
from docxref.index import CrossReferenceIndex
from docxref.metrics import FileMetricsAggregator
from docxref.models import CorpusManifest, DocumentMeta


def _graph(anchors, references):
    paths = sorted(set(anchors) | set(references))
    manifest = CorpusManifest(
        root="/corpus", documents=[DocumentMeta(path=path, line_count=1) for path in paths]
    )
    index = CrossReferenceIndex.build(list(anchors.items()), list(references.items()))
    metrics = FileMetricsAggregator().aggregate(manifest, index)
    return ReferenceGraphBuilder().build(metrics, index)


def test_node_id_for_sanitizes_paths() -> None:
    assert node_id_for("ref/create-table.sgml") == "ref_create_table"
    assert node_id_for("func.sgml") == "func"
    assert node_id_for("2pc.sgml") == "n_2pc"
    assert node_id_for("README") == "README"


def test_edges_weight_external_references_only() -> None:
    graph = _graph(
        {"a.sgml": ["a"], "b.sgml": ["b"], "c.sgml": ["c"]},
        {
            "a.sgml": ["b", "b", "c", "a", "nope-1234"],
            "c.sgml": ["b", "b", "b"],
        },
    )

    assert [(edge.source, edge.target, edge.weight) for edge in graph.edges] == [
        ("c.sgml", "b.sgml", 3),
        ("a.sgml", "b.sgml", 2),
        ("a.sgml", "c.sgml", 1),
    ]
    assert all(edge.source != edge.target for edge in graph.edges)


def test_every_document_becomes_a_node() -> None:
    graph = _graph({"a.sgml": ["a"], "ref/b.sgml": ["b"]}, {"lonely.sgml": []})

    assert [(node.node_id, node.label) for node in graph.nodes] == [
        ("a", "a.sgml"),
        ("lonely", "lonely.sgml"),
        ("ref_b", "ref/b.sgml"),
    ]
    assert graph.edges == []


def test_colliding_node_ids_are_disambiguated() -> None:
    graph = _graph({"a-b.sgml": ["x"], "a_b.sgml": ["y"]}, {})

    ids = [node.node_id for node in graph.nodes]
    assert len(set(ids)) == 2
    assert ids[0] == "a_b"
    assert ids[1] == "a_b_2"


def test_equal_weights_are_ordered_by_path() -> None:
    graph = _graph(
        {"a.sgml": ["a"], "b.sgml": ["b"]},
        {"b.sgml": ["a"], "a.sgml": ["b"]},
    )

    assert [(edge.source, edge.target) for edge in graph.edges] == [
        ("a.sgml", "b.sgml"),
        ("b.sgml", "a.sgml"),
    ]
