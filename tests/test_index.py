"""Tests for docxref.index."""

from __future__ import annotations

import pytest

from docxref.index import CrossReferenceIndex, DuplicateAnchorError
from docxref.models import LinkKind


def _build(anchors, references) -> CrossReferenceIndex:
    return CrossReferenceIndex.build(list(anchors.items()), list(references.items()))


def test_build_assigns_global_declaration_order() -> None:
    index = _build(
        {"a.sgml": ["a", "a-sect1"], "b.sgml": ["b"]},
        {},
    )

    assert [anchor.order for anchor in index.anchors_of("a.sgml")] == [1, 2]
    assert index.anchors["b"].order == 3
    assert index.primary_anchor("a.sgml").id == "a"
    assert index.owner_of("a-sect1") == "a.sgml"
    assert index.owner_of("missing") is None


def test_duplicate_anchor_across_documents_names_both_locations() -> None:
    with pytest.raises(DuplicateAnchorError) as excinfo:
        _build({"a.sgml": ["shared"], "b.sgml": ["shared"]}, {})

    error = excinfo.value
    assert error.anchor_id == "shared"
    assert (error.first, error.second) == ("a.sgml", "b.sgml")
    assert "a.sgml" in str(error) and "b.sgml" in str(error)


def test_duplicate_anchor_within_one_document_is_rejected() -> None:
    with pytest.raises(DuplicateAnchorError) as excinfo:
        _build({"a.sgml": ["a", "a"]}, {})

    assert excinfo.value.first == excinfo.value.second == "a.sgml"


def test_references_are_classified_internal_external_and_dangling() -> None:
    index = _build(
        {"a.sgml": ["a"], "b.sgml": ["b"]},
        {"a.sgml": ["a", "b", "nope-1234"]},
    )

    kinds = {ref.target: ref.kind for ref in index.references_from("a.sgml")}
    assert kinds == {
        "a": LinkKind.INTERNAL,
        "b": LinkKind.EXTERNAL,
        "nope-1234": LinkKind.DANGLING,
    }
    dangling = index.dangling
    assert len(dangling) == 1
    assert dangling[0].target_document is None


def test_resolution_sees_anchors_declared_after_the_referencing_document() -> None:
    index = CrossReferenceIndex.build(
        [("a.sgml", []), ("z.sgml", ["late"])],
        [("a.sgml", ["late"])],
    )

    (ref,) = index.references_from("a.sgml")
    assert ref.kind is LinkKind.EXTERNAL
    assert ref.target_document == "z.sgml"


def test_repeated_references_are_kept_as_distinct_records() -> None:
    index = _build({"b.sgml": ["b"]}, {"a.sgml": ["b", "b", "b"]})

    assert len(index.references_to("b")) == 3
    assert len(index.references_from("a.sgml")) == 3
    assert index.references_to("unknown") == ()


def test_documents_include_reference_only_sources() -> None:
    index = _build({"b.sgml": ["b"]}, {"a.sgml": ["b"]})

    assert set(index.documents) == {"a.sgml", "b.sgml"}
    assert index.anchors_of("a.sgml") == ()
