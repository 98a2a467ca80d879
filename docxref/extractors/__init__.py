"""Extractor implementations and corpus extraction helpers."""

from __future__ import annotations

from .attributes import AnchorExtractor, AttributeExtractor, ReferenceExtractor
from .base import Extractor
from .runner import DocumentExtraction, extract_corpus

__all__ = [
    "AnchorExtractor",
    "AttributeExtractor",
    "DocumentExtraction",
    "Extractor",
    "ReferenceExtractor",
    "extract_corpus",
]
