"""Attribute-value extractors for anchor declarations and reference targets."""

from __future__ import annotations

import re
from typing import Iterator

from .base import Extractor


class AttributeExtractor(Extractor):
    """Yields every ``name="value"`` occurrence of one markup attribute.

    Values are taken verbatim up to the next double quote; empty values are
    skipped. The attribute name must start at a word boundary, so
    ``zoneid="x"`` is not an ``id``, but a namespace prefix such as ``xml:id``
    is accepted.
    """

    def __init__(self, attribute: str) -> None:
        if not attribute:
            raise ValueError("attribute name must not be empty")
        self.attribute = attribute
        self._pattern = re.compile(
            rf'(?<![\w.:-])(?:[A-Za-z_][\w.-]*:)?{re.escape(attribute)}="([^"]+)"'
        )

    def extract(self, text: str) -> Iterator[str]:
        for match in self._pattern.finditer(text):
            yield match.group(1)


class AnchorExtractor(AttributeExtractor):
    """Identifier declarations (``id="..."``) in document order."""

    name = "anchors"

    def __init__(self, attribute: str = "id") -> None:
        super().__init__(attribute)


class ReferenceExtractor(AttributeExtractor):
    """Reference targets (``linkend="..."``) in document order, repeats kept."""

    name = "references"

    def __init__(self, attribute: str = "linkend") -> None:
        super().__init__(attribute)


__all__ = ["AnchorExtractor", "AttributeExtractor", "ReferenceExtractor"]
