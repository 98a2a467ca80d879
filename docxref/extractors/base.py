"""Base classes for extractor plugins."""

from abc import ABC, abstractmethod
from typing import Iterator


class Extractor(ABC):
    """Contract for extractors that pull attribute values out of document text."""

    name: str = "extractor"

    @abstractmethod
    def extract(self, text: str) -> Iterator[str]:
        """Yield values in document order, one per occurrence."""
