"""Runs anchor and reference extraction across a corpus manifest."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..logging import get_logger
from ..models import CorpusManifest, DocumentMeta
from .base import Extractor

logger = get_logger("extractors")

DocumentReader = Callable[[CorpusManifest, DocumentMeta], Optional[str]]


@dataclass
class DocumentExtraction:
    """Raw anchor ids and reference targets pulled from one document."""

    path: str
    anchors: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    skipped: bool = False


def extract_corpus(
    manifest: CorpusManifest,
    reader: DocumentReader,
    anchors: Extractor,
    references: Extractor,
    *,
    workers: int = 1,
) -> List[DocumentExtraction]:
    """Extract every document, returning results in manifest order.

    Each document is read and extracted independently, so ``workers > 1`` fans
    the work out on a thread pool without changing the result.
    """

    def _extract(document: DocumentMeta) -> DocumentExtraction:
        text = reader(manifest, document)
        if text is None:
            return DocumentExtraction(path=document.path, skipped=True)
        return DocumentExtraction(
            path=document.path,
            anchors=list(anchors.extract(text)),
            references=list(references.extract(text)),
        )

    if workers > 1 and len(manifest.documents) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_extract, manifest.documents))
    else:
        results = [_extract(document) for document in manifest.documents]

    skipped = sum(1 for result in results if result.skipped)
    if skipped:
        logger.warning("Skipped %d unreadable document(s) during extraction", skipped)
    logger.debug(
        "Extracted %d anchors and %d references from %d documents",
        sum(len(result.anchors) for result in results),
        sum(len(result.references) for result in results),
        len(results),
    )
    return results
