"""Helper utilities for constructing temporary documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from docxref.corpus import CorpusScanner
from docxref.models import CorpusManifest


def sgml_page(
    anchors: Iterable[str] = (),
    links: Iterable[str] = (),
    *,
    lines: int = 0,
) -> str:
    """Render a minimal SGML page declaring ``anchors`` and linking ``links``.

    The page is padded with filler paragraphs until it has at least ``lines``
    newline characters.
    """
    anchors = list(anchors)
    body = []
    if anchors:
        body.append(f'<refentry id="{anchors[0]}">')
        for anchor in anchors[1:]:
            body.append(f'  <sect2 id="{anchor}"><title>{anchor}</title></sect2>')
    else:
        body.append("<refentry>")
    for link in links:
        body.append(f'  <para>See <xref linkend="{link}"/>.</para>')
    body.append("</refentry>")
    while len(body) < lines:
        body.append("  <para>filler</para>")
    return "\n".join(body) + "\n"


class CorpusBuilder:
    """Utility for writing SGML files into a throwaway corpus and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "sgml"
        self.root.mkdir()
        self._scanner = CorpusScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the corpus."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def page(self, relative: str, anchors: Iterable[str] = (), links: Iterable[str] = (), *, lines: int = 0) -> None:
        """Write a generated SGML page."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(sgml_page(anchors, links, lines=lines), encoding="utf-8")

    def scan(self) -> CorpusManifest:
        """Return a fresh manifest of the corpus contents."""
        return self._scanner.scan(self.root)

    def path(self) -> Path:
        return self.root


__all__ = ["CorpusBuilder", "sgml_page"]
