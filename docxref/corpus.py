"""Documentation corpus scanning and manifest building utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .config import DEFAULT_INCLUDE
from .logging import get_logger
from .models import CorpusManifest, DocumentMeta

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".docxref",
}

logger = get_logger("corpus")


@dataclass
class IgnoreRule:
    """Represents an exclusion pattern from .docxref.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _matches_include(rel_path: str, pattern: str) -> bool:
    """Match a path against an include glob segment by segment.

    ``*`` never crosses a directory boundary, so ``*.sgml`` only selects files at
    the corpus root. ``**`` patterns fall back to whole-path matching.
    """
    if "**" in pattern:
        return fnmatchcase(rel_path, pattern.replace("**/", "*"))
    path_parts = rel_path.split("/")
    pattern_parts = pattern.strip("/").split("/")
    if len(path_parts) != len(pattern_parts):
        return False
    return all(fnmatchcase(part, glob) for part, glob in zip(path_parts, pattern_parts))


def _iter_files(
    root: Path, include: Sequence[str], rules: Sequence[IgnoreRule]
) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in dirnames:
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if any(rule.matches(rel_path, True) for rule in rules):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if not any(_matches_include(rel_path, pattern) for pattern in include):
                continue
            if any(rule.matches(rel_path, False) for rule in rules):
                continue
            yield rel_path


def _count_lines(path: Path) -> int:
    count = 0
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            count += chunk.count(b"\n")
    return count


class CorpusScanner:
    """Walks the documentation tree to produce a manifest with line counts."""

    def scan(
        self,
        root: str | Path,
        *,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
    ) -> CorpusManifest:
        """Return a manifest describing every matching document, sorted by path."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Corpus path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Corpus path is not a directory: {root}")

        patterns = list(include) if include else list(DEFAULT_INCLUDE)
        rules = [rule for rule in map(_build_ignore_rule, exclude or []) if rule is not None]

        documents: List[DocumentMeta] = []
        for rel_path in sorted(_iter_files(root_path, patterns, rules)):
            try:
                line_count = _count_lines(root_path / rel_path)
            except OSError as exc:
                logger.warning("Unable to read %s: %s", rel_path, exc)
                documents.append(DocumentMeta(path=rel_path, line_count=0, readable=False))
                continue
            documents.append(DocumentMeta(path=rel_path, line_count=line_count))

        logger.debug("Scanner discovered %d documents under %s", len(documents), root_path)
        return CorpusManifest(root=str(root_path), documents=documents)

    def read(self, manifest: CorpusManifest, document: DocumentMeta) -> Optional[str]:
        """Return the text of ``document`` or ``None`` when it cannot be read."""
        if not document.readable:
            return None
        path = Path(manifest.root) / document.path
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Skipping unreadable document %s: %s", document.path, exc)
            return None


__all__ = ["CorpusScanner", "IgnoreRule"]
