"""Text and JSON rendering for scoring reports."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Dict, List, Sequence, Tuple

from .scoring import ScoringReports

_RULE = "=" * 72

_SINGLE_ANCHOR_BANNER = (
    "Files exposing a single link that are referenced several times.",
    "Ranked by number of references * number of lines.",
    "Subsections of these pages may deserve their own ids.",
)
_PARTIAL_ADOPTION_BANNER = (
    "Files where most anchors are never referenced.",
    "Ids may have been added to these pages without references being",
    "updated to point at the more specific sections.",
)
_SINGLE_TARGET_BANNER = (
    "Files with more than one anchor where only one anchor is referenced.",
    "Ranked by number of anchors * number of references.",
)
_DANGLING_BANNER = (
    "Reference targets that match no declared anchor.",
)

Column = Tuple[str, bool]


class ReportRenderer:
    """Formats :class:`ScoringReports` as column tables or JSON."""

    def render_text(self, reports: ScoringReports) -> str:
        sections = [
            _section(
                _SINGLE_ANCHOR_BANNER,
                [("File Name", False), ("# References", True), ("# Lines", True), ("Reference Score", True)],
                [
                    [row.path, str(row.num_references), str(row.num_lines), str(row.score)]
                    for row in reports.single_anchor
                ],
            ),
            _section(
                _PARTIAL_ADOPTION_BANNER,
                [
                    ("File Name", False),
                    ("# References", True),
                    ("# Lines", True),
                    ("# Anchors", True),
                    ("# Anchors Referenced", True),
                    ("% Anchors Referenced", True),
                ],
                [
                    [
                        row.path,
                        str(row.num_references),
                        str(row.num_lines),
                        str(row.num_anchors),
                        str(row.num_anchors_referenced),
                        row.pct_display,
                    ]
                    for row in reports.partial_adoption
                ],
            ),
            _section(
                _SINGLE_TARGET_BANNER,
                [
                    ("File Name", False),
                    ("# References", True),
                    ("# Anchors", True),
                    ("Only Anchor Referenced", False),
                    ("Reference Score", True),
                ],
                [
                    [
                        row.path,
                        str(row.num_references),
                        str(row.num_anchors),
                        row.referenced_anchor or "",
                        str(row.score),
                    ]
                    for row in reports.single_target
                ],
            ),
        ]
        if reports.dangling:
            sections.append(
                _section(
                    _DANGLING_BANNER,
                    [("Target", False), ("# Occurrences", True), ("Referenced From", False)],
                    [
                        [row.target, str(row.occurrences), ", ".join(row.sources)]
                        for row in reports.dangling
                    ],
                )
            )
        return "\n".join(sections)

    def render_json(self, reports: ScoringReports) -> str:
        return json.dumps(self.as_dict(reports), indent=2, sort_keys=True) + "\n"

    def as_dict(self, reports: ScoringReports) -> Dict[str, object]:
        partial = []
        for row in reports.partial_adoption:
            payload = asdict(row)
            payload["pct_anchors_referenced"] = row.pct_display
            partial.append(payload)
        return {
            "single_anchor": [asdict(row) for row in reports.single_anchor],
            "partial_adoption": partial,
            "single_target": [asdict(row) for row in reports.single_target],
            "dangling": [asdict(row) for row in reports.dangling],
        }


def _section(banner: Sequence[str], columns: Sequence[Column], rows: List[List[str]]) -> str:
    lines = ["", _RULE, *banner, _RULE, ""]
    lines.extend(_table(columns, rows))
    return "\n".join(lines) + "\n"


def _table(columns: Sequence[Column], rows: List[List[str]]) -> List[str]:
    widths = [len(title) for title, _ in columns]
    for row in rows:
        for position, cell in enumerate(row):
            widths[position] = max(widths[position], len(cell))

    def _format(cells: Sequence[str]) -> str:
        parts = []
        for (_, right), width, cell in zip(columns, widths, cells):
            parts.append(cell.rjust(width) if right else cell.ljust(width))
        return "  ".join(parts).rstrip()

    lines = [_format([title for title, _ in columns]), _format(["-" * width for width in widths])]
    lines.extend(_format(row) for row in rows)
    return lines


__all__ = ["ReportRenderer"]
