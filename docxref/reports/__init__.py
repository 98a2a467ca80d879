"""Ranking reports and their renderers."""

from __future__ import annotations

from .render import ReportRenderer
from .scoring import (
    DanglingRow,
    PartialAdoptionRow,
    ScoringReportGenerator,
    ScoringReports,
    SingleAnchorRow,
    SingleTargetRow,
)

__all__ = [
    "DanglingRow",
    "PartialAdoptionRow",
    "ReportRenderer",
    "ScoringReportGenerator",
    "ScoringReports",
    "SingleAnchorRow",
    "SingleTargetRow",
]
