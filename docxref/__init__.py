"""Cross-reference analysis for large documentation trees."""

from .index import CrossReferenceIndex, DuplicateAnchorError
from .orchestrator import AnalysisResult, Orchestrator

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "CrossReferenceIndex",
    "DuplicateAnchorError",
    "Orchestrator",
    "__version__",
]
