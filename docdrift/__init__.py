"""
Doc-Drift

Drift detection and resolution for LLM-enriched documentation: decides
whether a newly enriched document duplicates a stored one, how it differs,
and how to merge the two.
"""

from docdrift.models import (
    DriftAnalysis,
    DriftChange,
    EnrichedDocument,
    Recommendation,
    Section,
    Significance,
)
from docdrift.similarity import similarity
from docdrift.diff import diff_metadata, diff_sections
from docdrift.drift import AnalysisOptions, DriftAnalyzer, analyze
from docdrift.merge import merge

__all__ = [
    "DriftAnalysis",
    "DriftChange",
    "EnrichedDocument",
    "Recommendation",
    "Section",
    "Significance",
    "similarity",
    "diff_metadata",
    "diff_sections",
    "AnalysisOptions",
    "DriftAnalyzer",
    "analyze",
    "merge",
]
__version__ = "0.1.0"
