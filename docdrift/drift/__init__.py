"""
Drift analysis module for Doc-Drift.

This module decides how a newly enriched document relates to a stored one:
which changes it carries, how confident the comparison is, and what to do.
"""

from docdrift.drift.analyzer import (
    AnalysisOptions,
    DriftAnalyzer,
    analyze,
    calculate_confidence,
    recommend,
)

__all__ = [
    "AnalysisOptions",
    "DriftAnalyzer",
    "analyze",
    "calculate_confidence",
    "recommend",
]
