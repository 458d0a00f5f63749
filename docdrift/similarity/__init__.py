"""
Similarity module for Doc-Drift.

This module provides the token-set text similarity used to grade how much
a piece of documentation changed.
"""

from docdrift.similarity.jaccard import (
    HIGH_SIGNIFICANCE_THRESHOLD,
    MEDIUM_SIGNIFICANCE_THRESHOLD,
    similarity,
    significance_for,
    tokenize,
)

__all__ = [
    "HIGH_SIGNIFICANCE_THRESHOLD",
    "MEDIUM_SIGNIFICANCE_THRESHOLD",
    "similarity",
    "significance_for",
    "tokenize",
]
