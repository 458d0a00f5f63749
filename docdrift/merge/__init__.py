"""
Merge module for Doc-Drift.

This module combines a stored document with a newly enriched one once a
merge has been chosen.
"""

from docdrift.merge.resolver import coerce_strategy, merge, merge_sections

__all__ = [
    "coerce_strategy",
    "merge",
    "merge_sections",
]
