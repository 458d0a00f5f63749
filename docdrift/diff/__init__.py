"""
Diff module for Doc-Drift.

This module provides the building blocks of drift analysis: section
alignment, metadata comparison and detailed text diffs for reviewers.
"""

from docdrift.diff.sections import (
    SectionDiff,
    SectionModification,
    diff_sections,
    index_sections,
)
from docdrift.diff.metadata import (
    DEFAULT_METADATA_FIELDS,
    diff_metadata,
    format_metadata_value,
    metadata_significance,
)
from docdrift.diff.text import DetailedDiff, DiffHunk, detailed_diff

__all__ = [
    "SectionDiff",
    "SectionModification",
    "diff_sections",
    "index_sections",
    "DEFAULT_METADATA_FIELDS",
    "diff_metadata",
    "format_metadata_value",
    "metadata_significance",
    "DetailedDiff",
    "DiffHunk",
    "detailed_diff",
]
