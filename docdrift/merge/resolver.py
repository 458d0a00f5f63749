"""
Merge Resolution for Doc-Drift

Combines a stored document and a newly enriched one into a single document
according to a conflict-resolution strategy.

Strategies:
    PREFER_NEW:       Incoming content and metadata, stored identity
    PREFER_EXISTING:  The stored document, re-stamped
    MERGE_SECTIONS:   Section-level merge, incoming wins conflicts (default)

Merging is lossy by construction: removed sections disappear and
conflicting metadata takes the incoming value. Drifts that need a human
decision are routed through MANUAL_REVIEW / MERGE_REQUIRED before merging.
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional, Union

from docdrift.diff import diff_sections
from docdrift.models import (
    ConflictResolution,
    DocumentMetadata,
    EnrichedDocument,
    MergeStrategy,
    utc_now,
)


StrategyLike = Union[ConflictResolution, MergeStrategy, str]


def coerce_strategy(strategy: StrategyLike) -> ConflictResolution:
    """
    Normalize a strategy given as enum, MergeStrategy or its string value.

    Raises:
        ValueError: If a string does not name a known strategy
    """
    if isinstance(strategy, MergeStrategy):
        return strategy.conflict_resolution
    if isinstance(strategy, ConflictResolution):
        return strategy
    return ConflictResolution(strategy)


def merge(
    existing: EnrichedDocument,
    incoming: EnrichedDocument,
    strategy: StrategyLike = ConflictResolution.MERGE_SECTIONS,
    now: Optional[datetime] = None,
) -> EnrichedDocument:
    """
    Merge two documents.

    Args:
        existing: The stored document
        incoming: The newly enriched document
        strategy: How conflicts are resolved
        now: Timestamp for updated_at (and enrichment_timestamp when merging
             sections); defaults to the current UTC time

    Returns:
        The merged document; existing's id and created_at are kept by every
        strategy
    """
    now = now or utc_now()
    resolution = coerce_strategy(strategy)

    if resolution is ConflictResolution.PREFER_NEW:
        return replace(
            incoming,
            id=existing.id,
            created_at=existing.created_at,
            updated_at=now,
        )

    if resolution is ConflictResolution.PREFER_EXISTING:
        return existing.touched(now)

    return merge_sections(existing, incoming, now)


def merge_sections(
    existing: EnrichedDocument,
    incoming: EnrichedDocument,
    now: Optional[datetime] = None,
) -> EnrichedDocument:
    """
    Merge two documents section by section.

    The merged sections are the unchanged ones, then the incoming version of
    every modified one, then the added ones. Removed sections are dropped.
    Title, summary, description and purpose come from incoming. Metadata is
    merged shallowly with incoming's defined fields winning.
    """
    now = now or utc_now()
    diff = diff_sections(existing.content.sections, incoming.content.sections)

    sections = [
        *diff.unchanged,
        *(modification.incoming for modification in diff.modified),
        *diff.added,
    ]

    merged_metadata = {
        **existing.metadata.as_mapping(),
        **incoming.metadata.as_mapping(),
    }
    metadata = replace(
        DocumentMetadata.from_mapping(merged_metadata),
        enrichment_timestamp=now,
    )

    return replace(
        existing,
        content=replace(incoming.content, sections=sections),
        metadata=metadata,
        updated_at=now,
    )
