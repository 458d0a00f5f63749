"""
Drift Analysis for Doc-Drift

This module implements the core drift analysis, comparing a newly enriched
document against a stored one to decide whether it is a duplicate to update,
a variant to merge, or something new.

Comparison order:
    1. Title         (never graded LOW)
    2. Description   (shared significance rule)
    3. Purpose       (shared significance rule)
    4. Sections      (deletions, additions: MEDIUM; modifications: shared rule)
    5. Metadata      (static per-field significance)

Recommendations:
    CREATE_NEW:       No changes at all, or too many to relate the documents
    UPDATE_EXISTING:  A handful of changes, at most one of them HIGH
    MANUAL_REVIEW:    More than two HIGH changes, or low confidence
    MERGE_REQUIRED:   Everything in between

Academic Context:
    Input: Existing EnrichedDocument + incoming EnrichedDocument
    Transformation: Field-wise comparison → graded change list → scoring
    Output: DriftAnalysis with confidence and recommendation
    Limitation: Jaccard similarity is blind to word order and meaning

Design Decisions:
    - Pure: no clock reads, no logging, no I/O
    - Deterministic: same inputs always produce the same analysis
    - Explainable: every change names the dotted path it came from
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from docdrift.diff import diff_metadata, diff_sections
from docdrift.models import (
    ChangeType,
    DriftAnalysis,
    DriftChange,
    EnrichedDocument,
    Recommendation,
    Section,
    Significance,
)
from docdrift.similarity import HIGH_SIGNIFICANCE_THRESHOLD, significance_for, similarity


DEFAULT_THRESHOLD = 0.7

# Similarity above which a change is skipped when minor changes are ignored
MINOR_CHANGE_SIMILARITY = 0.95

BASE_CONFIDENCE = 0.8
PER_CHANGE_PENALTY = 0.05
MAX_CHANGE_COUNT_PENALTY = 0.4
HIGH_CHANGE_PENALTY = 0.15
MEDIUM_CHANGE_PENALTY = 0.08
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0


@dataclass(frozen=True)
class AnalysisOptions:
    """
    Options controlling a drift analysis.

    Attributes:
        threshold: Similarity a stored document must reach to be treated as
            the same subject as the incoming one. Carried for the workflow's
            candidate matching; it does not change how changes are graded.
        ignore_minor_changes: Skip near-identical text changes and drop every
            LOW change from the result
        focus_areas: Metadata fields to compare instead of the defaults
    """

    threshold: float = DEFAULT_THRESHOLD
    ignore_minor_changes: bool = False
    focus_areas: Optional[Sequence[str]] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {self.threshold}")


class DriftAnalyzer:
    """
    Compares incoming documents against stored ones with fixed options.

    The analyzer holds nothing but its options, so one instance can be
    shared freely.

    Usage:
        analyzer = DriftAnalyzer(AnalysisOptions(ignore_minor_changes=True))
        analysis = analyzer.analyze(existing, incoming)
    """

    def __init__(self, options: Optional[AnalysisOptions] = None) -> None:
        self._options = options or AnalysisOptions()

    @property
    def options(self) -> AnalysisOptions:
        return self._options

    def analyze(
        self,
        existing: EnrichedDocument,
        incoming: EnrichedDocument,
    ) -> DriftAnalysis:
        """Analyze drift between two documents using the bound options."""
        return analyze(existing, incoming, self._options)

    def with_options(self, **changes) -> "DriftAnalyzer":
        """Return a new analyzer with some options replaced."""
        return DriftAnalyzer(replace(self._options, **changes))


def analyze(
    existing: EnrichedDocument,
    incoming: EnrichedDocument,
    options: Optional[AnalysisOptions] = None,
    **overrides,
) -> DriftAnalysis:
    """
    Analyze drift between a stored document and a newly enriched one.

    This is a pure function implementing the full comparison policy.

    Args:
        existing: The stored document
        incoming: The newly enriched document
        options: Analysis options; defaults to AnalysisOptions()
        **overrides: Individual AnalysisOptions fields to override

    Returns:
        DriftAnalysis with the ordered change list, confidence and
        recommendation

    Example:
        >>> analysis = analyze(doc, doc)
        >>> analysis.has_changes, analysis.recommendation
        (False, <Recommendation.CREATE_NEW: 'create-new'>)
    """
    options = options or AnalysisOptions()
    if overrides:
        options = replace(options, **overrides)
    ignore_minor = options.ignore_minor_changes

    old = existing.content
    new = incoming.content
    changes: list[DriftChange] = []

    title_change = _title_change(old.title, new.title)
    if title_change is not None:
        changes.append(title_change)

    for name in ("description", "purpose"):
        text_change = _text_change(
            name, getattr(old, name), getattr(new, name), ignore_minor
        )
        if text_change is not None:
            changes.append(text_change)

    changes.extend(_section_changes(old.sections, new.sections, ignore_minor))
    changes.extend(
        diff_metadata(existing.metadata, incoming.metadata, options.focus_areas)
    )

    if ignore_minor:
        changes = [c for c in changes if c.significance is not Significance.LOW]

    confidence = calculate_confidence(changes)
    return DriftAnalysis(
        has_changes=bool(changes),
        confidence=confidence,
        changes=changes,
        recommendation=recommend(changes, confidence),
    )


def _title_change(old_title: str, new_title: str) -> Optional[DriftChange]:
    if old_title == new_title:
        return None

    score = similarity(old_title, new_title)
    return DriftChange(
        section="title",
        type=ChangeType.MODIFICATION,
        old_value=old_title,
        new_value=new_title,
        significance=(
            Significance.HIGH if score < HIGH_SIGNIFICANCE_THRESHOLD else Significance.MEDIUM
        ),
    )


def _text_change(
    name: str,
    old_text: str,
    new_text: str,
    ignore_minor: bool,
) -> Optional[DriftChange]:
    if old_text == new_text:
        return None

    score = similarity(old_text, new_text)
    if ignore_minor and score > MINOR_CHANGE_SIMILARITY:
        return None

    return DriftChange(
        section=name,
        type=ChangeType.MODIFICATION,
        old_value=old_text,
        new_value=new_text,
        significance=significance_for(score),
    )


def _section_changes(
    existing_sections: Sequence[Section],
    incoming_sections: Sequence[Section],
    ignore_minor: bool,
) -> list[DriftChange]:
    diff = diff_sections(existing_sections, incoming_sections)
    changes: list[DriftChange] = []

    for section in diff.removed:
        changes.append(
            DriftChange(
                section=f"sections.{section.title}",
                type=ChangeType.DELETION,
                old_value=section.content,
                significance=Significance.MEDIUM,
            )
        )

    for section in diff.added:
        changes.append(
            DriftChange(
                section=f"sections.{section.title}",
                type=ChangeType.ADDITION,
                new_value=section.content,
                significance=Significance.MEDIUM,
            )
        )

    for modification in diff.modified:
        if ignore_minor and modification.similarity > MINOR_CHANGE_SIMILARITY:
            continue
        changes.append(
            DriftChange(
                section=f"sections.{modification.title}",
                type=ChangeType.MODIFICATION,
                old_value=modification.existing.content,
                new_value=modification.incoming.content,
                significance=significance_for(modification.similarity),
            )
        )

    return changes


def calculate_confidence(changes: Sequence[DriftChange]) -> float:
    """
    Score how confidently the change list supports a recommendation.

    Starts at 0.8, loses 0.05 per change (at most 0.4), then 0.15 per HIGH
    and 0.08 per MEDIUM change, and is clamped to [0.1, 1.0]. An empty
    change list scores 1.0.
    """
    if not changes:
        return MAX_CONFIDENCE

    high = sum(1 for c in changes if c.significance is Significance.HIGH)
    medium = sum(1 for c in changes if c.significance is Significance.MEDIUM)

    confidence = BASE_CONFIDENCE
    confidence -= min(MAX_CHANGE_COUNT_PENALTY, len(changes) * PER_CHANGE_PENALTY)
    confidence -= high * HIGH_CHANGE_PENALTY + medium * MEDIUM_CHANGE_PENALTY

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


def recommend(changes: Sequence[DriftChange], confidence: float) -> Recommendation:
    """
    Pick the next action for a change list.

    Rules (in order):
        1. No changes → CREATE_NEW
        2. More than two HIGH changes, or confidence below 0.5 → MANUAL_REVIEW
        3. At most three changes, at most one HIGH → UPDATE_EXISTING
        4. More than five changes → CREATE_NEW
        5. Otherwise → MERGE_REQUIRED
    """
    if not changes:
        return Recommendation.CREATE_NEW

    high = sum(1 for c in changes if c.significance is Significance.HIGH)
    total = len(changes)

    if high > 2 or confidence < 0.5:
        return Recommendation.MANUAL_REVIEW

    if total <= 3 and high <= 1:
        return Recommendation.UPDATE_EXISTING

    if total > 5:
        return Recommendation.CREATE_NEW

    return Recommendation.MERGE_REQUIRED
