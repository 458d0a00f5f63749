"""
Drift Workflow for Doc-Drift

Glue between the pure analysis core and the document-processing pipeline:
picking the stored document an incoming one should be compared with,
running the comparison (remotely when a detection service is configured,
locally otherwise), and executing the resolution a human or policy chose.

Collaborators (remote detector, settings, logger) are injected; nothing in
here reads global state.

Resolution Actions:
    KEEP_EXISTING: Discard the incoming document
    UPDATE:        Store the incoming document under the target id
    CREATE_NEW:    Store the incoming document as a new document
    MERGE:         Merge both documents with the resolution's strategy
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Iterable, Optional

from docdrift.config import Settings
from docdrift.drift import analyze
from docdrift.errors import ResolutionError
from docdrift.merge import merge
from docdrift.models import (
    DriftAnalysis,
    DriftResolution,
    EnrichedDocument,
    Recommendation,
    ResolutionAction,
)
from docdrift.similarity import similarity


RemoteDetector = Callable[[EnrichedDocument, EnrichedDocument], DriftAnalysis]


@dataclass
class ResolutionOutcome:
    """
    The document to hand to storage after resolving a drift.

    Attributes:
        action: The action that was executed
        document: Document to persist (the existing one for KEEP_EXISTING)
        target_document_id: Stored document that is replaced, if any
    """

    action: ResolutionAction
    document: EnrichedDocument
    target_document_id: Optional[str] = None


def _match_text(document: EnrichedDocument) -> str:
    content = document.content
    return " ".join((content.title, content.summary, content.description))


class DriftWorkflow:
    """
    Runs drift detection and resolution for one processing pipeline.

    Usage:
        workflow = DriftWorkflow(load_settings(), remote_detector=client.detect)
        existing = workflow.select_match(incoming, search_results)
        if existing is not None:
            analysis = workflow.detect(existing, incoming)
            resolution = workflow.suggest_resolution(analysis, existing)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        remote_detector: Optional[RemoteDetector] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the workflow.

        Args:
            settings: Analysis and merge settings; defaults to Settings()
            remote_detector: Optional remote drift detection call. Any
                             exception it raises triggers local analysis.
            logger: Logger for workflow events
        """
        self._settings = settings or Settings()
        self._remote_detector = remote_detector
        self._logger = logger or logging.getLogger(__name__)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def detection_enabled(self) -> bool:
        """False when settings turn drift detection off; every document is then new."""
        return self._settings.enable_drift_detection

    def select_match(
        self,
        incoming: EnrichedDocument,
        candidates: Iterable[EnrichedDocument],
    ) -> Optional[EnrichedDocument]:
        """
        Pick the stored document the incoming one most likely duplicates.

        Candidates are scored by similarity of title, summary and
        description. The best one is returned if it reaches the configured
        threshold; the earliest candidate wins ties.

        Always None while drift detection is disabled.
        """
        if not self.detection_enabled:
            return None

        best: Optional[EnrichedDocument] = None
        best_score = -1.0
        text = _match_text(incoming)

        for candidate in candidates:
            score = similarity(text, _match_text(candidate))
            self._logger.debug("Candidate %s scored %.3f", candidate.id, score)
            if score > best_score:
                best, best_score = candidate, score

        if best is None or best_score < self._settings.similarity_threshold:
            return None
        return best

    def detect(
        self,
        existing: EnrichedDocument,
        incoming: EnrichedDocument,
    ) -> DriftAnalysis:
        """
        Analyze drift, preferring the remote detector when one is configured.

        A failing remote call is logged and replaced by local analysis; it is
        never propagated.

        While drift detection is disabled, neither detector runs and the
        result is a no-change CREATE_NEW analysis.
        """
        if not self.detection_enabled:
            self._logger.debug(
                "Drift detection disabled, treating %s as new", incoming.id or "<unsaved>"
            )
            return DriftAnalysis(
                has_changes=False,
                confidence=1.0,
                recommendation=Recommendation.CREATE_NEW,
            )

        analysis: Optional[DriftAnalysis] = None

        if self._remote_detector is not None:
            try:
                analysis = self._remote_detector(existing, incoming)
            except Exception as e:
                self._logger.warning(
                    "Remote drift detection failed, falling back to local analysis: %s", e
                )

        if analysis is None:
            analysis = analyze(existing, incoming, self._settings.analysis_options())

        self._logger.info(
            "Drift analysis for %s: %d change(s), confidence %.2f, recommendation %s",
            existing.id or "<unsaved>",
            len(analysis.changes),
            analysis.confidence,
            analysis.recommendation.value,
        )
        return analysis

    @staticmethod
    def requires_resolution(analysis: DriftAnalysis) -> bool:
        """True if the analysis calls for a decision before storing."""
        return analysis.has_changes and analysis.recommendation is not Recommendation.CREATE_NEW

    def suggest_resolution(
        self,
        analysis: DriftAnalysis,
        existing: EnrichedDocument,
    ) -> Optional[DriftResolution]:
        """
        Translate a recommendation into a resolution.

        Returns None for MANUAL_REVIEW: that one needs a human.
        """
        recommendation = analysis.recommendation

        if recommendation is Recommendation.CREATE_NEW:
            return DriftResolution(action=ResolutionAction.CREATE_NEW)
        if recommendation is Recommendation.UPDATE_EXISTING:
            return DriftResolution(
                action=ResolutionAction.UPDATE,
                target_document_id=existing.id,
            )
        if recommendation is Recommendation.MERGE_REQUIRED:
            return DriftResolution(
                action=ResolutionAction.MERGE,
                target_document_id=existing.id,
                merge_strategy=self._settings.default_merge_strategy(),
            )
        return None

    def resolve(
        self,
        resolution: DriftResolution,
        existing: EnrichedDocument,
        incoming: EnrichedDocument,
        now: Optional[datetime] = None,
    ) -> ResolutionOutcome:
        """
        Execute a resolution and return the document to store.

        Raises:
            ResolutionError: If an UPDATE or MERGE lacks a target id, or a
                             MERGE lacks a merge strategy
        """
        action = resolution.action
        target_id = resolution.target_document_id

        if action is ResolutionAction.KEEP_EXISTING:
            outcome = ResolutionOutcome(action, existing)

        elif action is ResolutionAction.UPDATE:
            if not target_id:
                raise ResolutionError("Target document ID required for update")
            outcome = ResolutionOutcome(action, replace(incoming, id=target_id), target_id)

        elif action is ResolutionAction.CREATE_NEW:
            outcome = ResolutionOutcome(action, incoming)

        else:
            if not target_id or resolution.merge_strategy is None:
                raise ResolutionError("Target document ID and merge strategy required")
            merged = merge(existing, incoming, resolution.merge_strategy, now=now)
            outcome = ResolutionOutcome(action, replace(merged, id=target_id), target_id)

        self._logger.info(
            "Resolved drift with action %s (target %s)", action.value, target_id or "-"
        )
        return outcome
