"""
Core Data Models for Doc-Drift

This module defines the canonical data structures used throughout the system:
- Section / DocumentContent / DocumentMetadata / EnrichedDocument:
  the structured documentation produced by the enrichment step
- DriftChange / DriftAnalysis: the outcome of comparing two documents
- MergeStrategy / DriftResolution: how a detected drift is resolved

These models are designed to be:
- Immutable where possible (using frozen dataclasses)
- Serializable at the JSON boundary (see docdrift.serialization)
- Clear in their semantic meaning
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class SectionType(Enum):
    """Kind of content a documentation section holds."""

    OVERVIEW = "overview"
    INPUTS = "inputs"
    OUTPUTS = "outputs"
    DEPENDENCIES = "dependencies"
    EXAMPLES = "examples"
    CONFIGURATION = "configuration"
    TROUBLESHOOTING = "troubleshooting"
    RELATED_SERVICES = "related-services"


class DocumentType(Enum):
    """Kind of component a raw description talks about."""

    MICROSERVICE = "microservice"
    API_ENDPOINT = "api-endpoint"
    BUSINESS_LOGIC = "business-logic"
    SYSTEM_ARCHITECTURE = "system-architecture"
    DATABASE_SCHEMA = "database-schema"
    CONFIGURATION = "configuration"
    DEPLOYMENT = "deployment"
    SECURITY_POLICY = "security-policy"


class ReviewStatus(Enum):
    """Human review state of an enriched document."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChangeType(Enum):
    """Kind of a single detected change."""

    ADDITION = "addition"
    DELETION = "deletion"
    MODIFICATION = "modification"


class Significance(Enum):
    """
    Qualitative severity attached to a single detected change.

    States:
        LOW: Cosmetic edit, the two values are still largely the same.
        MEDIUM: Noticeable rewrite or structural change.
        HIGH: The value was substantially replaced.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recommendation(Enum):
    """
    Suggested next action for the workflow layer.

    States:
        CREATE_NEW: Store the incoming document as a new document.
        UPDATE_EXISTING: Overwrite the stored document with the incoming one.
        MANUAL_REVIEW: Changes are too significant to act on automatically.
        MERGE_REQUIRED: Combine both documents with a merge strategy.
    """

    CREATE_NEW = "create-new"
    UPDATE_EXISTING = "update-existing"
    MANUAL_REVIEW = "manual-review"
    MERGE_REQUIRED = "merge-required"


class ConflictResolution(Enum):
    """Which side wins when merging two documents."""

    PREFER_NEW = "prefer-new"
    PREFER_EXISTING = "prefer-existing"
    MERGE_SECTIONS = "merge-sections"


class ResolutionAction(Enum):
    """Action selected to resolve a detected drift."""

    KEEP_EXISTING = "keep-existing"
    UPDATE = "update"
    CREATE_NEW = "create-new"
    MERGE = "merge"


@dataclass(frozen=True)
class Section:
    """
    A titled block of documentation content.

    Sections are values: a revised section is a new Section, never a
    mutation of an existing one.

    Attributes:
        title: Section heading, used as the comparison key
        content: Body text of the section
        type: Kind of content held by the section
        metadata: Optional free-form annotations
    """

    title: str
    content: str
    type: SectionType = SectionType.OVERVIEW
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class DocumentContent:
    """
    Structured body of an enriched document.

    Attributes:
        title: Short name of the documented component
        summary: One or two sentence abstract
        description: Full prose description
        purpose: Why the component exists
        sections: Ordered list of titled sections
    """

    title: str = ""
    summary: str = ""
    description: str = ""
    purpose: str = ""
    sections: list[Section] = field(default_factory=list)


# Metadata attribute name -> key used at the JSON boundary and by the differ
METADATA_KEYS: dict[str, str] = {
    "service_name": "serviceName",
    "version": "version",
    "author": "author",
    "dependencies": "dependencies",
    "tags": "tags",
    "category": "category",
    "business_unit": "businessUnit",
    "enrichment_timestamp": "enrichmentTimestamp",
    "llm_model": "llmModel",
    "confidence": "confidence",
    "review_status": "reviewStatus",
    "reviewed_by": "reviewedBy",
}


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Descriptive metadata attached to an enriched document.

    Attributes:
        service_name: Name of the documented service
        version: Semantic version of the documented component
        author: Who wrote the original description
        dependencies: Names of services this component depends on
        tags: Free-form labels
        category: Functional category
        business_unit: Owning business unit
        enrichment_timestamp: When the LLM enrichment ran
        llm_model: Model that produced the enrichment
        confidence: Enrichment confidence reported by the LLM step
        review_status: Human review state
        reviewed_by: Reviewer, once reviewed
        extra: Keys not covered above, preserved verbatim
    """

    service_name: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    dependencies: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    category: Optional[str] = None
    business_unit: Optional[str] = None
    enrichment_timestamp: Optional[datetime] = None
    llm_model: Optional[str] = None
    confidence: float = 0.0
    review_status: ReviewStatus = ReviewStatus.PENDING
    reviewed_by: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_mapping(self) -> dict[str, Any]:
        """
        Return the defined fields keyed by their boundary (camelCase) names.

        Fields that are None are left out, so a key is present exactly when
        the document defines it. Enum and datetime values are returned as-is.
        """
        mapping: dict[str, Any] = dict(self.extra)
        for attr, key in METADATA_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                mapping[key] = value
        return mapping

    @classmethod
    def from_mapping(cls, mapping: dict[str, Any]) -> "DocumentMetadata":
        """Build metadata from a camelCase mapping produced by as_mapping()."""
        known = {key: attr for attr, key in METADATA_KEYS.items()}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in mapping.items():
            if key in known:
                kwargs[known[key]] = value
            else:
                extra[key] = value
        if kwargs.get("confidence") is None:
            kwargs.pop("confidence", None)
        if kwargs.get("review_status") is None:
            kwargs.pop("review_status", None)
        return cls(extra=extra, **kwargs)


@dataclass(frozen=True)
class DocumentInput:
    """
    The raw natural-language description a document was enriched from.

    Attributes:
        content: Free text written by the user
        type: Kind of component being described
        metadata: Metadata supplied alongside the description
    """

    content: str
    type: DocumentType
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EnrichedDocument:
    """
    Structured documentation produced by LLM enrichment.

    Attributes:
        id: Storage identifier, None until the document is stored
        content: Structured body
        metadata: Descriptive metadata
        created_at: When the document was first created
        updated_at: When the document was last changed
        original_input: Raw description the document came from, if known
        structured_data: Free-form structured extraction results
    """

    content: DocumentContent = field(default_factory=DocumentContent)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    original_input: Optional[DocumentInput] = None
    structured_data: dict[str, Any] = field(default_factory=dict)

    @property
    def sections(self) -> list[Section]:
        """Shortcut for the document's ordered sections."""
        return self.content.sections

    def touched(self, now: Optional[datetime] = None) -> "EnrichedDocument":
        """Return a copy with updated_at set to now (immutable update)."""
        return replace(self, updated_at=now or utc_now())


@dataclass(frozen=True)
class DriftChange:
    """
    One detected difference between an existing and an incoming document.

    Attributes:
        section: Dotted path of the changed value, e.g. "sections.Overview"
            or "metadata.version"
        type: Addition, deletion or modification
        significance: Severity of the change
        old_value: Previous value; absent for additions
        new_value: New value; absent for deletions

    Invariants:
        - additions carry only new_value
        - deletions carry only old_value
        - modifications carry both
    """

    section: str
    type: ChangeType
    significance: Significance
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that the carried values match the change type."""
        if self.type is ChangeType.ADDITION and (
            self.old_value is not None or self.new_value is None
        ):
            raise ValueError(f"addition '{self.section}' must carry only new_value")
        if self.type is ChangeType.DELETION and (
            self.new_value is not None or self.old_value is None
        ):
            raise ValueError(f"deletion '{self.section}' must carry only old_value")
        if self.type is ChangeType.MODIFICATION and (
            self.old_value is None or self.new_value is None
        ):
            raise ValueError(
                f"modification '{self.section}' must carry old_value and new_value"
            )


@dataclass
class DriftAnalysis:
    """
    Result of comparing an incoming document against a stored one.

    Derived, never persisted: recomputed for every comparison.

    Attributes:
        has_changes: True if any change survived filtering
        confidence: Confidence in the recommendation, in [0, 1]
        changes: Ordered list of detected changes
        recommendation: Suggested next action
    """

    has_changes: bool
    confidence: float
    changes: list[DriftChange] = field(default_factory=list)
    recommendation: Recommendation = Recommendation.CREATE_NEW

    def count(self, significance: Significance) -> int:
        """Number of changes with the given significance."""
        return sum(1 for change in self.changes if change.significance is significance)

    @property
    def high_count(self) -> int:
        """Number of HIGH changes."""
        return self.count(Significance.HIGH)

    @property
    def medium_count(self) -> int:
        """Number of MEDIUM changes."""
        return self.count(Significance.MEDIUM)

    @property
    def low_count(self) -> int:
        """Number of LOW changes."""
        return self.count(Significance.LOW)


@dataclass(frozen=True)
class MergeStrategy:
    """
    How two documents should be combined.

    Only conflict_resolution drives merge behaviour; the other fields are
    carried for the storage collaborator.
    """

    conflict_resolution: ConflictResolution = ConflictResolution.MERGE_SECTIONS
    sections_to_update: list[str] = field(default_factory=list)
    preserve_metadata: bool = False


@dataclass(frozen=True)
class DriftResolution:
    """
    A decision about what to do with a detected drift.

    Attributes:
        action: What to do with the incoming document
        target_document_id: Stored document affected by update/merge
        merge_strategy: Required when action is MERGE
    """

    action: ResolutionAction
    target_document_id: Optional[str] = None
    merge_strategy: Optional[MergeStrategy] = None
