"""
Test fixtures for Doc-Drift.

This module provides sample documents and helper functions
for testing the drift engine.
"""

from datetime import datetime, timezone
from typing import Optional

from docdrift.models import (
    ChangeType,
    DocumentContent,
    DocumentMetadata,
    DriftChange,
    EnrichedDocument,
    Section,
    SectionType,
    Significance,
)


CREATED_AT = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
MERGED_AT = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)

DEFAULT_SECTIONS = [
    Section(
        title="Overview",
        content="Issues and validates access tokens for internal services.",
        type=SectionType.OVERVIEW,
    ),
    Section(
        title="Inputs",
        content="Username and password, or a refresh token.",
        type=SectionType.INPUTS,
    ),
    Section(
        title="Outputs",
        content="A signed JWT access token and a refresh token.",
        type=SectionType.OUTPUTS,
    ),
]


def make_metadata(**overrides) -> DocumentMetadata:
    """Build sample metadata, overriding any field."""
    fields = dict(
        service_name="auth-service",
        version="1.0.0",
        author="alice",
        dependencies=["user-db", "token-cache"],
        tags=["auth", "security"],
        category="security",
        business_unit="platform",
        enrichment_timestamp=CREATED_AT,
        llm_model="gpt-4",
        confidence=0.9,
    )
    fields.update(overrides)
    return DocumentMetadata(**fields)


def make_document(
    title: str = "Auth Service",
    summary: str = "Central authentication for the platform.",
    description: str = "The auth service issues and validates tokens for every internal service.",
    purpose: str = "Give every service a single source of identity.",
    sections: Optional[list[Section]] = None,
    doc_id: Optional[str] = "doc_1",
    metadata: Optional[DocumentMetadata] = None,
) -> EnrichedDocument:
    """Build a sample enriched document."""
    return EnrichedDocument(
        id=doc_id,
        content=DocumentContent(
            title=title,
            summary=summary,
            description=description,
            purpose=purpose,
            sections=list(DEFAULT_SECTIONS) if sections is None else sections,
        ),
        metadata=metadata or make_metadata(),
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


def make_change(significance: Significance, section: str = "description") -> DriftChange:
    """Build a modification change with the given significance."""
    return DriftChange(
        section=section,
        type=ChangeType.MODIFICATION,
        old_value="old",
        new_value="new",
        significance=significance,
    )


# Twenty distinct words; adding one more gives similarity 20/21 > 0.95
TWENTY_WORDS = " ".join(f"word{i}" for i in range(20))

# Six words vs seven words sharing three: similarity 3/10 = 0.3
OVERVIEW_OLD = "alpha beta gamma delta epsilon zeta"
OVERVIEW_NEW = "alpha beta gamma eta theta iota kappa"

SAMPLE_DOCUMENT_JSON = {
    "id": "doc_42",
    "content": {
        "title": "Billing API",
        "summary": "Charges customers.",
        "description": "Creates invoices and charges stored payment methods.",
        "purpose": "Collect revenue.",
        "sections": [
            {"title": "Overview", "content": "Invoices and charges.", "type": "overview"},
            {
                "title": "Examples",
                "content": "POST /invoices",
                "type": "examples",
                "metadata": {"language": "http"},
            },
        ],
    },
    "metadata": {
        "serviceName": "billing-api",
        "version": "2.1.0",
        "dependencies": ["payments-gateway"],
        "tags": ["billing"],
        "category": "finance",
        "businessUnit": "commerce",
        "enrichmentTimestamp": "2024-01-15T12:00:00Z",
        "llmModel": "gpt-4",
        "confidence": 0.85,
        "reviewStatus": "approved",
        "reviewedBy": "bob",
    },
    "createdAt": "2024-01-15T12:00:00+00:00",
    "updatedAt": "2024-02-01T08:00:00+00:00",
}
