"""
JSON boundary for Doc-Drift.

Documents and analyses are exchanged with the enrichment, search and storage
collaborators as JSON using camelCase field names. This module converts
between those payloads and the dataclasses in docdrift.models.

Missing structured fields decode to their empty defaults: enrichment
fallback paths may omit sections or metadata entirely.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from docdrift.errors import DocumentFormatError
from docdrift.models import (
    METADATA_KEYS,
    ChangeType,
    DocumentContent,
    DocumentInput,
    DocumentMetadata,
    DocumentType,
    DriftAnalysis,
    DriftChange,
    EnrichedDocument,
    Recommendation,
    ReviewStatus,
    Section,
    SectionType,
    Significance,
)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def section_from_dict(data: dict[str, Any]) -> Section:
    return Section(
        title=data.get("title") or "",
        content=data.get("content") or "",
        type=SectionType(data.get("type") or SectionType.OVERVIEW.value),
        metadata=data.get("metadata"),
    )


def section_to_dict(section: Section) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": section.title,
        "content": section.content,
        "type": section.type.value,
    }
    if section.metadata is not None:
        data["metadata"] = section.metadata
    return data


def metadata_from_dict(data: Optional[dict[str, Any]]) -> DocumentMetadata:
    """Decode camelCase metadata, converting timestamps and enums."""
    mapping = dict(data or {})
    if "enrichmentTimestamp" in mapping:
        mapping["enrichmentTimestamp"] = _parse_datetime(mapping["enrichmentTimestamp"])
    if mapping.get("reviewStatus") is not None:
        mapping["reviewStatus"] = ReviewStatus(mapping["reviewStatus"])
    if mapping.get("confidence") is not None:
        mapping["confidence"] = float(mapping["confidence"])
    return DocumentMetadata.from_mapping(mapping)


def metadata_to_dict(metadata: DocumentMetadata) -> dict[str, Any]:
    data = metadata.as_mapping()
    key = METADATA_KEYS["enrichment_timestamp"]
    if key in data:
        data[key] = _format_datetime(data[key])
    data[METADATA_KEYS["review_status"]] = metadata.review_status.value
    return data


def document_from_dict(data: dict[str, Any]) -> EnrichedDocument:
    """
    Decode an enriched document payload.

    Accepts "enrichedContent" as an alias for "content".

    Raises:
        DocumentFormatError: If the payload is not an object or holds an
            unknown enum value or malformed timestamp
    """
    if not isinstance(data, dict):
        raise DocumentFormatError(
            f"expected a JSON object for a document, got {type(data).__name__}"
        )

    try:
        content_data = data.get("content") or data.get("enrichedContent") or {}
        content = DocumentContent(
            title=content_data.get("title") or "",
            summary=content_data.get("summary") or "",
            description=content_data.get("description") or "",
            purpose=content_data.get("purpose") or "",
            sections=[section_from_dict(s) for s in content_data.get("sections") or []],
        )

        original_input = None
        input_data = data.get("originalInput")
        if input_data:
            original_input = DocumentInput(
                content=input_data.get("content") or "",
                type=DocumentType(input_data["type"]),
                metadata=input_data.get("metadata") or {},
            )

        kwargs: dict[str, Any] = {}
        for key, attr in (("createdAt", "created_at"), ("updatedAt", "updated_at")):
            timestamp = _parse_datetime(data.get(key))
            if timestamp is not None:
                kwargs[attr] = timestamp

        return EnrichedDocument(
            id=data.get("id"),
            content=content,
            metadata=metadata_from_dict(data.get("metadata")),
            original_input=original_input,
            structured_data=data.get("structuredData") or {},
            **kwargs,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DocumentFormatError(f"invalid document: {e}") from e


def document_to_dict(document: EnrichedDocument) -> dict[str, Any]:
    """Encode an enriched document with camelCase field names."""
    data: dict[str, Any] = {}
    if document.id is not None:
        data["id"] = document.id

    content = document.content
    data["content"] = {
        "title": content.title,
        "summary": content.summary,
        "description": content.description,
        "purpose": content.purpose,
        "sections": [section_to_dict(s) for s in content.sections],
    }
    data["metadata"] = metadata_to_dict(document.metadata)

    if document.original_input is not None:
        data["originalInput"] = {
            "content": document.original_input.content,
            "type": document.original_input.type.value,
            "metadata": document.original_input.metadata,
        }
    if document.structured_data:
        data["structuredData"] = document.structured_data

    data["createdAt"] = _format_datetime(document.created_at)
    data["updatedAt"] = _format_datetime(document.updated_at)
    return data


def change_to_dict(change: DriftChange) -> dict[str, Any]:
    data: dict[str, Any] = {"section": change.section, "type": change.type.value}
    if change.old_value is not None:
        data["oldValue"] = change.old_value
    if change.new_value is not None:
        data["newValue"] = change.new_value
    data["significance"] = change.significance.value
    return data


def analysis_to_dict(analysis: DriftAnalysis) -> dict[str, Any]:
    """Encode a drift analysis with camelCase field names."""
    return {
        "hasChanges": analysis.has_changes,
        "confidence": analysis.confidence,
        "changes": [change_to_dict(c) for c in analysis.changes],
        "recommendation": analysis.recommendation.value,
    }


def analysis_from_dict(data: dict[str, Any]) -> DriftAnalysis:
    """
    Decode a drift analysis payload, e.g. from a remote detection service.

    Raises:
        DocumentFormatError: If the payload is malformed
    """
    try:
        changes = [
            DriftChange(
                section=c["section"],
                type=ChangeType(c["type"]),
                old_value=c.get("oldValue"),
                new_value=c.get("newValue"),
                significance=Significance(c["significance"]),
            )
            for c in data.get("changes") or []
        ]
        return DriftAnalysis(
            has_changes=bool(data.get("hasChanges", bool(changes))),
            confidence=float(data["confidence"]),
            changes=changes,
            recommendation=Recommendation(data["recommendation"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DocumentFormatError(f"invalid drift analysis: {e}") from e


def load_document(path: str | Path) -> EnrichedDocument:
    """
    Read an enriched document from a JSON file.

    Raises:
        DocumentFormatError: If the file is not valid JSON or not a document
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"{path}: invalid JSON: {e}") from e
    return document_from_dict(data)


def dump_document(document: EnrichedDocument, path: str | Path) -> None:
    """Write an enriched document to a JSON file."""
    Path(path).write_text(
        json.dumps(document_to_dict(document), indent=2) + "\n",
        encoding="utf-8",
    )
