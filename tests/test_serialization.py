"""
Tests for the JSON boundary.

Tests decoding of document payloads, defaults for missing data, and
encoding of analyses.
"""

import copy
import json
from datetime import datetime, timezone

import pytest

from docdrift.errors import DocumentFormatError
from docdrift.models import (
    ChangeType,
    DriftAnalysis,
    DriftChange,
    Recommendation,
    ReviewStatus,
    SectionType,
    Significance,
)
from docdrift.serialization import (
    analysis_from_dict,
    analysis_to_dict,
    document_from_dict,
    document_to_dict,
    dump_document,
    load_document,
)
from tests.fixtures import SAMPLE_DOCUMENT_JSON, make_document


class TestDocumentDecoding:
    """Tests for document_from_dict."""

    def test_decodes_sample(self):
        """Test decoding a complete payload."""
        doc = document_from_dict(SAMPLE_DOCUMENT_JSON)

        assert doc.id == "doc_42"
        assert doc.content.title == "Billing API"
        assert [s.title for s in doc.sections] == ["Overview", "Examples"]
        assert doc.sections[1].type is SectionType.EXAMPLES
        assert doc.sections[1].metadata == {"language": "http"}
        assert doc.metadata.service_name == "billing-api"
        assert doc.metadata.business_unit == "commerce"
        assert doc.metadata.review_status is ReviewStatus.APPROVED
        assert doc.metadata.reviewed_by == "bob"
        assert doc.metadata.enrichment_timestamp == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert doc.updated_at == datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)

    def test_missing_structure_defaults_to_empty(self):
        """Test that omitted content and sections decode as empty."""
        doc = document_from_dict({"content": {"title": "Bare"}})

        assert doc.content.title == "Bare"
        assert doc.content.description == ""
        assert doc.sections == []
        assert doc.metadata.service_name is None

    def test_enriched_content_alias(self):
        """Test that the enrichedContent key is accepted."""
        payload = copy.deepcopy(SAMPLE_DOCUMENT_JSON)
        payload["enrichedContent"] = payload.pop("content")

        assert document_from_dict(payload).content.title == "Billing API"

    def test_unknown_metadata_keys_preserved(self):
        """Test that extra metadata keys survive decoding."""
        doc = document_from_dict({"metadata": {"owner": "team-a"}})

        assert doc.metadata.extra == {"owner": "team-a"}
        assert document_to_dict(doc)["metadata"]["owner"] == "team-a"

    def test_unknown_section_type_rejected(self):
        """Test that a bad enum value raises DocumentFormatError."""
        payload = {"content": {"sections": [{"title": "A", "content": "b", "type": "poem"}]}}

        with pytest.raises(DocumentFormatError):
            document_from_dict(payload)

    def test_non_object_rejected(self):
        with pytest.raises(DocumentFormatError):
            document_from_dict(["not", "a", "document"])


class TestDocumentEncoding:
    """Tests for document_to_dict."""

    def test_round_trip(self):
        """Test that encoding then decoding restores the document."""
        doc = make_document()

        assert document_from_dict(document_to_dict(doc)) == doc

    def test_camel_case_keys(self):
        """Test the boundary field names."""
        data = document_to_dict(make_document())

        assert set(data) >= {"id", "content", "metadata", "createdAt", "updatedAt"}
        assert data["metadata"]["serviceName"] == "auth-service"
        assert data["metadata"]["businessUnit"] == "platform"
        assert data["metadata"]["reviewStatus"] == "pending"


class TestAnalysisEncoding:
    """Tests for DriftAnalysis payloads."""

    def test_addition_omits_old_value(self):
        """Test that absent values are left out of the payload."""
        analysis = DriftAnalysis(
            has_changes=True,
            confidence=0.67,
            changes=[
                DriftChange(
                    section="sections.New",
                    type=ChangeType.ADDITION,
                    new_value="x",
                    significance=Significance.MEDIUM,
                )
            ],
            recommendation=Recommendation.UPDATE_EXISTING,
        )

        data = analysis_to_dict(analysis)

        assert data == {
            "hasChanges": True,
            "confidence": 0.67,
            "changes": [
                {
                    "section": "sections.New",
                    "type": "addition",
                    "newValue": "x",
                    "significance": "medium",
                }
            ],
            "recommendation": "update-existing",
        }
        assert analysis_from_dict(data) == analysis

    def test_malformed_analysis_rejected(self):
        with pytest.raises(DocumentFormatError):
            analysis_from_dict({"confidence": 0.5, "recommendation": "shrug"})


class TestFiles:
    """Tests for reading and writing document files."""

    def test_dump_and_load(self, tmp_path):
        path = tmp_path / "doc.json"
        doc = make_document()

        dump_document(doc, path)

        assert load_document(path) == doc
        assert json.loads(path.read_text())["content"]["title"] == "Auth Service"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(DocumentFormatError):
            load_document(path)
