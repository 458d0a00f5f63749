"""
Tests for the metadata differ.

Tests field selection, strict equality, value formatting and the static
significance table.
"""

from docdrift.diff import DEFAULT_METADATA_FIELDS, diff_metadata, format_metadata_value
from docdrift.models import ChangeType, ReviewStatus, Significance
from tests.fixtures import make_metadata


class TestMetadataDiff:
    """Tests for metadata comparison."""

    def test_identical_metadata_has_no_changes(self):
        """Test that equal metadata produces nothing."""
        assert diff_metadata(make_metadata(), make_metadata()) == []

    def test_default_fields_in_fixed_order(self):
        """Test that every default field is compared, in order."""
        existing = make_metadata()
        incoming = make_metadata(
            service_name="identity-service",
            version="2.0.0",
            dependencies=["user-db"],
            tags=["identity"],
            category="identity",
            business_unit="core",
        )

        changes = diff_metadata(existing, incoming)

        assert [c.section for c in changes] == [f"metadata.{f}" for f in DEFAULT_METADATA_FIELDS]
        assert all(c.type is ChangeType.MODIFICATION for c in changes)

    def test_static_significance(self):
        """Test the significance table."""
        existing = make_metadata()
        incoming = make_metadata(
            service_name="identity-service",
            version="2.0.0",
            dependencies=["user-db"],
            tags=["identity"],
            category="identity",
            business_unit="core",
        )

        by_field = {c.section: c.significance for c in diff_metadata(existing, incoming)}

        assert by_field["metadata.serviceName"] is Significance.HIGH
        assert by_field["metadata.version"] is Significance.HIGH
        assert by_field["metadata.dependencies"] is Significance.MEDIUM
        assert by_field["metadata.category"] is Significance.MEDIUM
        assert by_field["metadata.businessUnit"] is Significance.MEDIUM
        assert by_field["metadata.tags"] is Significance.LOW

    def test_fields_outside_defaults_are_ignored(self):
        """Test that author is not compared by default."""
        changes = diff_metadata(make_metadata(author="alice"), make_metadata(author="bob"))
        assert changes == []

    def test_explicit_fields_override_defaults(self):
        """Test that a field list replaces the defaults."""
        existing = make_metadata(author="alice", version="1.0.0")
        incoming = make_metadata(author="bob", version="9.9.9")

        changes = diff_metadata(existing, incoming, fields=["author"])

        assert len(changes) == 1
        assert changes[0].section == "metadata.author"
        assert changes[0].significance is Significance.LOW
        assert (changes[0].old_value, changes[0].new_value) == ("alice", "bob")

    def test_list_order_matters(self):
        """Test that reordering a list counts as a change."""
        existing = make_metadata(dependencies=["a", "b"])
        incoming = make_metadata(dependencies=["b", "a"])

        changes = diff_metadata(existing, incoming)

        assert len(changes) == 1
        assert changes[0].old_value == "a, b"
        assert changes[0].new_value == "b, a"

    def test_missing_field_formats_as_empty(self):
        """Test that an undefined value renders as an empty string."""
        changes = diff_metadata({"serviceName": "billing"}, {})

        assert changes[0].old_value == "billing"
        assert changes[0].new_value == ""
        assert changes[0].significance is Significance.HIGH

    def test_accepts_plain_mappings(self):
        """Test comparing camelCase dictionaries directly."""
        changes = diff_metadata(
            {"owner": {"team": "a"}},
            {"owner": {"team": "b"}},
            fields=["owner"],
        )

        assert changes[0].old_value == '{"team": "a"}'
        assert changes[0].new_value == '{"team": "b"}'

    def test_none_metadata_is_empty(self):
        """Test that absent metadata compares as empty."""
        assert diff_metadata(None, None) == []


class TestFormatting:
    """Tests for metadata value rendering."""

    def test_scalars(self):
        assert format_metadata_value("1.0.0") == "1.0.0"
        assert format_metadata_value(3) == "3"
        assert format_metadata_value(True) == "true"
        assert format_metadata_value(None) == ""

    def test_enum_renders_its_value(self):
        assert format_metadata_value(ReviewStatus.APPROVED) == "approved"
