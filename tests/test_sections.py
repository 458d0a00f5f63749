"""
Tests for the section differ.

Tests title alignment, classification and ordering.
"""

from docdrift.diff import diff_sections, index_sections
from docdrift.models import Section, SectionType


def _titles(sections):
    return [s.title for s in sections]


class TestSectionClassification:
    """Tests for added/removed/modified/unchanged classification."""

    def test_classifies_every_bucket(self):
        """Test a diff that fills all four buckets."""
        existing = [
            Section("Overview", "same text"),
            Section("Inputs", "old inputs"),
            Section("Legacy", "gone soon"),
        ]
        incoming = [
            Section("Overview", "same text"),
            Section("Inputs", "new inputs"),
            Section("Examples", "curl it"),
        ]

        diff = diff_sections(existing, incoming)

        assert _titles(diff.unchanged) == ["Overview"]
        assert [m.title for m in diff.modified] == ["Inputs"]
        assert _titles(diff.added) == ["Examples"]
        assert _titles(diff.removed) == ["Legacy"]
        assert diff.has_changes

    def test_modified_carries_similarity_and_both_versions(self):
        """Test the details attached to a modified section."""
        existing = [Section("Inputs", "user name and password")]
        incoming = [Section("Inputs", "user name and token")]

        modification = diff_sections(existing, incoming).modified[0]

        assert modification.existing.content == "user name and password"
        assert modification.incoming.content == "user name and token"
        # {user, name, and} shared out of five distinct words
        assert modification.similarity == 3 / 5

    def test_content_comparison_is_exact(self):
        """Test that a case-only edit is a modification with similarity 1."""
        diff = diff_sections([Section("A", "Tokens")], [Section("A", "tokens")])

        assert diff.unchanged == []
        assert diff.modified[0].similarity == 1.0

    def test_unchanged_holds_incoming_value(self):
        """Test that unchanged content keeps the incoming section's type."""
        existing = [Section("Setup", "run it", SectionType.OVERVIEW)]
        incoming = [Section("Setup", "run it", SectionType.CONFIGURATION)]

        diff = diff_sections(existing, incoming)

        assert diff.unchanged[0].type is SectionType.CONFIGURATION
        assert not diff.has_changes

    def test_missing_sections_are_empty(self):
        """Test that None is treated as an empty section list."""
        diff = diff_sections(None, [Section("New", "x")])

        assert _titles(diff.added) == ["New"]
        assert diff.removed == []

    def test_partition_covers_every_title_once(self):
        """Test that each title lands in exactly one bucket."""
        existing = [Section(t, t) for t in ["a", "b", "c", "d"]]
        incoming = [Section("b", "b"), Section("c", "changed"), Section("e", "e")]

        buckets = diff_sections(existing, incoming).titles()
        seen = [title for titles in buckets.values() for title in titles]

        assert sorted(seen) == ["a", "b", "c", "d", "e"]
        assert len(seen) == len(set(seen))


class TestSectionOrdering:
    """Tests for insertion-order guarantees."""

    def test_added_follow_incoming_order(self):
        """Test that added sections keep incoming order."""
        incoming = [Section("Zeta", "z"), Section("Alpha", "a"), Section("Mid", "m")]

        diff = diff_sections([], incoming)

        assert _titles(diff.added) == ["Zeta", "Alpha", "Mid"]

    def test_removed_and_shared_follow_existing_order(self):
        """Test that removed, modified and unchanged keep existing order."""
        existing = [
            Section("Zeta", "z"),
            Section("Gone2", "g"),
            Section("Alpha", "a"),
            Section("Gone1", "g"),
            Section("Beta", "b"),
        ]
        incoming = [Section("Beta", "b2"), Section("Alpha", "a"), Section("Zeta", "z2")]

        diff = diff_sections(existing, incoming)

        assert _titles(diff.removed) == ["Gone2", "Gone1"]
        assert [m.title for m in diff.modified] == ["Zeta", "Beta"]
        assert _titles(diff.unchanged) == ["Alpha"]


class TestSectionIndex:
    """Tests for duplicate title handling."""

    def test_last_duplicate_wins_first_position_kept(self):
        """Test last-write-wins values with first-occurrence positions."""
        sections = [
            Section("A", "first"),
            Section("B", "b"),
            Section("A", "second"),
        ]

        index = index_sections(sections)

        assert list(index) == ["A", "B"]
        assert index["A"].content == "second"

    def test_duplicate_title_compares_last_occurrence(self):
        """Test that the differ sees only the last duplicate."""
        existing = [Section("A", "first"), Section("A", "kept")]
        incoming = [Section("A", "kept")]

        diff = diff_sections(existing, incoming)

        assert _titles(diff.unchanged) == ["A"]
        assert diff.modified == []
