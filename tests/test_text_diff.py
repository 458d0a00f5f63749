"""
Tests for detailed text diffs.
"""

from docdrift.diff import DiffHunk, detailed_diff


class TestDetailedDiff:
    """Tests for line and word hunks."""

    def test_line_hunks(self):
        diff = detailed_diff("a\nb\nc\n", "a\nB\nc\nd\n")

        assert diff.lines == [
            DiffHunk("a\n"),
            DiffHunk("b\n", removed=True),
            DiffHunk("B\n", added=True),
            DiffHunk("c\n"),
            DiffHunk("d\n", added=True),
        ]
        assert (diff.summary.additions, diff.summary.deletions, diff.summary.unchanged) == (2, 1, 2)

    def test_word_hunks(self):
        diff = detailed_diff("quick brown fox", "quick red fox")

        assert diff.words == [
            DiffHunk("quick "),
            DiffHunk("brown", removed=True),
            DiffHunk("red", added=True),
            DiffHunk(" fox"),
        ]

    def test_hunks_rebuild_both_texts(self):
        """Test that dropping one side's hunks yields the other text."""
        old = "Issues tokens.\nValidates tokens.\n"
        new = "Issues passkeys.\nValidates tokens.\nRevokes sessions.\n"

        diff = detailed_diff(old, new)

        assert "".join(h.value for h in diff.lines if not h.added) == old
        assert "".join(h.value for h in diff.lines if not h.removed) == new
        assert "".join(h.value for h in diff.words if not h.added) == old

    def test_identical_texts(self):
        diff = detailed_diff("same\n", "same\n")

        assert diff.summary.additions == 0
        assert diff.summary.deletions == 0
        assert diff.lines == [DiffHunk("same\n")]

    def test_empty_texts(self):
        diff = detailed_diff("", "")

        assert diff.lines == []
        assert diff.words == []
