"""
Detailed text diffs for side-by-side review.

Produces line- and word-level hunks of two text values, for reviewers
deciding on a manual-review or merge-required recommendation.
"""

import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher


_WORD_PATTERN = re.compile(r"\s+|\S+")


@dataclass(frozen=True)
class DiffHunk:
    """
    A run of text that was kept, added or removed.

    Attributes:
        value: The text of the run
        added: True if the run only exists in the new text
        removed: True if the run only exists in the old text
    """

    value: str
    added: bool = False
    removed: bool = False


@dataclass
class DiffSummary:
    """Counts of line hunks by kind."""

    additions: int = 0
    deletions: int = 0
    unchanged: int = 0


@dataclass
class DetailedDiff:
    """Line hunks, word hunks and line-hunk counts for one pair of texts."""

    lines: list[DiffHunk] = field(default_factory=list)
    words: list[DiffHunk] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)


def _hunks(old: list[str], new: list[str]) -> list[DiffHunk]:
    matcher = SequenceMatcher(None, old, new, autojunk=False)
    hunks: list[DiffHunk] = []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            hunks.append(DiffHunk("".join(old[i1:i2])))
            continue
        # A replace is a removal followed by an addition
        if tag in ("delete", "replace"):
            hunks.append(DiffHunk("".join(old[i1:i2]), removed=True))
        if tag in ("insert", "replace"):
            hunks.append(DiffHunk("".join(new[j1:j2]), added=True))

    return hunks


def diff_lines(old: str, new: str) -> list[DiffHunk]:
    """Diff two texts line by line, keeping line endings in the hunks."""
    return _hunks(old.splitlines(keepends=True), new.splitlines(keepends=True))


def diff_words(old: str, new: str) -> list[DiffHunk]:
    """Diff two texts word by word; whitespace runs are tokens of their own."""
    return _hunks(_WORD_PATTERN.findall(old), _WORD_PATTERN.findall(new))


def detailed_diff(old: str, new: str) -> DetailedDiff:
    """
    Compute line and word hunks of two texts plus a line-level summary.

    Args:
        old: Previous text
        new: Current text

    Returns:
        DetailedDiff whose hunks, concatenated without the added (resp.
        removed) ones, rebuild the old (resp. new) text
    """
    old = old or ""
    new = new or ""
    lines = diff_lines(old, new)
    words = diff_words(old, new)

    summary = DiffSummary(
        additions=sum(1 for hunk in lines if hunk.added),
        deletions=sum(1 for hunk in lines if hunk.removed),
        unchanged=sum(1 for hunk in lines if not hunk.added and not hunk.removed),
    )

    return DetailedDiff(lines=lines, words=words, summary=summary)
