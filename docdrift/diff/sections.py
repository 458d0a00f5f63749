"""
Section Diffing for Doc-Drift

This module aligns two ordered lists of documentation sections by title and
classifies every title as added, removed, modified or unchanged.

Design Decisions:
    - Titles are the alignment key; content is compared byte for byte
    - Duplicate titles: the last section wins, the first fixes the position
    - Output order follows insertion order of the title index, never sorted
    - Modified sections carry their similarity so callers can grade them

Ordering:
    added      → incoming order
    removed    → existing order
    modified   → existing order
    unchanged  → existing order (holding the incoming section value)

    Shared titles follow the stored document, not the incoming one; walking
    the incoming index instead would also reorder merge-sections output.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Iterable

from docdrift.models import Section
from docdrift.similarity import similarity


@dataclass(frozen=True)
class SectionModification:
    """
    A section present in both documents whose content differs.

    Attributes:
        title: The shared section title
        existing: The section as stored
        incoming: The section as newly enriched
        similarity: Jaccard similarity of the two contents
    """

    title: str
    existing: Section
    incoming: Section
    similarity: float


@dataclass
class SectionDiff:
    """
    Partition of all section titles of two documents.

    Every title of existing ∪ incoming appears in exactly one list.
    """

    added: list[Section] = field(default_factory=list)
    removed: list[Section] = field(default_factory=list)
    modified: list[SectionModification] = field(default_factory=list)
    unchanged: list[Section] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """True if any section was added, removed or modified."""
        return bool(self.added or self.removed or self.modified)

    def titles(self) -> dict[str, list[str]]:
        """Return the titles in each bucket, keyed by bucket name."""
        return {
            "added": [s.title for s in self.added],
            "removed": [s.title for s in self.removed],
            "modified": [m.title for m in self.modified],
            "unchanged": [s.title for s in self.unchanged],
        }


def index_sections(sections: Iterable[Section] | None) -> "OrderedDict[str, Section]":
    """
    Build an insertion-ordered title index over sections.

    A repeated title keeps the position of its first occurrence and the
    value of its last one.

    Args:
        sections: Sections in document order; None is treated as empty

    Returns:
        OrderedDict mapping title to section
    """
    index: OrderedDict[str, Section] = OrderedDict()
    for section in sections or ():
        index[section.title] = section
    return index


def diff_sections(
    existing: Iterable[Section] | None,
    incoming: Iterable[Section] | None,
) -> SectionDiff:
    """
    Compare two section lists by title.

    Args:
        existing: Sections of the stored document
        incoming: Sections of the newly enriched document

    Returns:
        SectionDiff partitioning every title

    Example:
        >>> old = [Section("Overview", "a b"), Section("Setup", "x")]
        >>> new = [Section("Overview", "a c"), Section("Usage", "y")]
        >>> diff = diff_sections(old, new)
        >>> diff.titles()["modified"], diff.titles()["added"]
        (['Overview'], ['Usage'])
    """
    existing_index = index_sections(existing)
    incoming_index = index_sections(incoming)
    result = SectionDiff()

    for title, section in incoming_index.items():
        if title not in existing_index:
            result.added.append(section)

    for title, old_section in existing_index.items():
        new_section = incoming_index.get(title)
        if new_section is None:
            result.removed.append(old_section)
        elif old_section.content == new_section.content:
            result.unchanged.append(new_section)
        else:
            result.modified.append(
                SectionModification(
                    title=title,
                    existing=old_section,
                    incoming=new_section,
                    similarity=similarity(old_section.content, new_section.content),
                )
            )

    return result
