"""
Text Similarity for Doc-Drift

This module implements the token-set similarity used to decide how much a
piece of documentation text changed between two versions.

Design Decisions:
    - Tokens are whitespace-delimited after case folding
    - Duplicate tokens collapse (set semantics)
    - No stemming, no stop-word removal, punctuation is kept in tokens
    - Two texts without any tokens are identical (similarity 1.0)

Academic Context:
    Input: Two text blobs
    Transformation: Case fold → whitespace split → token sets → Jaccard
    Output: Symmetric similarity in [0, 1]
    Limitation: Word order and frequency are ignored
"""

from docdrift.models import Significance


# Below this similarity a text change is a rewrite
HIGH_SIGNIFICANCE_THRESHOLD = 0.5

# Below this similarity (and at or above the one above) a change is noticeable
MEDIUM_SIGNIFICANCE_THRESHOLD = 0.8


def tokenize(text: str) -> set[str]:
    """
    Split text into its set of case-folded, whitespace-delimited tokens.

    Args:
        text: Arbitrary text; None is treated as empty

    Returns:
        Set of distinct tokens (empty for blank text)
    """
    if not text:
        return set()
    return set(text.casefold().split())


def similarity(a: str, b: str) -> float:
    """
    Compute the Jaccard similarity of two texts.

    Args:
        a: First text
        b: Second text

    Returns:
        |A ∩ B| / |A ∪ B| over the token sets, or 1.0 when neither text
        has any tokens

    Example:
        >>> similarity("User Auth Service", "user auth gateway service")
        0.75
    """
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)

    union = tokens_a | tokens_b
    if not union:
        return 1.0

    return len(tokens_a & tokens_b) / len(union)


def significance_for(score: float) -> Significance:
    """
    Classify a text change by the similarity of its old and new values.

    Rules:
        score < 0.5        → HIGH
        0.5 <= score < 0.8 → MEDIUM
        score >= 0.8       → LOW
    """
    if score < HIGH_SIGNIFICANCE_THRESHOLD:
        return Significance.HIGH
    if score < MEDIUM_SIGNIFICANCE_THRESHOLD:
        return Significance.MEDIUM
    return Significance.LOW
