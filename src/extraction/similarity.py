"""Edit-distance similarity used to suppress near-duplicate items."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

DUPLICATE_THRESHOLD = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """Return the unit-cost insert/delete/substitute distance between two strings."""
    return int(Levenshtein.distance(a, b))


def similarity(a: str, b: str) -> float:
    """Return ``1 - distance / max(len(a), len(b))`` in the range 0-1.

    Identical strings (including two empty strings) score 1.0; a non-empty
    string compared with an empty one scores 0.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


def is_near_duplicate(existing: str, incoming: str, threshold: float = DUPLICATE_THRESHOLD) -> bool:
    """Check whether two entries describe the same item.

    Comparison is case-insensitive: either text containing the other, or a
    similarity above ``threshold``, counts as a duplicate.
    """
    a = existing.lower()
    b = incoming.lower()
    return a in b or b in a or similarity(a, b) > threshold
