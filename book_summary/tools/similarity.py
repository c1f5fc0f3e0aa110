from __future__ import annotations
from rapidfuzz.distance import Levenshtein


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive edit-distance similarity in [0, 1].
    1 means identical ignoring case; an empty string against a non-empty one scores 0.
    """
    a = (a or "").lower()
    b = (b or "").lower()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    dist = Levenshtein.distance(a, b)
    return 1.0 - dist / max(len(a), len(b))
