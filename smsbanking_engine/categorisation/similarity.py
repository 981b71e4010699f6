"""
String similarity for merchant and keyword matching.
"""

from rapidfuzz.distance import Levenshtein


def string_similarity(s1: str, s2: str) -> float:
    """
    Normalized Levenshtein similarity.

    Args:
        s1: First string
        s2: Second string

    Returns:
        1 - distance / max(len), so identical strings give 1.0 and a string
        against the empty string gives 0.0

    Example:
        >>> round(string_similarity("swigy", "swiggy"), 3)
        0.833
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return Levenshtein.normalized_similarity(s1, s2)
