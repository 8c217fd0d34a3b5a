"""
String similarity helpers built on Levenshtein edit distance.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein


@dataclass(frozen=True)
class SimilarityMatch:
    """A candidate string and its similarity to the query (0.0 - 1.0)."""

    match: str
    similarity: float


def levenshtein_distance(a: str, b: str) -> int:
    """Number of single-character edits turning ``a`` into ``b``.

    Case-sensitive; callers lower-case first when they need otherwise.
    """
    return Levenshtein.distance(a, b)


def calculate_similarity(a: str, b: str) -> float:
    """Case-insensitive similarity score in [0, 1].

    1.0 means identical, 0.0 is returned when only one side is empty.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    a_lower, b_lower = a.lower(), b.lower()
    max_length = max(len(a_lower), len(b_lower))
    distance = Levenshtein.distance(a_lower, b_lower)
    return max(0.0, 1.0 - distance / max_length)


def find_best_match(
    query: str,
    candidates: Iterable[str],
    threshold: float = 0.6,
) -> SimilarityMatch | None:
    """Find the most similar candidate at or above ``threshold``.

    Ties keep the earliest candidate.

    Args:
        query: String to match
        candidates: Strings to search
        threshold: Minimum similarity to accept

    Returns:
        Best SimilarityMatch, or None when nothing qualifies
    """
    if not query:
        return None

    best: SimilarityMatch | None = None
    for candidate in candidates:
        similarity = calculate_similarity(query, candidate)
        if similarity < threshold:
            continue
        if best is None or similarity > best.similarity:
            best = SimilarityMatch(match=candidate, similarity=similarity)

    return best


def find_similar_matches(
    query: str,
    candidates: Iterable[str],
    threshold: float = 0.6,
) -> list[SimilarityMatch]:
    """All candidates at or above ``threshold``, most similar first.

    The sort is stable, so equal scores keep candidate order.
    """
    if not query:
        return []

    matches: list[SimilarityMatch] = []
    for candidate in candidates:
        similarity = calculate_similarity(query, candidate)
        if similarity >= threshold:
            matches.append(SimilarityMatch(match=candidate, similarity=similarity))

    matches.sort(key=lambda m: m.similarity, reverse=True)
    return matches


def is_partial_match(query: str, target: str) -> bool:
    """Check whether ``target`` contains ``query``, ignoring case."""
    if not query or not target:
        return False
    return query.lower() in target.lower()
