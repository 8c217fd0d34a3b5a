"""
Venue matching for free-text event locations.

Matches a location string such as "Pump House Theatre & Arts Centre"
against a directory of known venues using, in order of preference:

1. Exact match on the normalized name
2. Partial match (one normalized name contains the other)
3. Keyword overlap
4. Levenshtein similarity

Addresses are matched separately by keyword overlap and the better of the
two scores is kept per venue.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..logging import get_logger
from ..normalize.similarity import calculate_similarity
from ..normalize.text import normalize_location
from .base import MatchedField, MatchType, Venue, VenueMatchResult

logger = get_logger("match.venues")


DEFAULT_THRESHOLD = 60

# Generic venue-type nouns dropped before comparing names
VENUE_TYPE_WORDS = (
    "theatre", "theater", "centre", "center", "hall", "club", "pub", "bar",
    "restaurant", "cafe", "museum", "gallery", "stadium", "arena", "pavilion",
    "complex",
)

VENUE_STOPWORDS = frozenset({
    "the", "and", "or", "of", "at", "in", "on", "a", "an", "is", "are", "was", "were",
    "theatre", "theater", "centre", "center", "hall", "club", "pub", "bar", "arts",
})

ADDRESS_STOPWORDS = frozenset({
    "street", "st", "road", "rd", "avenue", "ave", "lane", "ln", "drive", "dr",
    "place", "pl", "close", "way", "court", "ct", "the", "and", "of",
})

_VENUE_TYPE_PATTERN = re.compile(r"\b(?:" + "|".join(VENUE_TYPE_WORDS) + r")\b")
_ARTS_PATTERN = re.compile(r"\barts\b")
_WHITESPACE = re.compile(r"\s+")
_ALPHA_WORD = re.compile(r"[a-z]+")
_ALNUM_WORD = re.compile(r"[a-z0-9]+")


# =============================================================================
# Public API
# =============================================================================


def find_best_venue_match(
    text: str,
    venues: Sequence[Venue],
    threshold: int = DEFAULT_THRESHOLD,
) -> VenueMatchResult:
    """Find the venue that best matches a location string.

    Args:
        text: Raw location/venue text
        venues: Known venues to search
        threshold: Minimum score (0-100) to accept

    Returns:
        Best VenueMatchResult, or the empty result when nothing reaches
        the threshold. Ties keep the earlier venue.

    Example:
        find_best_venue_match('Globe Theater', [globe])
        # VenueMatchResult(venue=globe, score=86, match_type=PARTIAL, ...)
    """
    candidates = find_venue_candidates(text, venues, threshold=threshold, limit=1)
    if not candidates:
        return VenueMatchResult.empty()
    return candidates[0]


def find_venue_candidates(
    text: str,
    venues: Sequence[Venue],
    threshold: int = DEFAULT_THRESHOLD,
    limit: int | None = 5,
) -> list[VenueMatchResult]:
    """All venues scoring at or above ``threshold``, best first."""
    if not text or not isinstance(text, str) or not venues:
        return []

    normalized_input = normalize_venue_name(text)
    if not normalized_input:
        return []

    matches: list[VenueMatchResult] = []
    for venue in venues:
        result = _score_venue(normalized_input, venue, threshold)
        if result.venue is not None and result.score >= threshold:
            matches.append(result)

    matches.sort(key=lambda m: m.score, reverse=True)

    if matches:
        best = matches[0]
        logger.debug(
            f"Venue match for {text!r}: {best.venue.name!r} "
            f"({best.score}, {best.match_type.value}/{best.matched_field.value})"
        )

    if limit is not None:
        return matches[:limit]
    return matches


def normalize_venue_name(name: str) -> str:
    """Normalize a venue name for comparison.

    Example:
        normalize_venue_name('PUMP HOUSE THEATRE & ARTS CENTRE')  # 'pump house'
    """
    if not name or not isinstance(name, str):
        return ""

    text = normalize_location(name).lower()
    text = _VENUE_TYPE_PATTERN.sub(" ", text)
    text = _ARTS_PATTERN.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def match_venue_by_name(normalized_input: str, venue: Venue) -> VenueMatchResult:
    """Score a venue's name against already-normalized input text."""
    venue_name = normalize_venue_name(venue.name)

    if not normalized_input or not venue_name:
        return VenueMatchResult.empty()

    if normalized_input == venue_name:
        return _result(venue, 100, MatchType.EXACT, MatchedField.NAME)

    if normalized_input in venue_name or venue_name in normalized_input:
        score = _partial_match_score(normalized_input, venue_name)
        return _result(venue, score, MatchType.PARTIAL, MatchedField.NAME)

    keyword_score = _keyword_match_score(normalized_input, venue_name)
    if keyword_score > 0:
        return _result(venue, keyword_score, MatchType.KEYWORD, MatchedField.NAME)

    fuzzy_score = _round_half_up(calculate_similarity(normalized_input, venue_name) * 100)
    if fuzzy_score > 0:
        return _result(venue, fuzzy_score, MatchType.FUZZY, MatchedField.NAME)

    return VenueMatchResult.empty()


def match_venue_by_address(normalized_input: str, venue: Venue) -> VenueMatchResult:
    """Score a venue's address against already-normalized input text."""
    if not venue.address or not normalized_input:
        return VenueMatchResult.empty()

    address_keywords = extract_address_keywords(normalize_venue_name(venue.address))
    input_keywords = extract_address_keywords(normalized_input)

    if not address_keywords or not input_keywords:
        return VenueMatchResult.empty()

    common = [
        keyword
        for keyword in address_keywords
        if any(_overlap(keyword, other) for other in input_keywords)
    ]
    if not common:
        return VenueMatchResult.empty()

    score = min(90, _round_half_up(len(common) / len(address_keywords) * 100))
    return _result(venue, score, MatchType.KEYWORD, MatchedField.ADDRESS)


def extract_venue_keywords(text: str) -> list[str]:
    """Alphabetic words of 3+ characters, minus venue stopwords."""
    if not text:
        return []
    return [
        word
        for word in _ALPHA_WORD.findall(text.lower())
        if len(word) > 2 and word not in VENUE_STOPWORDS
    ]


def extract_address_keywords(text: str) -> list[str]:
    """Alphanumeric tokens of 2+ characters, minus street-type words."""
    if not text:
        return []
    return [
        word
        for word in _ALNUM_WORD.findall(text.lower())
        if len(word) > 1 and word not in ADDRESS_STOPWORDS
    ]


# =============================================================================
# Helpers
# =============================================================================


def _score_venue(normalized_input: str, venue: Venue, threshold: int) -> VenueMatchResult:
    name_match = match_venue_by_name(normalized_input, venue)
    address_match = match_venue_by_address(normalized_input, venue)

    best = name_match if name_match.score >= address_match.score else address_match

    if (
        name_match.matched
        and address_match.matched
        and name_match.score >= threshold
        and address_match.score >= threshold
    ):
        return _result(venue, best.score, best.match_type, MatchedField.BOTH)

    return best


def _partial_match_score(a: str, b: str) -> int:
    shorter, longer = sorted((len(a), len(b)))
    return _round_half_up(75 + 20 * shorter / longer)


def _keyword_match_score(a: str, b: str) -> int:
    input_keywords = extract_venue_keywords(a)
    target_keywords = extract_venue_keywords(b)

    if not input_keywords or not target_keywords:
        return 0

    common = [
        keyword
        for keyword in input_keywords
        if any(_overlap(keyword, other) for other in target_keywords)
    ]
    if not common:
        return 0

    ratio = len(common) / max(len(input_keywords), len(target_keywords))
    return _round_half_up(60 + 25 * ratio)


def _overlap(a: str, b: str) -> bool:
    return a in b or b in a


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _result(venue: Venue, score: int, match_type: MatchType, matched_field: MatchedField) -> VenueMatchResult:
    return VenueMatchResult(venue=venue, score=score, match_type=match_type, matched_field=matched_field)
