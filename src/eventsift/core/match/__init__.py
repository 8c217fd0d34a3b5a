"""Venue matching against a known venue directory."""

from .base import (
    GeoPoint,
    MatchedField,
    MatchType,
    Venue,
    VenueMatchResult,
)
from .venues import (
    find_best_venue_match,
    find_venue_candidates,
    normalize_venue_name,
    match_venue_by_name,
    match_venue_by_address,
    extract_venue_keywords,
    extract_address_keywords,
)

__all__ = [
    # Types
    "GeoPoint",
    "MatchedField",
    "MatchType",
    "Venue",
    "VenueMatchResult",
    # Matching
    "find_best_venue_match",
    "find_venue_candidates",
    "normalize_venue_name",
    "match_venue_by_name",
    "match_venue_by_address",
    "extract_venue_keywords",
    "extract_address_keywords",
]
