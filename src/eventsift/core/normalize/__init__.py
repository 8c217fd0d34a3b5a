"""Normalization of extracted event text, dates and records."""

from .text import (
    clean_extra_whitespace,
    remove_punctuation,
    to_title_case,
    normalize_capitalization,
    normalize_title,
    normalize_location,
)
from .similarity import (
    SimilarityMatch,
    levenshtein_distance,
    calculate_similarity,
    find_best_match,
    find_similar_matches,
    is_partial_match,
)
from .datetime_parsing import (
    ParsedDateTime,
    TimeInfo,
    parse_natural_date_time,
    extract_date_from_text,
    extract_time_from_text,
    is_valid_date,
    standardize_date_format,
    is_likely_date_time,
)
from .canonical import (
    EventRecord,
    slugify,
    generate_event_id,
    find_duplicate_groups,
)

__all__ = [
    # Text
    "clean_extra_whitespace",
    "remove_punctuation",
    "to_title_case",
    "normalize_capitalization",
    "normalize_title",
    "normalize_location",
    # Similarity
    "SimilarityMatch",
    "levenshtein_distance",
    "calculate_similarity",
    "find_best_match",
    "find_similar_matches",
    "is_partial_match",
    # Date/time
    "ParsedDateTime",
    "TimeInfo",
    "parse_natural_date_time",
    "extract_date_from_text",
    "extract_time_from_text",
    "is_valid_date",
    "standardize_date_format",
    "is_likely_date_time",
    # Canonical
    "EventRecord",
    "slugify",
    "generate_event_id",
    "find_duplicate_groups",
]
