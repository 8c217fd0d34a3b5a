"""
Text normalization for extracted event fields.

Cleans whitespace and punctuation noise left by OCR/LLM extraction and
fixes shouting (ALL CAPS) or all-lowercase text by converting it to
title case. Mixed-case input is assumed to be intentional and is left alone.
"""

from __future__ import annotations

import re


# Words kept lower-case inside a title unless first or last
SMALL_WORDS = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "for", "if", "in",
    "nor", "of", "on", "or", "so", "the", "to", "up", "yet", "with",
})

LEGAL_SUFFIXES = ("ltd", "limited", "inc", "incorporated", "llc", "plc")

_WHITESPACE = re.compile(r"\s+")
_REPEATED_PUNCTUATION = re.compile(r"([!?.])\1+")
_DOUBLE_QUOTES = re.compile(r"[\"“”„«»]")
# Apostrophes not sitting between two word characters
_BOUNDARY_APOSTROPHE = re.compile(r"(?<!\w)['‘’]|['‘’](?!\w)")
_SEPARATORS = re.compile(r"\s*[&+]\s*")
_LEGAL_SUFFIX_PATTERN = re.compile(
    r"\b(?:" + "|".join(LEGAL_SUFFIXES) + r")\b\.*",
    re.IGNORECASE,
)


def clean_extra_whitespace(text: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not text or not isinstance(text, str):
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def remove_punctuation(text: str | None) -> str:
    """Strip punctuation noise while keeping meaningful marks.

    Removes runs of repeated ``!``, ``?`` or ``.`` entirely, double quotes,
    and apostrophes used as quotation marks. In-word apostrophes
    (``Smith's``, ``don't``) and single periods survive.

    Example:
        remove_punctuation('Event!!! - "Amazing"')  # 'Event - Amazing'
    """
    if not text or not isinstance(text, str):
        return ""

    previous = None
    while text != previous:
        previous = text
        text = _REPEATED_PUNCTUATION.sub("", text)
        text = _DOUBLE_QUOTES.sub("", text)
        text = _BOUNDARY_APOSTROPHE.sub("", text)
        text = clean_extra_whitespace(text)

    return text


def _capitalize_first(word: str) -> str:
    first = word[:1].upper()
    # Characters like "ß" grow when upper-cased
    if len(first) != 1:
        first = word[:1]
    return first + word[1:]


def to_title_case(text: str | None) -> str:
    """Convert text to title case, keeping small words lower-case.

    The first and last words are always capitalized.

    Example:
        to_title_case('the lord of the rings')  # 'The Lord of the Rings'
    """
    if not text or not isinstance(text, str):
        return ""

    words = text.lower().split(" ")
    last = len(words) - 1
    result = []
    for index, word in enumerate(words):
        if index in (0, last) or word not in SMALL_WORDS:
            result.append(_capitalize_first(word))
        else:
            result.append(word)
    return " ".join(result)


def _is_single_case(text: str) -> bool:
    return text == text.upper() or text == text.lower()


def normalize_capitalization(text: str | None) -> str:
    """Title-case text that is entirely upper or lower case."""
    text = clean_extra_whitespace(text)
    if text and _is_single_case(text):
        return to_title_case(text)
    return text


def normalize_title(text: str | None) -> str:
    """Normalize an event title (or any free-text display field).

    Example:
        normalize_title('WRESTLING FRINGE FAMILY FRIENDLY WRESTLING!!!')
        # 'Wrestling Fringe Family Friendly Wrestling'
    """
    return normalize_capitalization(remove_punctuation(text))


def _strip_location_noise(text: str) -> str:
    previous = None
    while text != previous:
        previous = text
        text = _SEPARATORS.sub(" ", text)
        text = _LEGAL_SUFFIX_PATTERN.sub("", text)
        text = remove_punctuation(text)
    return text


def normalize_location(text: str | None) -> str:
    """Normalize a location/venue string.

    On top of title normalization, ``&`` and ``+`` separators become spaces
    and legal-entity suffixes (Ltd, Inc, LLC, ...) are dropped. Casing is
    fixed last so that stripping a suffix cannot change the case decision
    on a second pass.

    Example:
        normalize_location('PUMP HOUSE THEATRE & ARTS CENTRE')
        # 'Pump House Theatre Arts Centre'
    """
    if not text or not isinstance(text, str):
        return ""
    return normalize_capitalization(_strip_location_noise(text))
