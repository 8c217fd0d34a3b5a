"""
Field alias tables for raw event data.

Maps each canonical event field to the keys it commonly appears under in
LLM output and scraped key/value data. Order matters: the first alias with
a usable value wins. Used by EventTransformer for exact key lookup and as
the target list for heuristic (normalized/fuzzy) label matching.
"""

from __future__ import annotations

import re

# =============================================================================
# Canonical Field -> Raw Keys
# =============================================================================

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": (
        "title",
        "name",
        "event_title",
        "event_name",
        "eventTitle",
        "eventName",
        "heading",
        "h1",
    ),
    "date": (
        "date",
        "event_date",
        "eventDate",
        "start_date",
        "startDate",
        "when",
        "datetime",
        "dateTime",
        "publishDate",
        "date_range",
    ),
    "description": (
        "description",
        "content",
        "details",
        "summary",
        "about",
    ),
    "start_time": (
        "start_time",
        "startTime",
        "time",
        "when",
    ),
    "end_time": (
        "end_time",
        "endTime",
        "until",
    ),
    "location": (
        "location",
        "venue",
        "address",
        "where",
        "place",
    ),
    "organizer": (
        "organizer",
        "organiser",
        "host",
        "by",
        "author",
    ),
    "website": (
        "website",
        "url",
        "link",
        "more_info",
    ),
    "ticket_info": (
        "tickets",
        "ticketInfo",
        "ticket_info",
        "price",
        "cost",
        "booking",
    ),
    "contact_info": (
        "contact",
        "contactInfo",
        "contact_info",
        "email",
        "phone",
    ),
}

# Every exact alias key, whatever field it belongs to
ALL_ALIAS_KEYS: frozenset[str] = frozenset(
    alias for aliases in FIELD_ALIASES.values() for alias in aliases
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_LABEL_NOISE = re.compile(r"[^a-z0-9]+")


def normalize_label(label: str) -> str:
    """Normalize a raw key or label for comparison.

    Example:
        normalize_label('Event Date:')  # 'event date'
        normalize_label('eventTitle')   # 'event title'
    """
    if not label:
        return ""
    spaced = _CAMEL_BOUNDARY.sub(" ", label.strip())
    return _LABEL_NOISE.sub(" ", spaced.lower()).strip()


# Normalized alias -> canonical field, first field in table order wins
_NORMALIZED_ALIASES: dict[str, str] = {}
for _field, _aliases in FIELD_ALIASES.items():
    for _alias in _aliases:
        _NORMALIZED_ALIASES.setdefault(normalize_label(_alias), _field)


def find_canonical_field(label: str) -> str | None:
    """Find the canonical field for a label by normalized exact match.

    Args:
        label: Raw key or label text

    Returns:
        Canonical field name if found, None otherwise
    """
    normalized = normalize_label(label)
    if not normalized:
        return None
    return _NORMALIZED_ALIASES.get(normalized)


def get_aliases_for_field(field_name: str) -> tuple[str, ...]:
    """Get the ordered raw keys for a canonical field name."""
    return FIELD_ALIASES.get(field_name, ())


def normalized_alias_items() -> list[tuple[str, str]]:
    """(normalized alias, canonical field) pairs in table order."""
    return list(_NORMALIZED_ALIASES.items())
