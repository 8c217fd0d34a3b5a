"""
Canonical event record.

The clean interface between raw extraction and whatever stores the events
downstream. Also holds id generation and the content fingerprint used to
flag likely duplicates across sources.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


SLUG_MAX_LENGTH = 30

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class EventRecord:
    """Normalized event ready for storage.

    Produced by the transformer from a raw field map. Only ``title`` and
    ``date`` are guaranteed; everything else is best effort.
    """

    id: str
    title: str
    date: str  # YYYY-MM-DD

    description: str | None = None

    # Times (HH:MM, 24-hour)
    start_time: str | None = None
    end_time: str | None = None
    is_all_day: bool = False

    location: str | None = None
    organizer: str | None = None
    website: str | None = None
    ticket_info: str | None = None
    contact_info: str | None = None

    # Classification
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    # Venue reconciliation
    venue_id: str | None = None
    venue_match_score: int | None = None

    status: str = "draft"
    event_type: str = "single"

    # Provenance
    source_url: str | None = None
    created_by: str = "scraper-system"
    owner_id: str = "scraper-system"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Raw data for debugging
    raw_data: dict[str, Any] = field(default_factory=dict)

    def compute_fingerprint(self) -> str:
        """Content fingerprint over title, date and location.

        Case and spacing differences do not change the fingerprint.
        """
        content_parts = [
            _fingerprint_part(self.title),
            self.date or "",
            _fingerprint_part(self.location),
        ]

        content_string = "|".join(content_parts)
        return hashlib.sha256(content_string.encode()).hexdigest()[:32]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Lower-case ASCII slug with words joined by hyphens.

    Example:
        slugify('Wrestling Fringe!')  # 'wrestling-fringe'
    """
    cleaned = _NON_SLUG_CHARS.sub("", (text or "").lower())
    slug = _WHITESPACE.sub("-", cleaned.strip())
    return slug[:max_length]


def generate_event_id(title: str, date: str) -> str:
    """Build a readable event id from title and ISO date.

    Example:
        generate_event_id('Wrestling Fringe', '2025-07-20')
        # 'wrestling-fringe-2025-07-20'
    """
    return f"{slugify(title)}-{date}"


def find_duplicate_groups(events: list[EventRecord]) -> list[list[EventRecord]]:
    """Group events sharing a fingerprint; only groups of 2+ are returned."""
    groups: dict[str, list[EventRecord]] = {}
    for event in events:
        groups.setdefault(event.compute_fingerprint(), []).append(event)

    return [group for group in groups.values() if len(group) > 1]


def _fingerprint_part(value: str | None) -> str:
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.lower()).strip()
