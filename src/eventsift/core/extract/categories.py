"""
Keyword-based event category classification.
"""

from __future__ import annotations

import re
from enum import Enum


class EventCategory(str, Enum):
    """Whitelisted event categories."""

    MUSIC = "music"
    SPORTS = "sports"
    ARTS = "arts"
    COMMUNITY = "community"
    EDUCATION = "education"
    FOOD = "food"
    NIGHTLIFE = "nightlife"
    THEATRE = "theatre"
    COMEDY = "comedy"
    FAMILY = "family"
    BUSINESS = "business"
    CHARITY = "charity"
    OUTDOOR = "outdoor"
    OTHER = "other"


VALID_CATEGORIES: frozenset[str] = frozenset(c.value for c in EventCategory)

MAX_CATEGORIES = 3

# Checked in this order; the first MAX_CATEGORIES hits win
CATEGORY_KEYWORDS: dict[EventCategory, tuple[str, ...]] = {
    EventCategory.MUSIC: ("concert", "gig", "band", "music", "festival", "acoustic", "live music", "dj"),
    EventCategory.SPORTS: ("football", "rugby", "cricket", "tennis", "match", "tournament", "fitness", "yoga", "gym"),
    EventCategory.ARTS: ("art", "exhibition", "gallery", "craft", "workshop", "painting", "sculpture", "creative"),
    EventCategory.COMMUNITY: ("community", "local", "residents", "neighbourhood", "meeting", "social"),
    EventCategory.EDUCATION: ("course", "lesson", "workshop", "training", "class", "seminar", "lecture", "learn"),
    EventCategory.FOOD: ("food", "restaurant", "cafe", "market", "tasting", "dinner", "lunch", "cooking"),
    EventCategory.NIGHTLIFE: ("club", "bar", "pub", "party", "nightclub", "drinks", "cocktail"),
    EventCategory.THEATRE: ("theatre", "play", "drama", "musical", "performance", "show", "acting"),
    EventCategory.COMEDY: ("comedy", "stand-up", "comedian", "funny", "laugh", "humor", "improv"),
    EventCategory.FAMILY: ("family", "children", "kids", "child", "playground", "activities"),
    EventCategory.BUSINESS: ("business", "networking", "conference", "meeting", "professional", "corporate"),
    EventCategory.CHARITY: ("charity", "fundraising", "volunteer", "donation", "cause", "support"),
    EventCategory.OUTDOOR: ("park", "outdoor", "walking", "hiking", "nature", "garden", "adventure"),
}

# Keywords match at the start of a word: "art" hits "artists" but not "party"
_CATEGORY_PATTERNS: dict[EventCategory, re.Pattern[str]] = {
    category: re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")")
    for category, keywords in CATEGORY_KEYWORDS.items()
}


def classify_event(title: str | None, description: str | None = None, extra: str | None = "") -> list[str]:
    """Tag an event with up to three categories from its text.

    Args:
        title: Event title
        description: Event description
        extra: Any other free text (e.g. scraped page content)

    Returns:
        Category values in table order, or ['other'] when nothing matches

    Example:
        classify_event('Live Music Night', 'Local bands and a DJ')
        # ['music', 'community']
    """
    text = " ".join(part for part in (title, description, extra) if isinstance(part, str)).lower()

    categories: list[str] = []
    for category, pattern in _CATEGORY_PATTERNS.items():
        if pattern.search(text):
            categories.append(category.value)
            if len(categories) >= MAX_CATEGORIES:
                break

    return categories or [EventCategory.OTHER.value]
