"""
Venue matching base types.

Venues come from a read-only directory (YAML/JSON or another service) and
may carry more keys than the matcher needs; unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class MatchType(str, Enum):
    """Strategy that produced a venue match."""

    EXACT = "exact"
    PARTIAL = "partial"
    FUZZY = "fuzzy"
    KEYWORD = "keyword"
    NONE = "none"


class MatchedField(str, Enum):
    """Venue attribute the input text matched."""

    NAME = "name"
    ADDRESS = "address"
    BOTH = "both"
    NONE = "none"


# =============================================================================
# Venue Model
# =============================================================================


class GeoPoint(BaseModel):
    """Latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Venue(BaseModel):
    """A known venue from the venue directory."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str
    address: str = Field(default="", description="Street address, free text")
    geo: GeoPoint | None = None
    status: str = "published"


# =============================================================================
# Match Result
# =============================================================================


@dataclass(frozen=True)
class VenueMatchResult:
    """Outcome of matching free text against the venue directory."""

    venue: Venue | None
    score: int  # 0-100
    match_type: MatchType
    matched_field: MatchedField

    @property
    def matched(self) -> bool:
        return self.venue is not None

    @classmethod
    def empty(cls) -> "VenueMatchResult":
        return cls(venue=None, score=0, match_type=MatchType.NONE, matched_field=MatchedField.NONE)
