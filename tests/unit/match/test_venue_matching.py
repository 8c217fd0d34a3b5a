"""Unit tests for the venue matching module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventsift.core.match import (
    MatchedField,
    MatchType,
    Venue,
    extract_address_keywords,
    extract_venue_keywords,
    find_best_venue_match,
    find_venue_candidates,
    match_venue_by_address,
    match_venue_by_name,
    normalize_venue_name,
)


class TestNormalizeVenueName:
    """Tests for venue name normalization."""

    def test_strips_type_words_and_arts(self):
        """Venue-type nouns, 'arts' and separators are removed."""
        assert normalize_venue_name("PUMP HOUSE THEATRE & ARTS CENTRE") == "pump house"

    def test_keeps_leading_article(self):
        """Only venue-type words are dropped."""
        assert normalize_venue_name("The Globe Theatre") == "the globe"

    def test_empty(self):
        """Empty names normalize to an empty string."""
        assert normalize_venue_name("") == ""


class TestKeywords:
    """Tests for keyword extraction."""

    def test_venue_keywords(self):
        """Short words and venue stopwords are dropped."""
        assert extract_venue_keywords("the pump house arts centre") == ["pump", "house"]

    def test_address_keywords(self):
        """Street-type words are dropped, house numbers kept."""
        assert extract_address_keywords("20 clarendon road, watford") == ["20", "clarendon", "watford"]


class TestMatchVenueByName:
    """Tests for name scoring."""

    def test_exact(self, make_venue):
        """Identical normalized names score 100."""
        venue = make_venue(name="Watford Colosseum")
        result = match_venue_by_name("watford colosseum", venue)

        assert result.score == 100
        assert result.match_type is MatchType.EXACT

    def test_partial(self, make_venue):
        """Containment scores by the length ratio."""
        venue = make_venue(name="The Globe Theatre")
        result = match_venue_by_name("globe", venue)

        assert result.score == 86
        assert result.match_type is MatchType.PARTIAL
        assert result.matched_field is MatchedField.NAME

    def test_keyword(self, make_venue):
        """Shared keywords score 60 plus the overlap ratio."""
        venue = make_venue(name="Watford Colosseum")
        result = match_venue_by_name("colosseum concerts watford", venue)

        assert result.match_type is MatchType.KEYWORD
        assert result.score == 77

    def test_empty_name_never_matches(self, make_venue):
        """A name that normalizes to nothing cannot match."""
        venue = make_venue(name="Theatre")
        assert match_venue_by_name("anything", venue).venue is None


class TestMatchVenueByAddress:
    """Tests for address scoring."""

    def test_shared_keywords(self, make_venue):
        """Score is the share of address keywords found in the input."""
        venue = make_venue(address="20 Clarendon Road, Watford")
        result = match_venue_by_address("clarendon road watford", venue)

        assert result.score == 67
        assert result.matched_field is MatchedField.ADDRESS

    def test_capped_at_ninety(self, make_venue):
        """Address matches never exceed 90."""
        venue = make_venue(address="Clarendon Road, Watford")
        result = match_venue_by_address("clarendon watford", venue)

        assert result.score == 90

    def test_no_address(self, make_venue):
        """Venues without an address cannot match by address."""
        assert match_venue_by_address("watford", make_venue()).venue is None


class TestFindBestVenueMatch:
    """Tests for best-venue lookup over a directory."""

    def test_exact_name(self, venues):
        """A shouty flyer location still matches exactly."""
        result = find_best_venue_match("PUMP HOUSE THEATRE & ARTS CENTRE", venues)

        assert result.venue.id == "pump-house"
        assert result.score == 100
        assert result.match_type is MatchType.EXACT
        assert result.matched_field is MatchedField.NAME

    def test_spelling_variant(self, venues):
        """'Theater' vs 'Theatre' is a partial name match."""
        result = find_best_venue_match("Globe Theater", venues)

        assert result.venue.id == "globe"
        assert result.score == 86
        assert result.match_type is MatchType.PARTIAL
        assert result.matched_field is MatchedField.NAME

    def test_name_and_address(self, venues):
        """Both name and address reaching the threshold is reported as BOTH."""
        result = find_best_venue_match("Watford Palace, Clarendon Road", venues)

        assert result.venue.id == "palace"
        assert result.score == 84
        assert result.matched_field is MatchedField.BOTH

    def test_threshold(self, venues):
        """Scores below the threshold give the empty result."""
        result = find_best_venue_match("Globe Theater", venues, threshold=90)

        assert result.venue is None
        assert result.score == 0
        assert result.match_type is MatchType.NONE
        assert result.matched_field is MatchedField.NONE

    def test_no_match(self, venues):
        """Unrelated text matches nothing."""
        assert not find_best_venue_match("Somewhere Else Entirely", venues).matched

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input(self, venues, text):
        """Empty input matches nothing."""
        assert find_best_venue_match(text, venues).venue is None

    def test_empty_directory(self):
        """No venues, no match."""
        assert find_best_venue_match("Globe Theater", []).venue is None

    def test_ties_keep_first_venue(self, make_venue):
        """Equal scores keep the earlier venue."""
        first = make_venue("a", "Globe")
        second = make_venue("b", "Globe")

        assert find_best_venue_match("Globe", [first, second]).venue.id == "a"


class TestFindVenueCandidates:
    """Tests for ranked candidate lists."""

    def test_ranked_best_first(self, venues):
        """Candidates are sorted by score, all at or above the threshold."""
        candidates = find_venue_candidates("Watford", venues, threshold=50)

        assert [c.venue.id for c in candidates] == ["palace", "colosseum"]
        assert [c.score for c in candidates] == [85, 83]

    def test_limit(self, venues):
        """The limit caps the number of candidates."""
        assert len(find_venue_candidates("Watford", venues, threshold=50, limit=1)) == 1


class TestVenueModel:
    """Tests for the Venue model."""

    def test_frozen(self, make_venue):
        """Venues are immutable."""
        venue = make_venue()
        with pytest.raises(ValidationError):
            venue.name = "Changed"

    def test_coerces_ids_and_ignores_extras(self):
        """Numeric ids become strings and unknown keys are ignored."""
        venue = Venue.model_validate({"id": 7, "name": "Hall 7", "capacity": 300})

        assert venue.id == "7"
        assert venue.status == "published"
