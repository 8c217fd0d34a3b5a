"""Unit tests for keyword-based event classification."""

from __future__ import annotations

from eventsift.core.extract import VALID_CATEGORIES, EventCategory, classify_event


class TestClassifyEvent:
    """Tests for classify_event."""

    def test_title_and_description(self):
        """Keywords from both title and description count."""
        assert classify_event("Live Music Night", "Local bands and a DJ") == ["music", "community"]

    def test_default_other(self):
        """Nothing matching gives ['other']."""
        assert classify_event("Untitled", None) == ["other"]
        assert classify_event(None) == ["other"]

    def test_at_most_three_in_table_order(self):
        """Only the first three categories in table order are kept."""
        result = classify_event("Family comedy concert and food market in the park")
        assert result == ["music", "food", "comedy"]

    def test_word_start_matching(self):
        """'party' does not count as 'art'."""
        assert classify_event("Birthday Party") == ["nightlife"]

    def test_extra_text(self):
        """Extra page content is classified too."""
        assert classify_event("Saturday Session", None, "Bring the kids along") == ["family"]

    def test_results_are_whitelisted(self):
        """Every returned category is a valid category value."""
        result = classify_event("Charity fun run and yoga in the park", "Volunteer with us")
        assert set(result) <= VALID_CATEGORIES
        assert 1 <= len(result) <= 3


class TestEventCategory:
    """Tests for the category enum."""

    def test_values(self):
        """The whitelist includes 'other' and is string-valued."""
        assert EventCategory.OTHER.value == "other"
        assert "theatre" in VALID_CATEGORIES
        assert len(VALID_CATEGORIES) == 14
