"""Unit tests for confidence scoring and extraction-quality assessment."""

from __future__ import annotations

import pytest

from eventsift.core.extract import LLMExtraction
from eventsift.core.orchestrator import (
    ConfidenceLevel,
    ExtractionQuality,
    assess_extraction,
    calculate_weighted_confidence,
    count_extracted_fields,
    create_validation_summary,
    get_confidence_level,
    get_field_confidence,
    get_fields_needing_review,
    has_minimum_viable_data,
    should_auto_fill_field,
)


def _extraction(event_data, confidence=None, success=True):
    return LLMExtraction(success=success, event_data=event_data, confidence=confidence or {})


class TestConfidence:
    """Tests for confidence helpers."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (85, ConfidenceLevel.HIGH),
            (80, ConfidenceLevel.HIGH),
            (60, ConfidenceLevel.MEDIUM),
            (45, ConfidenceLevel.LOW),
            (10, ConfidenceLevel.NONE),
        ],
    )
    def test_confidence_level(self, score, level):
        """Scores bucket into levels at 80/60/40."""
        assert get_confidence_level(score) is level

    def test_time_shares_date_confidence(self):
        """'time' has no score of its own."""
        assert get_field_confidence({"date": 70}, "time") == 70
        assert get_field_confidence(None, "title") == 0

    def test_auto_fill(self):
        """Auto-fill needs at least 50."""
        assert should_auto_fill_field(50)
        assert not should_auto_fill_field(49)

    def test_weighted_confidence(self):
        """Weighted average over the default field weights."""
        all_fields = {
            name: 100
            for name in (
                "title", "date", "location", "description",
                "organizer", "ticket_info", "contact_info", "website",
            )
        }

        assert calculate_weighted_confidence(all_fields) == 100
        assert calculate_weighted_confidence({}) == 0
        assert calculate_weighted_confidence({"title": 50}) == 11

    def test_fields_needing_review(self):
        """Only fields with some but low confidence need review."""
        confidence = {"overall": 50, "title": 90, "date": 40, "website": 0}
        assert get_fields_needing_review(confidence) == ["date"]

    def test_count_extracted_fields(self):
        """Blank and 'Not found' values do not count."""
        data = {"title": "X", "date": "Not found", "ticketInfo": "£5", "website": ""}
        assert count_extracted_fields(data) == 2


class TestAssessExtraction:
    """Tests for extraction assessment and grading."""

    def test_excellent(self):
        """Six fields with high confidence is excellent."""
        extraction = _extraction(
            {
                "title": "Wrestling Fringe",
                "description": "Family friendly",
                "date": "SUNDAY 20TH JULY 2025 - 3PM",
                "location": "Pump House",
                "organizer": "Watford Wrestling",
                "ticketInfo": "£8",
            },
            {"overall": 90, "title": 95, "date": 90, "location": 85},
        )

        report = assess_extraction(extraction)

        assert report.is_valid is True
        assert report.quality is ExtractionQuality.EXCELLENT
        assert report.extracted_field_count == 6
        assert report.confidence_score == 90
        assert report.warnings == ()
        assert create_validation_summary(report) == (
            "Excellent extraction quality - 6 fields extracted with 90% confidence"
        )

    def test_good(self):
        """Four fields with medium confidence is good."""
        extraction = _extraction(
            {"title": "Quiz", "date": "2025-08-01", "location": "The Globe", "organizer": "Globe Friends"},
            {"overall": 70, "title": 90, "date": 90, "location": 90},
        )

        assert assess_extraction(extraction).quality is ExtractionQuality.GOOD

    def test_missing_required_field(self):
        """A missing required field is an error and grades poor."""
        extraction = _extraction(
            {"title": "Quiz", "date": "2025-08-01", "location": "Not found"},
            {"overall": 90, "title": 90, "date": 90},
        )

        report = assess_extraction(extraction)

        assert report.is_valid is False
        assert report.errors == ("Required field 'location' has no valid data",)
        assert report.quality is ExtractionQuality.POOR
        assert create_validation_summary(report).startswith("Extraction failed:")

    def test_weighted_score_without_overall(self):
        """Without an overall score the weighted average is used."""
        extraction = _extraction(
            {"title": "Quiz", "date": "2025-08-01", "location": "The Globe"},
            {"title": 100, "date": 100, "location": 100},
        )

        assert assess_extraction(extraction).confidence_score == 56

    def test_no_confidence(self):
        """Missing confidence is a warning and grades poor."""
        extraction = _extraction({"title": "Quiz", "date": "2025-08-01", "location": "The Globe"})

        report = assess_extraction(extraction)

        assert report.is_valid is True
        assert "No confidence scores available" in report.warnings
        assert report.quality is ExtractionQuality.POOR
        assert create_validation_summary(report) == "Poor extraction quality - manual review recommended"

    def test_failed_extraction(self):
        """A failed extraction carries its error through."""
        report = assess_extraction(LLMExtraction(success=False, error="boom"))

        assert report.errors == ("boom",)
        assert report.quality is ExtractionQuality.POOR

    def test_minimum_viable_data(self):
        """Two required fields with auto-fill confidence are enough."""
        data = {"title": "Quiz", "date": "2025-08-01"}

        assert has_minimum_viable_data(_extraction(data, {"title": 80, "date": 60}))
        assert not has_minimum_viable_data(_extraction(data, {"title": 80, "date": 40}))
        assert not has_minimum_viable_data(_extraction(data, {"title": 80, "date": 60}, success=False))
