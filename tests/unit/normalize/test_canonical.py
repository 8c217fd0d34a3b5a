"""Unit tests for the canonical event record module."""

from __future__ import annotations

from eventsift.core.normalize.canonical import (
    EventRecord,
    find_duplicate_groups,
    generate_event_id,
    slugify,
)


def _record(title="Wrestling Fringe", date="2025-07-20", location="Pump House", **kwargs):
    return EventRecord(
        id=generate_event_id(title, date),
        title=title,
        date=date,
        location=location,
        **kwargs,
    )


class TestEventIds:
    """Tests for slug and id generation."""

    def test_generate_event_id(self):
        """Ids are the title slug followed by the date."""
        assert generate_event_id("Wrestling Fringe", "2025-07-20") == "wrestling-fringe-2025-07-20"

    def test_punctuation_dropped(self):
        """Non-alphanumerics are removed from slugs."""
        assert slugify("Rock & Roll Night!") == "rock-roll-night"

    def test_slug_truncated(self):
        """Long titles are cut to 30 characters."""
        event_id = generate_event_id("A Very Long Event Title That Goes On And On", "2025-07-20")
        slug = event_id[: -len("-2025-07-20")]

        assert len(slug) <= 30
        assert event_id.startswith("a-very-long-event-title")
        assert event_id.endswith("-2025-07-20")


class TestEventRecord:
    """Tests for EventRecord defaults and serialization."""

    def test_defaults(self):
        """New records are drafts owned by the scraper system."""
        record = _record()

        assert record.status == "draft"
        assert record.event_type == "single"
        assert record.created_by == "scraper-system"
        assert record.owner_id == "scraper-system"
        assert record.categories == []
        assert record.is_all_day is False

    def test_to_dict_serializes_datetimes(self):
        """Timestamps become ISO strings."""
        data = _record().to_dict()

        assert isinstance(data["created_at"], str)
        assert isinstance(data["updated_at"], str)
        assert data["id"] == "wrestling-fringe-2025-07-20"


class TestFingerprint:
    """Tests for content fingerprints and duplicate grouping."""

    def test_case_and_spacing_ignored(self):
        """Fingerprints ignore case and whitespace differences."""
        a = _record(title="Wrestling Fringe", location="Pump House")
        b = _record(title="WRESTLING   fringe", location=" pump house ")

        assert a.compute_fingerprint() == b.compute_fingerprint()
        assert len(a.compute_fingerprint()) == 32

    def test_different_date_differs(self):
        """Events on different dates have different fingerprints."""
        a = _record(date="2025-07-20")
        b = _record(date="2025-07-21")

        assert a.compute_fingerprint() != b.compute_fingerprint()

    def test_find_duplicate_groups(self):
        """Only fingerprints shared by two or more events form groups."""
        a = _record()
        b = _record(title="wrestling fringe")
        c = _record(title="Open Mic")

        groups = find_duplicate_groups([a, b, c])

        assert len(groups) == 1
        assert groups[0] == [a, b]
