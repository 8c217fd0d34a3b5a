"""
Shared pytest fixtures for the eventsift test suite.

Provides factory fixtures for venues and raw event payloads, plus a small
venue directory mirroring configs/venues.yaml.
"""

from __future__ import annotations

import json
import logging

import pytest

from eventsift.core.config import ExtractionConfig, ProcessingOptions
from eventsift.core.extract import EventTransformer
from eventsift.core.match import GeoPoint, Venue


@pytest.fixture
def make_venue():
    """Factory fixture to build Venue objects with sensible defaults."""

    def _make(
        venue_id: str = "venue-1",
        name: str = "Test Venue",
        address: str = "",
        **kwargs,
    ) -> Venue:
        return Venue(id=venue_id, name=name, address=address, **kwargs)

    return _make


@pytest.fixture
def venues(make_venue):
    """Small venue directory used across matcher and processing tests."""
    return [
        make_venue(
            "pump-house",
            "Pump House Theatre & Arts Centre",
            "Local Board Road, Watford",
            geo=GeoPoint(lat=51.6498, lng=-0.3925),
        ),
        make_venue("globe", "The Globe Theatre", "21 New Globe Walk, London"),
        make_venue("palace", "Watford Palace Theatre", "20 Clarendon Road, Watford"),
        make_venue("colosseum", "Watford Colosseum", "Rickmansworth Road, Watford"),
    ]


@pytest.fixture
def flyer_event_data():
    """Raw LLM field map for a shouty OCR'd wrestling flyer."""
    return {
        "title": "WRESTLING FRINGE!!!",
        "description": "family friendly",
        "date": "SUNDAY 20TH JULY 2025 - 3PM",
        "location": "PUMP HOUSE THEATRE & ARTS CENTRE",
        "organizer": "Watford Wrestling",
        "ticketInfo": "£8 on the door",
        "categories": ["sports", "family", "bogus"],
        "tags": ["Wrestling", "wrestling", " Family ", "x"],
    }


@pytest.fixture
def scraped_event_data():
    """Scraped key/value map for a single event page."""
    return {
        "title": "Wrestling Fringe",
        "date": "SUNDAY 20TH JULY 2025 - 3PM",
        "venue": "Pump House Theatre",
        "description": "Family friendly wrestling show",
    }


@pytest.fixture
def transformer():
    """EventTransformer with default extraction settings."""
    return EventTransformer(ExtractionConfig())


@pytest.fixture
def processing_options():
    """Default processing options."""
    return ProcessingOptions()


@pytest.fixture
def write_json(tmp_path):
    """Factory fixture writing an object to a JSON file under tmp_path."""

    def _write(name: str, payload) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def reset_eventsift_logging():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("eventsift")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
