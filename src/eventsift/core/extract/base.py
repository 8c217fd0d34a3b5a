"""
Extraction base data structures.

Defines the envelope a scraper hands over and the result of turning it
into event records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..normalize.canonical import EventRecord


# Placeholder LLM extractors write for fields they could not read
NOT_FOUND_VALUE = "Not found"


def is_blank(value: Any) -> bool:
    """True for None, empty/whitespace strings and the not-found placeholder."""
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped == NOT_FOUND_VALUE
    return False


@dataclass
class ScrapingResult:
    """Raw output of a scraper for a single URL."""

    url: str
    data: dict[str, Any] = field(default_factory=dict)
    success: bool = True
    errors: list[str] = field(default_factory=list)


@dataclass
class EventExtractionResult:
    """Result of an extraction operation."""

    events: list[EventRecord] = field(default_factory=list)

    # Warnings and errors
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    # Number of candidate maps (top level, nested documents, array items) tried
    sources_attempted: int = 0

    @property
    def ok(self) -> bool:
        """Check if extraction was successful."""
        return len(self.events) > 0 and not self.errors

    @property
    def event_count(self) -> int:
        return len(self.events)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
