"""
Processing of LLM-extracted event data.

Combines the normalizers, the date/time parser and the venue matcher to
turn a raw LLM field map into a ProcessedEventData, recording a note for
every field that was changed along the way, and validates the result.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from ..config.models import ProcessingOptions
from ..extract.base import NOT_FOUND_VALUE, is_blank
from ..extract.categories import MAX_CATEGORIES, VALID_CATEGORIES
from ..logging import get_logger
from ..match.base import Venue, VenueMatchResult
from ..match.venues import find_best_venue_match
from ..normalize.datetime_parsing import ParsedDateTime, parse_natural_date_time
from ..normalize.text import normalize_location, normalize_title

logger = get_logger("orchestrator.processing")


MAX_TAGS = 10
MIN_TAG_LENGTH = 2
MAX_TAG_LENGTH = 30

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CLOCK_TIME = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating processed event data."""

    is_valid: bool = False
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    required_fields_missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProcessedEventData:
    """Normalized, parsed and venue-matched event data.

    Built once per processing call and never mutated.
    """

    # Text fields
    title: str
    description: str
    location: str
    organizer: str
    ticket_info: str
    contact_info: str
    website: str

    # Date/time
    date: str | None
    start_time: str | None
    end_time: str | None
    is_all_day: bool

    # Venue matching
    venue_id: str | None
    matched_venue: Venue | None
    venue_match_score: int

    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    # Processing metadata
    processing_notes: tuple[str, ...] = ()
    original_data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    validation: ValidationResult = field(default_factory=ValidationResult)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "organizer": self.organizer,
            "ticket_info": self.ticket_info,
            "contact_info": self.contact_info,
            "website": self.website,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "is_all_day": self.is_all_day,
            "venue_id": self.venue_id,
            "matched_venue": self.matched_venue.model_dump() if self.matched_venue else None,
            "venue_match_score": self.venue_match_score,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "processing_notes": list(self.processing_notes),
            "original_data": dict(self.original_data),
            "validation": {
                "is_valid": self.validation.is_valid,
                "errors": list(self.validation.errors),
                "warnings": list(self.validation.warnings),
                "required_fields_missing": list(self.validation.required_fields_missing),
            },
        }


# =============================================================================
# Processing
# =============================================================================


def process_extracted_event_data(
    raw: Mapping[str, Any],
    venues: Sequence[Venue] = (),
    options: ProcessingOptions | None = None,
) -> ProcessedEventData:
    """Process raw LLM-extracted event data into clean, structured form.

    Args:
        raw: Raw field map from an LLM extraction
        venues: Known venues for location matching
        options: Processing options (defaults apply when None)

    Returns:
        ProcessedEventData including processing notes and validation

    Example:
        processed = process_extracted_event_data(llm_fields, venues=all_venues)
        processed.venue_id          # 'pump-house' when the location matched
        processed.processing_notes  # ('Normalized title: ...', ...)
    """
    options = options or ProcessingOptions()
    notes: list[str] = []

    def text_field(label: str, keys: tuple[str, ...], normalizer) -> str:
        original = _raw_text(raw, keys)
        if options.normalize_text:
            value = normalizer(original)
        else:
            value = original.strip()
        if original and value != original:
            notes.append(f'Normalized {label}: "{original}" -> "{value}"')
        return value

    title = text_field("title", ("title",), normalize_title)
    description = text_field("description", ("description",), normalize_title)
    location = text_field("location", ("location",), normalize_location)
    organizer = text_field("organizer", ("organizer",), normalize_title)

    raw_date = _raw_text(raw, ("date",))
    date_time = parse_event_date_time(raw_date)
    if raw_date and (date_time.date != raw_date or date_time.has_time or date_time.is_all_day):
        time_note = "all day" if date_time.is_all_day else date_time.start_time
        if date_time.end_time:
            time_note = f"{time_note}-{date_time.end_time}"
        notes.append(f'Parsed date/time: "{raw_date}" -> date: {date_time.date}, time: {time_note}')

    venue_match = match_event_venue(location, venues, options.venue_match_threshold)
    if venue_match.venue is not None:
        notes.append(
            f'Matched venue: "{location}" -> "{venue_match.venue.name}" (score: {venue_match.score})'
        )

    raw_categories = _raw_list(raw.get("categories"))
    categories = validate_categories(raw_categories)
    if categories != raw_categories:
        dropped = [str(c) for c in raw_categories if c not in categories]
        notes.append(f"Dropped categories: {', '.join(dropped)}")

    raw_tags = _raw_list(raw.get("tags"))
    tags = process_tags(raw_tags)
    if tags != raw_tags:
        notes.append(f"Cleaned tags: {len(raw_tags)} -> {len(tags)}")

    processed = ProcessedEventData(
        title=title,
        description=description,
        location=location,
        organizer=organizer,
        ticket_info=_raw_text(raw, ("ticket_info", "ticketInfo")).strip(),
        contact_info=_raw_text(raw, ("contact_info", "contactInfo")).strip(),
        website=_raw_text(raw, ("website",)).strip(),
        date=date_time.date,
        start_time=date_time.start_time,
        end_time=date_time.end_time,
        is_all_day=date_time.is_all_day,
        venue_id=venue_match.venue.id if venue_match.venue else None,
        matched_venue=venue_match.venue,
        venue_match_score=venue_match.score,
        categories=tuple(categories),
        tags=tuple(tags),
        processing_notes=tuple(notes),
        original_data=MappingProxyType(dict(raw)),
    )

    validation = validate_extracted_data(processed, strict=options.strict_validation)
    logger.debug(
        f"Processed {title!r}: {len(notes)} note(s), valid={validation.is_valid}"
    )
    return replace(processed, validation=validation)


def parse_event_date_time(value: Any) -> ParsedDateTime:
    """Parse an event date/time string, treating 'Not found' as empty."""
    if is_blank(value) or not isinstance(value, str):
        raw = value if isinstance(value, str) else ""
        return ParsedDateTime(date=None, start_time=None, end_time=None, is_all_day=False, raw=raw)
    return parse_natural_date_time(value)


def match_event_venue(
    location: str,
    venues: Sequence[Venue],
    threshold: int = 70,
) -> VenueMatchResult:
    """Match an event location against known venues."""
    if is_blank(location) or not venues:
        return VenueMatchResult.empty()
    return find_best_venue_match(location, venues, threshold)


def validate_categories(categories: Sequence[Any]) -> list[str]:
    """Keep whitelisted categories, at most three."""
    valid = [c for c in categories if isinstance(c, str) and c in VALID_CATEGORIES]
    return valid[:MAX_CATEGORIES]


def process_tags(tags: Sequence[Any]) -> list[str]:
    """Lower-case, trim and de-duplicate tags, keeping at most ten."""
    cleaned: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        value = tag.strip().lower()
        if MIN_TAG_LENGTH <= len(value) <= MAX_TAG_LENGTH and value not in cleaned:
            cleaned.append(value)
    return cleaned[:MAX_TAGS]


# =============================================================================
# Validation
# =============================================================================


def validate_extracted_data(data: ProcessedEventData | Mapping[str, Any], strict: bool = False) -> ValidationResult:
    """Validate processed event data.

    Args:
        data: ProcessedEventData (or a mapping with the same keys)
        strict: Treat missing description/organizer as missing required fields

    Returns:
        ValidationResult; only ``is_valid`` should gate publishing
    """
    errors: list[str] = []
    warnings: list[str] = []
    missing: list[str] = []

    if is_blank(_get(data, "title")):
        missing.append("title")

    date = _get(data, "date")
    if is_blank(date):
        missing.append("date")
    elif not isinstance(date, str) or not _ISO_DATE.match(date):
        errors.append("Invalid date format. Expected YYYY-MM-DD.")

    if is_blank(_get(data, "location")):
        missing.append("location")

    start_time = _get(data, "start_time")
    end_time = _get(data, "end_time")

    for label, value in (("start", start_time), ("end", end_time)):
        if value and not (isinstance(value, str) and _CLOCK_TIME.match(value)):
            errors.append(f"Invalid {label} time format: {value}. Expected HH:MM.")

    if not _get(data, "is_all_day") and not start_time:
        warnings.append("No start time specified for non-all-day event")

    if start_time and end_time and start_time >= end_time:
        errors.append("End time must be after start time")

    for name, message in (("description", "Description is empty"), ("organizer", "Organizer is empty")):
        if is_blank(_get(data, name)):
            if strict:
                missing.append(name)
            else:
                warnings.append(message)

    return ValidationResult(
        is_valid=not errors and not missing,
        errors=tuple(errors),
        warnings=tuple(warnings),
        required_fields_missing=tuple(missing),
    )


def create_processing_summary(processed: ProcessedEventData) -> str:
    """Human-readable summary of the changes processing made."""
    notes = processed.processing_notes

    if not notes:
        return "No processing changes were needed."

    lines = "\n".join(f"• {note}" for note in notes)
    return f"Made {len(notes)} improvements:\n{lines}"


# =============================================================================
# Helpers
# =============================================================================


def _raw_text(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    """First string value under any of ``keys``; '' when blank or 'Not found'."""
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip() != NOT_FOUND_VALUE:
            if value.strip():
                return value
    return ""


def _raw_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _get(data: ProcessedEventData | Mapping[str, Any], name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)
