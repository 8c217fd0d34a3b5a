"""
Event transformer for scraped and LLM-extracted key/value data.

Turns a raw field map into EventRecord objects. Each canonical field is
looked up through its alias list first; keys that are not known aliases
are mapped heuristically by normalized label and then by fuzzy ratio.
A single payload may hold one event at the top level, more inside nested
sub-documents (iframes and similar), and more as arrays of objects.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError
from thefuzz import fuzz

from ..config.aliases import (
    ALL_ALIAS_KEYS,
    FIELD_ALIASES,
    find_canonical_field,
    normalize_label,
    normalized_alias_items,
)
from ..config.models import ExtractionConfig
from ..logging import get_contextual_logger, get_logger
from ..normalize.canonical import EventRecord, find_duplicate_groups, generate_event_id
from ..normalize.datetime_parsing import TimeInfo, extract_date_from_text, extract_time_from_text
from ..normalize.text import clean_extra_whitespace
from .base import EventExtractionResult, ScrapingResult, is_blank
from .categories import classify_event

logger = get_logger("extract.transformer")

NO_EVENTS_WARNING = "No events could be extracted from scraped data"

_HTTP_URL = TypeAdapter(HttpUrl)


class EventTransformer:
    """Extract canonical events from raw field maps.

    Features:
    - Ordered alias lookup per field
    - Normalized and fuzzy label mapping for unknown keys
    - Nested sub-document and array extraction
    - Duplicate flagging by content fingerprint
    """

    def __init__(self, config: ExtractionConfig | None = None):
        self.config = config or ExtractionConfig()

    # -------------------------------------------------------------------------
    # Multi-source extraction
    # -------------------------------------------------------------------------

    def transform(self, scrape: ScrapingResult) -> EventExtractionResult:
        """Turn a scraper's output into events.

        Args:
            scrape: Scraping envelope for one URL

        Returns:
            EventExtractionResult; a failed scrape yields an error and no events
        """
        if not scrape.success:
            result = EventExtractionResult()
            result.add_error(f"Scraping failed: {', '.join(scrape.errors)}")
            logger.warning(f"Scrape of {scrape.url} failed, nothing to transform")
            return result

        return self.extract_events(scrape.data, scrape.url)

    def extract_events(self, data: Mapping[str, Any], source_url: str | None = None) -> EventExtractionResult:
        """Extract every event a payload holds.

        Tries the top-level map, each nested sub-document and each object
        inside array-valued fields. Results are unioned as-is; events that
        look like duplicates are reported in ``warnings`` but kept.
        """
        result = EventExtractionResult()
        log = get_contextual_logger("extract.transformer", source_url=source_url)

        try:
            result.sources_attempted += 1
            main_event = self.extract_single_event(data, source_url)
            if main_event:
                result.events.append(main_event)
            else:
                log.debug("No event in top-level data")

            for name, document, url in self._iter_nested_documents(data):
                result.sources_attempted += 1
                event = self.extract_single_event(document, url or source_url)
                if event:
                    result.events.append(event)
                else:
                    log.debug(f"No event in nested document {name!r}")

            for key, item in self._iter_array_items(data):
                result.sources_attempted += 1
                event = self.extract_single_event(item, source_url)
                if event:
                    result.events.append(event)
                else:
                    log.debug(f"No event in array item under {key!r}")

        except Exception as e:
            log.error(f"Error transforming data: {e}")
            result.add_error(f"Error transforming data: {e}")

        if not result.events:
            log.warning(NO_EVENTS_WARNING)
            result.add_warning(NO_EVENTS_WARNING)
            return result

        for group in find_duplicate_groups(result.events):
            first = group[0]
            result.add_warning(
                f"Possible duplicate events: {first.title!r} on {first.date} "
                f"found {len(group)} times"
            )

        log.info(f"Extracted {len(result.events)} event(s) from {result.sources_attempted} source(s)")
        return result

    def extract_multiple_events(self, data: Mapping[str, Any], source_url: str | None = None) -> list[EventRecord]:
        """Extract an event from every object inside array-valued fields."""
        events: list[EventRecord] = []
        for _key, item in self._iter_array_items(data):
            event = self.extract_single_event(item, source_url)
            if event:
                events.append(event)
        return events

    # -------------------------------------------------------------------------
    # Single event
    # -------------------------------------------------------------------------

    def extract_single_event(self, data: Mapping[str, Any], source_url: str | None = None) -> EventRecord | None:
        """Build one EventRecord from a raw field map.

        Args:
            data: Raw key/value data
            source_url: Page the data came from

        Returns:
            EventRecord, or None when title or date cannot be found
        """
        if not isinstance(data, Mapping):
            return None

        mapped_keys = self._map_unknown_keys(data)

        title = self._first_value(data, "title", mapped_keys)
        if not title:
            logger.info("Dropping candidate without a title")
            return None
        title = clean_extra_whitespace(title)

        date, date_text = self._extract_date(data, mapped_keys)
        if not date:
            logger.info(f"Dropping candidate {title!r}: no date found")
            return None

        description = self._first_value(data, "description", mapped_keys)
        times = self._resolve_times(data, mapped_keys, date_text, title, description)

        content = data.get("content")
        categories = classify_event(
            title,
            description,
            content if isinstance(content, str) and content != description else "",
        )

        event = EventRecord(
            id=generate_event_id(title, date),
            title=title,
            date=date,
            description=description,
            start_time=times.start_time,
            end_time=times.end_time,
            is_all_day=times.is_all_day,
            location=self._first_value(data, "location", mapped_keys),
            organizer=self._first_value(data, "organizer", mapped_keys),
            website=self._extract_website(data, mapped_keys) or source_url,
            ticket_info=self._first_value(data, "ticket_info", mapped_keys),
            contact_info=self._first_value(data, "contact_info", mapped_keys),
            categories=categories,
            source_url=source_url,
            created_by=self.config.created_by,
            owner_id=self.config.owner_id,
            raw_data=dict(data),
        )

        logger.debug(f"Extracted event {event.id} ({', '.join(categories)})")
        return event

    # -------------------------------------------------------------------------
    # Field lookup
    # -------------------------------------------------------------------------

    def _candidate_values(
        self,
        data: Mapping[str, Any],
        field: str,
        mapped_keys: dict[str, list[str]],
    ) -> Iterator[str]:
        """Usable string values for a field, alias keys first."""
        for alias in FIELD_ALIASES[field]:
            value = data.get(alias)
            if isinstance(value, str) and not is_blank(value):
                yield value.strip()

        for key in mapped_keys.get(field, []):
            value = data.get(key)
            if isinstance(value, str) and not is_blank(value):
                yield value.strip()

    def _first_value(
        self,
        data: Mapping[str, Any],
        field: str,
        mapped_keys: dict[str, list[str]],
    ) -> str | None:
        return next(self._candidate_values(data, field, mapped_keys), None)

    def _map_unknown_keys(self, data: Mapping[str, Any]) -> dict[str, list[str]]:
        """Map keys that are not exact aliases to canonical fields."""
        mapped: dict[str, list[str]] = {}
        for key in data:
            if not isinstance(key, str) or key in ALL_ALIAS_KEYS:
                continue
            canonical = self._match_key(key)
            if canonical:
                logger.debug(f"Mapped key {key!r} -> {canonical}")
                mapped.setdefault(canonical, []).append(key)
        return mapped

    def _match_key(self, key: str) -> str | None:
        """Match a raw key to a canonical field name.

        Args:
            key: Raw key text

        Returns:
            Canonical field name or None
        """
        canonical = find_canonical_field(key)
        if canonical or not self.config.fuzzy_key_matching:
            return canonical

        normalized = normalize_label(key)
        if not normalized:
            return None

        best_match: str | None = None
        best_score = 0

        for alias, field in normalized_alias_items():
            score = fuzz.ratio(normalized, alias)
            if score > best_score and score >= self.config.fuzzy_threshold:
                best_score = score
                best_match = field

        return best_match

    def _extract_date(
        self,
        data: Mapping[str, Any],
        mapped_keys: dict[str, list[str]],
    ) -> tuple[str | None, str | None]:
        """Find the event date; returns (iso date, text it came from)."""
        fallback = self.config.date_fallback

        for value in self._candidate_values(data, "date", mapped_keys):
            parsed = extract_date_from_text(value, fallback=fallback)
            if parsed:
                return parsed, value

        all_text = " ".join(
            str(value)
            for value in data.values()
            if isinstance(value, (str, int, float)) and not isinstance(value, bool)
        )
        parsed = extract_date_from_text(all_text, fallback=fallback)
        if parsed:
            return parsed, None

        return None, None

    def _resolve_times(
        self,
        data: Mapping[str, Any],
        mapped_keys: dict[str, list[str]],
        date_text: str | None,
        title: str,
        description: str | None,
    ) -> TimeInfo:
        start_info = self._first_time_info(data, "start_time", mapped_keys)
        end_info = self._first_time_info(data, "end_time", mapped_keys)

        date_info = extract_time_from_text(date_text)
        if date_info.is_all_day or (start_info and start_info.is_all_day):
            return TimeInfo(is_all_day=True)

        fallback_infos = [date_info]
        # Free text only counts when no time was given anywhere else
        if start_info is None and end_info is None and not date_info.start_time:
            body = " ".join(part for part in (title, description) if part)
            body_info = extract_time_from_text(body)
            if body_info.is_all_day:
                return TimeInfo(is_all_day=True)
            fallback_infos.append(body_info)

        if start_info is None:
            start_info = next((info for info in fallback_infos if info.start_time), None)

        start_time = start_info.start_time if start_info else None
        end_time = start_info.end_time if start_info else None
        if end_info is not None and end_info.start_time:
            end_time = end_info.start_time

        if start_time and end_time:
            start_time, end_time = sorted((start_time, end_time))
            if start_time == end_time:
                end_time = None

        return TimeInfo(start_time=start_time, end_time=end_time)

    def _first_time_info(
        self,
        data: Mapping[str, Any],
        field: str,
        mapped_keys: dict[str, list[str]],
    ) -> TimeInfo | None:
        for value in self._candidate_values(data, field, mapped_keys):
            info = extract_time_from_text(value)
            if info.is_all_day or info.start_time:
                return info
        return None

    def _extract_website(
        self,
        data: Mapping[str, Any],
        mapped_keys: dict[str, list[str]],
    ) -> str | None:
        for value in self._candidate_values(data, "website", mapped_keys):
            try:
                _HTTP_URL.validate_python(value)
            except ValidationError:
                continue
            return value
        return None

    # -------------------------------------------------------------------------
    # Payload walking
    # -------------------------------------------------------------------------

    def _iter_nested_documents(
        self,
        data: Mapping[str, Any],
    ) -> Iterator[tuple[str, Mapping[str, Any], str | None]]:
        """Yield (name, field map, url) for each nested sub-document."""
        for nested_key in self.config.nested_document_keys:
            container = data.get(nested_key)

            if isinstance(container, Mapping):
                entries = [(str(name), entry) for name, entry in container.items()]
            elif isinstance(container, list):
                entries = [(f"{nested_key}[{i}]", entry) for i, entry in enumerate(container)]
            else:
                continue

            for name, entry in entries:
                if not isinstance(entry, Mapping):
                    continue
                document = entry.get("data")
                if not isinstance(document, Mapping):
                    document = entry
                url = entry.get("url")
                yield name, document, url if isinstance(url, str) and url else None

    def _iter_array_items(self, data: Mapping[str, Any]) -> Iterator[tuple[str, Mapping[str, Any]]]:
        """Yield (key, item) for every object in top-level array fields."""
        nested_keys = set(self.config.nested_document_keys)
        for key, value in data.items():
            if key in nested_keys or not isinstance(value, list):
                continue
            for item in value:
                if isinstance(item, Mapping):
                    yield key, item
