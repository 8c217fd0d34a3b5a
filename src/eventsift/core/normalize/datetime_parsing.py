"""
Natural-language date and time parsing for event text.

Handles flyer-style strings such as "SUNDAY 20TH JULY 2025 - 3PM" or
"July 20 2025 from 2PM to 5PM", returning an ISO date plus 24-hour
start/end times. Date and time extraction run independently over the same
input and are merged at the end. Nothing in this module raises for bad
input; unparseable parts come back as None.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

import dateparser

from ..logging import get_logger

logger = get_logger("normalize.datetime")


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class TimeInfo:
    """Times found in a piece of text."""

    start_time: str | None = None  # HH:MM, 24-hour
    end_time: str | None = None
    is_all_day: bool = False


@dataclass(frozen=True)
class ParsedDateTime:
    """Result of parsing a natural-language date/time string."""

    date: str | None  # YYYY-MM-DD
    start_time: str | None  # HH:MM, 24-hour
    end_time: str | None
    is_all_day: bool
    raw: str  # Original input for debugging

    @property
    def has_date(self) -> bool:
        return self.date is not None

    @property
    def has_time(self) -> bool:
        return self.start_time is not None or self.end_time is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Patterns
# =============================================================================


MONTHS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH = (
    r"(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b\.?"
)

_LEADING_WEEKDAY = re.compile(
    r"^(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday|"
    r"mon|tues|tue|wed|thurs|thur|thu|fri|sat|sun)\b\.?,?\s*"
)
_LEADING_PREFIX = re.compile(r"^(?:on\s+|date:\s*|when:\s*)")
_ORDINAL_SUFFIX = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b")

# Tried in order; every occurrence of a pattern is tried before moving on
DATE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("day_month_year", re.compile(r"\b(\d{1,2})\s+(?:of\s+)?" + _MONTH + r",?\s+(\d{4})\b")),
    ("month_day_year", re.compile(r"\b" + _MONTH + r"\s+(\d{1,2}),?\s+(\d{4})\b")),
    ("iso", re.compile(r"\b(\d{4})([-/.])(\d{1,2})\2(\d{1,2})\b")),
    ("numeric", re.compile(r"\b(\d{1,2})([/.-])(\d{1,2})\2(\d{4})\b")),
)

# Year-less dates, blanked out before scanning for times
_DAY_MONTH = re.compile(r"\b\d{1,2}\s+(?:of\s+)?" + _MONTH)
_MONTH_DAY = re.compile(r"\b" + _MONTH + r"\s+\d{1,2}\b(?!\s*(?:am|pm|o['’]?clock)\b|[:.]\d)")

_ALL_DAY = re.compile(r"\b(?:all[\s-]day|whole day|entire day)\b")
_MERIDIEM_RANGE = re.compile(
    r"\b(\d{1,2})(?:[:.](\d{2}))?\s*(?:-|–|to)\s*(\d{1,2})(?:[:.](\d{2}))?\s*(am|pm)\b"
)
_MERIDIEM_TIME = re.compile(r"\b(\d{1,2})(?:[:.](\d{2}))?\s*(am|pm)\b")
_CLOCK_TIME = re.compile(r"\b(\d{1,2}):(\d{2})\b(?!\s*(?:am|pm)\b)")
_OCLOCK_TIME = re.compile(r"\b(\d{1,2})\s*o['’]?clock\b")

_FOUR_DIGIT_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")

FALLBACK_LANGUAGES = ["en"]
FALLBACK_SETTINGS = {
    "DATE_ORDER": "MDY",
    "PREFER_DAY_OF_MONTH": "first",
    "REQUIRE_PARTS": ["day", "month", "year"],
    "STRICT_PARSING": True,
    "RETURN_AS_TIMEZONE_AWARE": False,
}


# =============================================================================
# Public API
# =============================================================================


def parse_natural_date_time(text: Any, *, fallback: bool = True) -> ParsedDateTime:
    """Parse natural-language date/time text into structured form.

    Args:
        text: Free-form text, e.g. 'SUNDAY 20TH JULY 2025 - 3PM'
        fallback: Allow the dateparser fallback for unusual date formats

    Returns:
        ParsedDateTime; fields that could not be found are None

    Example:
        parse_natural_date_time('SUNDAY 20TH JULY 2025 - 3PM')
        # ParsedDateTime(date='2025-07-20', start_time='15:00',
        #                end_time=None, is_all_day=False, raw=...)
    """
    if not isinstance(text, str) or not text.strip():
        raw = text if isinstance(text, str) else ""
        return ParsedDateTime(date=None, start_time=None, end_time=None, is_all_day=False, raw=raw)

    cleaned = text.strip()
    parsed_date = extract_date_from_text(cleaned, fallback=fallback)
    times = extract_time_from_text(cleaned)

    return ParsedDateTime(
        date=parsed_date,
        start_time=times.start_time,
        end_time=times.end_time,
        is_all_day=times.is_all_day,
        raw=text,
    )


def extract_date_from_text(text: Any, *, fallback: bool = True) -> str | None:
    """Extract the first calendar-valid date from text as YYYY-MM-DD.

    Numeric dates such as 05/06/2025 are read month-first unless the first
    number is above 12, in which case they are read day-first.

    Args:
        text: Text containing a date
        fallback: Hand unmatched text containing a year to dateparser

    Returns:
        ISO date string or None
    """
    if not isinstance(text, str) or not text.strip():
        return None

    cleaned = _clean_date_text(text)

    for name, pattern in DATE_PATTERNS:
        for match in pattern.finditer(cleaned):
            parts = _date_parts(name, match)
            if parts is None:
                continue
            formatted = _format_date(*parts)
            if formatted:
                return formatted

    if fallback:
        return _fallback_parse(cleaned)

    return None


def extract_time_from_text(text: Any) -> TimeInfo:
    """Extract start/end times or an all-day marker from text.

    Date spans are blanked out first so a day number next to a time is
    not read as the start of a range. All times found are converted to
    24-hour HH:MM and sorted; the earliest becomes the start and the next
    distinct one the end. An all-day phrase overrides any clock times.
    """
    if not isinstance(text, str) or not text:
        return TimeInfo()

    lowered = text.lower()

    if _ALL_DAY.search(lowered):
        return TimeInfo(is_all_day=True)

    cleaned = _mask_dates(lowered)

    times: list[str] = []
    consumed: list[tuple[int, int]] = []

    for match in _MERIDIEM_RANGE.finditer(cleaned):
        start_hour, start_minute, end_hour, end_minute, period = match.groups()
        if int(start_hour) > 12:
            continue
        end = _to_24_hour(int(end_hour), int(end_minute or 0), period)
        start = _to_24_hour(int(start_hour), int(start_minute or 0), period)
        if end is None:
            continue
        if period == "pm" and (start is None or start > end):
            start = _to_24_hour(int(start_hour), int(start_minute or 0), "am")
        if start is None:
            continue
        times.extend([start, end])
        consumed.append(match.span())

    for match in _MERIDIEM_TIME.finditer(cleaned):
        if _overlaps(match.span(), consumed):
            continue
        hour, minute, period = match.groups()
        value = _to_24_hour(int(hour), int(minute or 0), period)
        if value:
            times.append(value)
            consumed.append(match.span())

    for match in _CLOCK_TIME.finditer(cleaned):
        if _overlaps(match.span(), consumed):
            continue
        value = _to_24_hour(int(match.group(1)), int(match.group(2)), None)
        if value:
            times.append(value)

    for match in _OCLOCK_TIME.finditer(cleaned):
        value = _to_24_hour(int(match.group(1)), 0, None)
        if value:
            times.append(value)

    if not times:
        return TimeInfo()

    ordered = sorted(times)
    start_time = ordered[0]
    end_time = next((t for t in ordered if t > start_time), None)

    return TimeInfo(start_time=start_time, end_time=end_time)


def is_valid_date(value: Any) -> bool:
    """Check whether a string holds a real calendar date after 1900."""
    return extract_date_from_text(value, fallback=False) is not None


def standardize_date_format(value: Any) -> str | None:
    """Convert a date in any supported format to YYYY-MM-DD."""
    return extract_date_from_text(value)


def is_likely_date_time(value: Any) -> bool:
    """Cheap check for text that looks like it carries a date or time."""
    if not isinstance(value, str) or not value or value.strip() == "Not found":
        return False

    text = value.lower()
    return bool(
        re.search(r"\d{1,2}.*\d{4}", text)
        or re.search(r"\b" + _MONTH, text)
        or _MERIDIEM_TIME.search(text)
    )


# =============================================================================
# Helpers
# =============================================================================


def _clean_date_text(text: str) -> str:
    """Lower-case and strip leading weekday names and prefixes."""
    cleaned = " ".join(text.lower().split())

    previous = None
    while cleaned != previous:
        previous = cleaned
        cleaned = _LEADING_PREFIX.sub("", cleaned)
        cleaned = _LEADING_WEEKDAY.sub("", cleaned)

    return _ORDINAL_SUFFIX.sub(r"\1", cleaned)


def _mask_dates(text: str) -> str:
    """Blank out date spans so their day numbers are not read as times."""
    masked = _ORDINAL_SUFFIX.sub(r"\1", text)
    for _, pattern in DATE_PATTERNS:
        masked = pattern.sub(" ", masked)
    masked = _DAY_MONTH.sub(" ", masked)
    return _MONTH_DAY.sub(" ", masked)


def _date_parts(name: str, match: re.Match[str]) -> tuple[int, int, int] | None:
    """Turn a pattern match into (year, month, day)."""
    groups = match.groups()

    if name == "day_month_year":
        return int(groups[2]), MONTHS[groups[1][:3]], int(groups[0])

    if name == "month_day_year":
        return int(groups[2]), MONTHS[groups[0][:3]], int(groups[1])

    if name == "iso":
        return int(groups[0]), int(groups[2]), int(groups[3])

    if name == "numeric":
        first, second, year = int(groups[0]), int(groups[2]), int(groups[3])
        if first > 12:
            return year, second, first
        return year, first, second

    return None


def _format_date(year: int, month: int, day: int) -> str | None:
    if year <= 1900:
        return None
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _fallback_parse(text: str) -> str | None:
    """Last resort for formats the patterns above do not cover."""
    if not _FOUR_DIGIT_YEAR.search(text):
        return None

    try:
        parsed = dateparser.parse(text, languages=FALLBACK_LANGUAGES, settings=FALLBACK_SETTINGS)
    except Exception as e:
        logger.debug(f"dateparser failed on {text[:60]!r}: {e}")
        return None

    if parsed is None or parsed.year <= 1900:
        return None

    return parsed.date().isoformat()


def _to_24_hour(hour: int, minute: int, period: str | None) -> str | None:
    """Convert an hour/minute (optionally am/pm) to HH:MM."""
    if hour > 23 or minute > 59:
        return None

    if period == "pm" and hour != 12:
        hour += 12
    elif period == "am" and hour == 12:
        hour = 0

    if hour > 23:
        return None

    return f"{hour:02d}:{minute:02d}"


def _overlaps(span: tuple[int, int], spans: list[tuple[int, int]]) -> bool:
    start, end = span
    return any(start < other_end and other_start < end for other_start, other_end in spans)
