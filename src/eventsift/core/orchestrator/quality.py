"""
Confidence scoring and extraction-quality assessment.

Works on the per-field confidence (0-100) an LLM extractor reports
alongside its event data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..extract.base import is_blank
from ..extract.llm import LLMExtraction

CONFIDENCE_THRESHOLDS = {
    "high": 80,
    "medium": 60,
    "low": 40,
    "minimum_autofill": 50,
}

DEFAULT_FIELD_WEIGHTS = {
    "title": 2.0,
    "date": 1.5,
    "location": 1.5,
    "description": 1.0,
    "organizer": 0.8,
    "ticket_info": 0.8,
    "contact_info": 0.7,
    "website": 0.7,
}

REQUIRED_FIELDS = ("title", "date", "location")

COUNTED_FIELDS = (
    "title",
    "description",
    "date",
    "location",
    "organizer",
    "ticket_info",
    "contact_info",
    "website",
)

# LLM payloads use camelCase for some fields
_FIELD_KEY_VARIANTS = {
    "ticket_info": ("ticket_info", "ticketInfo"),
    "contact_info": ("contact_info", "contactInfo"),
}


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class ExtractionQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class ExtractionQualityReport:
    """Assessment of a single LLM extraction."""

    is_valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    extracted_field_count: int
    confidence_score: int
    quality: ExtractionQuality


# =============================================================================
# Confidence
# =============================================================================


def get_confidence_level(score: float) -> ConfidenceLevel:
    """Bucket a 0-100 score into a confidence level."""
    if score >= CONFIDENCE_THRESHOLDS["high"]:
        return ConfidenceLevel.HIGH
    if score >= CONFIDENCE_THRESHOLDS["medium"]:
        return ConfidenceLevel.MEDIUM
    if score >= CONFIDENCE_THRESHOLDS["low"]:
        return ConfidenceLevel.LOW
    return ConfidenceLevel.NONE


def get_field_confidence(confidence: Mapping[str, int] | None, field_name: str) -> int:
    """Confidence for a field; 'time' shares the date's confidence."""
    if not confidence:
        return 0
    if field_name == "time":
        field_name = "date"
    return confidence.get(field_name) or 0


def should_auto_fill_field(score: float, threshold: int = CONFIDENCE_THRESHOLDS["minimum_autofill"]) -> bool:
    return score >= threshold


def calculate_weighted_confidence(
    confidence: Mapping[str, int],
    weights: Mapping[str, float] | None = None,
) -> int:
    """Weighted average of field confidences, rounded to an int.

    Fields missing from ``confidence`` count as 0.
    """
    field_weights = weights or DEFAULT_FIELD_WEIGHTS
    total_weight = sum(field_weights.values())
    if total_weight <= 0:
        return 0

    weighted_sum = sum(
        (confidence.get(name) or 0) * weight for name, weight in field_weights.items()
    )
    return int(weighted_sum / total_weight + 0.5)


def get_fields_needing_review(
    confidence: Mapping[str, int],
    threshold: int = CONFIDENCE_THRESHOLDS["medium"],
) -> list[str]:
    """Fields with some, but low, confidence."""
    return [
        name
        for name, score in confidence.items()
        if name != "overall" and 0 < score < threshold
    ]


# =============================================================================
# Field checks
# =============================================================================


def is_valid_field_value(value: Any) -> bool:
    """True unless the value is empty or the 'Not found' placeholder."""
    return not is_blank(value)


def get_field_value(event_data: Mapping[str, Any], field_name: str) -> Any:
    for key in _FIELD_KEY_VARIANTS.get(field_name, (field_name,)):
        if key in event_data:
            return event_data[key]
    return None


def count_extracted_fields(event_data: Mapping[str, Any]) -> int:
    """Number of core fields holding usable data."""
    return sum(
        1 for name in COUNTED_FIELDS if is_valid_field_value(get_field_value(event_data, name))
    )


def has_minimum_viable_data(extraction: LLMExtraction) -> bool:
    """At least two required fields present with auto-fill confidence."""
    if not extraction.success or not extraction.event_data or not extraction.confidence:
        return False

    good_fields = [
        name
        for name in REQUIRED_FIELDS
        if is_valid_field_value(get_field_value(extraction.event_data, name))
        and get_field_confidence(extraction.confidence, name) >= CONFIDENCE_THRESHOLDS["minimum_autofill"]
    ]
    return len(good_fields) >= 2


# =============================================================================
# Assessment
# =============================================================================


def assess_extraction(extraction: LLMExtraction) -> ExtractionQualityReport:
    """Validate an LLM extraction and grade its quality.

    Args:
        extraction: Parsed LLM response

    Returns:
        ExtractionQualityReport
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not extraction.success:
        errors.append(extraction.error or "Extraction failed")
        return _report(errors, warnings, 0, 0)

    if not extraction.event_data:
        errors.append("No event data found in extraction result")
        return _report(errors, warnings, 0, 0)

    event_data = extraction.event_data
    confidence = extraction.confidence

    if not confidence:
        warnings.append("No confidence scores available")
        confidence_score = 0
    elif "overall" in confidence:
        confidence_score = confidence["overall"]
    else:
        confidence_score = calculate_weighted_confidence(confidence)

    for name in REQUIRED_FIELDS:
        score = get_field_confidence(confidence, name)
        if not is_valid_field_value(get_field_value(event_data, name)):
            errors.append(f"Required field '{name}' has no valid data")
        elif score < CONFIDENCE_THRESHOLDS["minimum_autofill"]:
            warnings.append(f"Required field '{name}' has low confidence ({score}%)")

    if confidence and 0 < confidence_score < CONFIDENCE_THRESHOLDS["low"]:
        warnings.append(f"Overall confidence is very low ({confidence_score}%)")

    if not is_valid_field_value(event_data.get("description")):
        warnings.append("No event description found - consider adding manually")

    if not is_valid_field_value(event_data.get("organizer")):
        warnings.append("No organizer information found")

    return _report(errors, warnings, count_extracted_fields(event_data), confidence_score)


def create_validation_summary(report: ExtractionQualityReport) -> str:
    """One-line human-readable summary of an assessment."""
    if not report.is_valid:
        return f"Extraction failed: {', '.join(report.errors)}"

    if report.quality is ExtractionQuality.POOR:
        return "Poor extraction quality - manual review recommended"

    return (
        f"{report.quality.value.capitalize()} extraction quality - "
        f"{report.extracted_field_count} fields extracted with {report.confidence_score}% confidence"
    )


def _grade(is_valid: bool, confidence_score: int, field_count: int) -> ExtractionQuality:
    if not is_valid:
        return ExtractionQuality.POOR
    if confidence_score >= CONFIDENCE_THRESHOLDS["high"] and field_count >= 6:
        return ExtractionQuality.EXCELLENT
    if confidence_score >= CONFIDENCE_THRESHOLDS["medium"] and field_count >= 4:
        return ExtractionQuality.GOOD
    if confidence_score >= CONFIDENCE_THRESHOLDS["low"] and field_count >= 2:
        return ExtractionQuality.FAIR
    return ExtractionQuality.POOR


def _report(errors: list[str], warnings: list[str], field_count: int, confidence_score: int) -> ExtractionQualityReport:
    is_valid = not errors
    return ExtractionQualityReport(
        is_valid=is_valid,
        errors=tuple(errors),
        warnings=tuple(warnings),
        extracted_field_count=field_count,
        confidence_score=confidence_score,
        quality=_grade(is_valid, confidence_score, field_count),
    )
