"""Processing of extracted event data and quality assessment."""

from .processing import (
    ProcessedEventData,
    ValidationResult,
    process_extracted_event_data,
    parse_event_date_time,
    match_event_venue,
    validate_categories,
    process_tags,
    validate_extracted_data,
    create_processing_summary,
)
from .quality import (
    CONFIDENCE_THRESHOLDS,
    ConfidenceLevel,
    ExtractionQuality,
    ExtractionQualityReport,
    get_confidence_level,
    get_field_confidence,
    should_auto_fill_field,
    calculate_weighted_confidence,
    get_fields_needing_review,
    is_valid_field_value,
    count_extracted_fields,
    has_minimum_viable_data,
    assess_extraction,
    create_validation_summary,
)

__all__ = [
    # Processing
    "ProcessedEventData",
    "ValidationResult",
    "process_extracted_event_data",
    "parse_event_date_time",
    "match_event_venue",
    "validate_categories",
    "process_tags",
    "validate_extracted_data",
    "create_processing_summary",
    # Quality
    "CONFIDENCE_THRESHOLDS",
    "ConfidenceLevel",
    "ExtractionQuality",
    "ExtractionQualityReport",
    "get_confidence_level",
    "get_field_confidence",
    "should_auto_fill_field",
    "calculate_weighted_confidence",
    "get_fields_needing_review",
    "is_valid_field_value",
    "count_extracted_fields",
    "has_minimum_viable_data",
    "assess_extraction",
    "create_validation_summary",
]
