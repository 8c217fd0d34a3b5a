"""
Pydantic configuration models for eventsift.

These models provide type-safe configuration with validation for:
- Application settings
- Extraction behaviour
- Processing options
- Venue matching
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


# =============================================================================
# Extraction Configuration
# =============================================================================


class ExtractionConfig(BaseModel):
    """Settings for turning raw field maps into event records."""

    fuzzy_key_matching: bool = Field(
        default=True,
        description="Map unknown keys to fields by normalized/fuzzy label match",
    )
    fuzzy_threshold: int = Field(
        default=88,
        ge=50,
        le=100,
        description="Minimum thefuzz ratio for a fuzzy key match",
    )
    date_fallback: bool = Field(
        default=True,
        description="Hand unusual date formats to dateparser",
    )
    nested_document_keys: list[str] = Field(
        default_factory=lambda: ["iframes", "frames", "embedded"],
        description="Keys holding nested sub-documents to extract from",
    )
    created_by: str = Field(
        default="scraper-system",
        description="Value for created_by on extracted records",
    )
    owner_id: str = Field(
        default="scraper-system",
        description="Value for owner_id on extracted records",
    )


# =============================================================================
# Processing Configuration
# =============================================================================


class ProcessingOptions(BaseModel):
    """Options for processing LLM-extracted event data."""

    venue_match_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum venue match score to link a venue",
    )
    strict_validation: bool = Field(
        default=False,
        description="Treat missing description/organizer as missing required fields",
    )
    normalize_text: bool = Field(
        default=True,
        description="Normalize title, description, location and organizer text",
    )


class VenueMatchingConfig(BaseModel):
    """Venue matcher defaults for direct lookups."""

    threshold: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Minimum score to accept a venue match",
    )
    candidate_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Max candidates returned by candidate lookups",
    )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    json_format: bool = Field(
        default=True,
        description="Use JSON format for file logs",
    )
    rich_console: bool = Field(
        default=True,
        description="Use Rich for console output",
    )


# =============================================================================
# Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """Root application configuration.

    This is the main configuration object loaded from app.yaml.
    """

    venues_file: Path | None = Field(
        default=None,
        description="Default venue directory (YAML or JSON)",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    venue_matching: VenueMatchingConfig = Field(default_factory=VenueMatchingConfig)
