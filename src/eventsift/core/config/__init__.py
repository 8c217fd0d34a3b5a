"""Configuration loading, validation and field alias tables."""

from .models import (
    AppConfig,
    ExtractionConfig,
    LoggingConfig,
    ProcessingOptions,
    VenueMatchingConfig,
)
from .aliases import (
    ALL_ALIAS_KEYS,
    FIELD_ALIASES,
    find_canonical_field,
    get_aliases_for_field,
    normalize_label,
)
from .loader import ConfigError, load_app_config, load_raw_fields, load_venues

__all__ = [
    # Config models
    "AppConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "ProcessingOptions",
    "VenueMatchingConfig",
    # Aliases
    "ALL_ALIAS_KEYS",
    "FIELD_ALIASES",
    "find_canonical_field",
    "get_aliases_for_field",
    "normalize_label",
    # Loaders
    "ConfigError",
    "load_app_config",
    "load_raw_fields",
    "load_venues",
]
