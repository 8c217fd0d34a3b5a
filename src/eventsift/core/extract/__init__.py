"""Event extraction from scraped and LLM-extracted data."""

from .base import (
    NOT_FOUND_VALUE,
    EventExtractionResult,
    ScrapingResult,
    is_blank,
)
from .categories import (
    CATEGORY_KEYWORDS,
    VALID_CATEGORIES,
    EventCategory,
    classify_event,
)
from .llm import LLMExtraction, parse_llm_response
from .transformer import EventTransformer

__all__ = [
    # Base types
    "NOT_FOUND_VALUE",
    "EventExtractionResult",
    "ScrapingResult",
    "is_blank",
    # Categories
    "CATEGORY_KEYWORDS",
    "VALID_CATEGORIES",
    "EventCategory",
    "classify_event",
    # LLM
    "LLMExtraction",
    "parse_llm_response",
    # Transformer
    "EventTransformer",
]
