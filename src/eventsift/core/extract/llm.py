"""
Parsing of LLM flyer-extraction responses.

Vision/LLM extractors answer with a JSON document, usually shaped like
``{"success": true, "eventData": {...}, "confidence": {...}}`` but
sometimes as the bare event object, and often wrapped in a Markdown code
fence. This module turns any of those into an LLMExtraction.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..logging import get_logger

logger = get_logger("extract.llm")

EVENT_DATA_KEYS = ("eventData", "event_data")
ENVELOPE_KEYS = frozenset({"success", "confidence", "error", "rawText", "raw_text", *EVENT_DATA_KEYS})

_CODE_FENCE = re.compile(r"^\s*```(?:json|JSON)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """'ticketInfo' -> 'ticket_info'."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class LLMExtraction(BaseModel):
    """Parsed LLM extraction response."""

    success: bool = Field(default=False, description="Whether the LLM found an event")
    event_data: dict[str, Any] | None = Field(
        default=None,
        description="Raw field map as returned by the LLM",
    )
    confidence: dict[str, int] = Field(
        default_factory=dict,
        description="Per-field confidence 0-100, snake_case keys",
    )
    error: str | None = None
    raw_text: str | None = None

    @field_validator("confidence", mode="before")
    @classmethod
    def _clean_confidence(cls, value: Any) -> dict[str, int]:
        if not isinstance(value, Mapping):
            return {}

        cleaned: dict[str, int] = {}
        for key, score in value.items():
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                continue
            cleaned[to_snake_case(str(key))] = max(0, min(100, int(round(score))))
        return cleaned


def parse_llm_response(payload: str | Mapping[str, Any]) -> LLMExtraction:
    """Parse an LLM response into an LLMExtraction.

    Never raises for malformed input; failures come back with
    ``success=False`` and an ``error`` message.

    Args:
        payload: JSON text (optionally fenced) or an already-decoded mapping

    Returns:
        LLMExtraction
    """
    raw_text: str | None = None

    if isinstance(payload, str):
        raw_text = payload
        try:
            decoded = json.loads(_strip_code_fence(payload))
        except json.JSONDecodeError as e:
            logger.warning(f"LLM response is not valid JSON: {e}")
            return LLMExtraction(success=False, error=f"Invalid JSON in LLM response: {e}", raw_text=raw_text)
    else:
        decoded = payload

    if not isinstance(decoded, Mapping):
        return LLMExtraction(
            success=False,
            error="LLM response is not a JSON object",
            raw_text=raw_text,
        )

    event_data = _find_event_data(decoded)
    success = decoded.get("success")
    if not isinstance(success, bool):
        success = event_data is not None

    error = decoded.get("error")
    if success and event_data is None:
        success = False
        error = error or "LLM response contains no event data"

    return LLMExtraction(
        success=success,
        event_data=event_data,
        confidence=decoded.get("confidence") or {},
        error=error if isinstance(error, str) else None,
        raw_text=raw_text or _as_optional_str(decoded.get("rawText") or decoded.get("raw_text")),
    )


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    if match:
        return match.group(1)
    return text.strip()


def _find_event_data(decoded: Mapping[str, Any]) -> dict[str, Any] | None:
    for key in EVENT_DATA_KEYS:
        if key in decoded:
            value = decoded[key]
            return dict(value) if isinstance(value, Mapping) else None

    # Bare event object
    fields = {k: v for k, v in decoded.items() if k not in ENVELOPE_KEYS}
    return fields or None


def _as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
