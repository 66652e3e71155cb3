"""Abstract base classes for product analysis providers.

The vision model sits behind two small interfaces: ``Analyzer`` turns
frames into a StructuredResult, ``QuestionAnswerer`` answers a follow-up
question about an analyzed product. This module also owns the boundary
parsing that turns a raw model payload into a StructuredResult, including
mapping the model's "not applicable" sentinel strings to ``None``.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

from pydantic import ValidationError

from labelreader.domain.models import CapturedFrame, Language, StructuredResult

logger = logging.getLogger(__name__)


ANALYSIS_PROMPT = """You are LabelReader, an assistant for visually impaired users.
You are given one or more photos of the same product label or object. If there are several photos, they show different sides of the product: combine what every side shows into one answer.

Respond ONLY with a JSON object (no markdown, no explanation) with these keys:
- "item_name": short, clear name of the product.
- "expiry": expiration date if visible, otherwise "No date found".
- "usage": one sentence on how to use, cook or consume it.
- "warnings": allergen warnings (nuts, dairy) or safety warnings (flammable, dosage). "None" if there are none.
- "ingredients": main ingredients if clearly visible, otherwise "None".
- "confidence_score": number from 0.0 to 1.0, how readable the text is.
- "is_medicine": true if it looks like a medication or pill bottle.
- "visual_details": if not medicine, colour, shape and packaging (e.g. "Red cylindrical metal can"); if medicine, "N/A".
- "seal_status": if not medicine, "Sealed" or "Opened" judging by the cap or lid, "Unknown" if unsure; if medicine, "N/A".
- "quantity_estimate": if medicine, how much is left (e.g. "Full bottle", "About 10 pills", "Cannot see inside"); otherwise "N/A".

Write every VALUE in {language}, translating the fixed words above as well. Never translate the keys.
If confidence_score is below 0.5, set "item_name" to "Image unclear" (in {language}) and suggest retaking the photo in "usage".
"""

QUESTION_PROMPT = """You are a helpful assistant for visually impaired users.
You already analyzed the product in the attached photo(s) and found: {result}
The user is asking a follow-up question. Answer briefly, clearly and directly in {language}.
"""

REQUIRED_FIELDS = ("item_name", "expiry", "usage", "warnings", "ingredients")

OPTIONAL_TEXT_FIELDS = ("visual_details", "seal_status", "quantity_estimate")

# Strings the model uses to mean "not applicable", compared case-insensitively.
SENTINELS = frozenset({
    "",
    "none",
    "n/a",
    "na",
    "unknown",
    "null",
    "कोई नहीं",
    "लागू नहीं",
    "अज्ञात",
})


class Analyzer(ABC):
    """Produces a structured description of a product from frames."""

    @abstractmethod
    async def analyze(self, frames: Sequence[CapturedFrame], language: Language) -> StructuredResult:
        """Analyze one or more frames of the same product.

        Raises:
            AnalysisError: If the service fails or returns no usable content.
        """
        ...


class QuestionAnswerer(ABC):
    """Answers a follow-up question about an analyzed product."""

    @abstractmethod
    async def ask(
        self,
        frames: Sequence[CapturedFrame],
        result: StructuredResult,
        question: str,
        language: Language,
    ) -> str:
        """Answer ``question`` about the product in ``frames``.

        Raises:
            QAError: If the service fails or returns no usable content.
        """
        ...


def absent_if_sentinel(value: object) -> str | None:
    """Return ``value`` as stripped text, or None if it means "not applicable"."""
    if value is None:
        return None
    text = str(value).strip()
    if text.rstrip(".।").strip().casefold() in SENTINELS:
        return None
    return text


def extract_json_object(raw: str) -> dict | None:
    """Pull a JSON object out of a model reply.

    Handles markdown code fences and prose around the object. Returns
    None when no object can be parsed.
    """
    json_str = raw.strip()

    match = re.search(r"```(?:json)?\s*(.*?)```", json_str, re.DOTALL)
    if match:
        json_str = match.group(1).strip()

    brace_match = re.search(r"\{.*\}", json_str, re.DOTALL)
    if brace_match:
        json_str = brace_match.group(0)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_structured_result(raw: str, provider: str = "") -> StructuredResult:
    """Parse a raw model reply into a StructuredResult.

    Raises:
        AnalysisError: If the reply is empty, not a JSON object, or is
            missing a required field.
    """
    if not raw or not raw.strip():
        raise AnalysisError("Empty response from analysis service", provider=provider)

    data = extract_json_object(raw)
    if data is None:
        raise AnalysisError(
            "Failed to parse analysis response as JSON",
            provider=provider,
            raw_response=raw,
        )
    return structured_result_from_payload(data, provider=provider, raw_response=raw)


def structured_result_from_payload(
    data: dict,
    provider: str = "",
    raw_response: str = "",
) -> StructuredResult:
    """Build a StructuredResult from an already-decoded payload.

    Raises:
        AnalysisError: If a required field is missing or a value is invalid.
    """
    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise AnalysisError(
            f"Analysis response is missing fields: {', '.join(missing)}",
            provider=provider,
            raw_response=raw_response,
        )

    item_name = absent_if_sentinel(data["item_name"])
    if item_name is None:
        raise AnalysisError(
            "Analysis response has no item name",
            provider=provider,
            raw_response=raw_response,
        )

    try:
        return StructuredResult(
            item_name=item_name,
            expiry=str(data["expiry"]).strip(),
            usage=str(data["usage"]).strip(),
            warnings=absent_if_sentinel(data["warnings"]),
            ingredients=absent_if_sentinel(data["ingredients"]),
            confidence_score=_coerce_confidence(data.get("confidence_score")),
            is_medicine=_coerce_bool(data.get("is_medicine", False)),
            **{name: absent_if_sentinel(data.get(name)) for name in OPTIONAL_TEXT_FIELDS},
        )
    except ValidationError as e:
        raise AnalysisError(
            f"Failed to build StructuredResult from payload: {e}",
            provider=provider,
            raw_response=raw_response,
        ) from e


def _coerce_confidence(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric confidence_score %r", value)
        return None
    if confidence != confidence:  # NaN
        return None
    return max(0.0, min(1.0, confidence))


def _coerce_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().casefold() in ("true", "yes", "1")
    return bool(value)


class AnalysisError(Exception):
    """Raised when product analysis fails."""

    def __init__(self, message: str, provider: str = "", raw_response: str = "") -> None:
        super().__init__(message)
        self.provider = provider
        self.raw_response = raw_response


class QAError(Exception):
    """Raised when a follow-up question cannot be answered."""

    def __init__(self, message: str, provider: str = "", raw_response: str = "") -> None:
        super().__init__(message)
        self.provider = provider
        self.raw_response = raw_response
