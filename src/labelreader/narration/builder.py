"""Deterministic assembly of spoken narration scripts.

Turns a structured analysis result into the ordered segments read aloud
to the user. Everything here is a pure function of its inputs: no I/O,
no clock, no randomness.

Segment order for a result:

1. Medicine preamble: caution, then the verify-with-a-professional phrase.
2. Low-confidence advisory when the confidence score is below 0.5.
3. Item name.
4. Medicine: warnings, quantity estimate, expiry, usage.
   Other items: visual details, seal status, expiry, usage, warnings.

Ingredients are displayed but never spoken as part of a result.
"""

from __future__ import annotations

from labelreader.domain.models import (
    Language,
    NarrationKind,
    NarrationScript,
    StructuredResult,
)
from labelreader.narration.messages import MessageKey, message


def build_result_script(
    result: StructuredResult,
    language: Language,
    is_medicine: bool | None = None,
) -> NarrationScript:
    """Build the narration for a completed analysis.

    Args:
        result: The structured analysis result.
        language: Language of the labels and fixed phrases.
        is_medicine: Overrides ``result.is_medicine`` when given.
    """
    if is_medicine is None:
        is_medicine = result.is_medicine

    segments: list[str] = []

    if is_medicine:
        segments.append(message(MessageKey.CAUTION_MEDICINE, language))
        segments.append(message(MessageKey.VERIFY_PROFESSIONAL, language))

    if result.is_low_confidence:
        segments.append(message(MessageKey.NOTE_UNCLEAR, language))

    segments.append(result.item_name)

    warnings = normalize_warnings(result.warnings, language, is_medicine)
    if is_medicine:
        segments.append(_labelled(MessageKey.WARNINGS_LABEL, warnings, language))
        if _present(result.quantity_estimate):
            segments.append(
                _labelled(MessageKey.QUANTITY_ESTIMATE_LABEL, result.quantity_estimate, language)
            )
        segments.append(_labelled(MessageKey.EXPIRY_LABEL, result.expiry, language))
        segments.append(_labelled(MessageKey.USAGE_LABEL, result.usage, language))
    else:
        if _present(result.visual_details):
            segments.append(result.visual_details.strip())
        if _present(result.seal_status):
            segments.append(_labelled(MessageKey.SEAL_STATUS_LABEL, result.seal_status, language))
        segments.append(_labelled(MessageKey.EXPIRY_LABEL, result.expiry, language))
        segments.append(_labelled(MessageKey.USAGE_LABEL, result.usage, language))
        segments.append(_labelled(MessageKey.WARNINGS_LABEL, warnings, language))

    return NarrationScript(
        segments=tuple(segments),
        language=language,
        kind=NarrationKind.RESULT,
    )


def build_answer_script(answer: str, language: Language) -> NarrationScript:
    """Build the narration for a follow-up answer."""
    return NarrationScript(
        segments=(_labelled(MessageKey.ANSWER_TITLE, answer, language),),
        language=language,
        kind=NarrationKind.ANSWER,
    )


def build_message_script(
    key: MessageKey,
    language: Language,
    kind: NarrationKind = NarrationKind.INFO,
    suffix: str | None = None,
) -> NarrationScript:
    """Build a single-message narration, optionally followed by ``suffix``."""
    text = message(key, language)
    if suffix:
        text = f"{text} {suffix}"
    return NarrationScript(segments=(text,), language=language, kind=kind)


def normalize_warnings(warnings: str | None, language: Language, is_medicine: bool) -> str:
    """Return the warnings text to speak.

    For medicine the verify-with-a-professional phrase is guaranteed to
    be present (case-insensitive check) and is placed first when added.
    Absent warnings read as the language's word for "none" on ordinary
    items.
    """
    text = (warnings or "").strip()
    if not is_medicine:
        return text or message(MessageKey.NONE, language)

    verify = message(MessageKey.VERIFY_PROFESSIONAL, language)
    if verify.casefold() in text.casefold():
        return text
    return f"{verify} {text}".strip()


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def _labelled(key: MessageKey, value: str | None, language: Language) -> str:
    return f"{message(key, language)}: {(value or '').strip()}"
