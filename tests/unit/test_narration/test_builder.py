"""Tests for narration script assembly."""

from __future__ import annotations

from labelreader.analyzer.base import structured_result_from_payload
from labelreader.domain.models import Language, NarrationKind, StructuredResult
from labelreader.narration.builder import (
    build_answer_script,
    build_message_script,
    build_result_script,
    normalize_warnings,
)
from labelreader.narration.messages import MessageKey, message

CAUTION = "Caution: This looks like medication."
VERIFY = "Verify with a professional."
UNCLEAR = "Note: Image was unclear."


def _payload(**overrides) -> dict:
    data = {
        "item_name": "Cough Syrup",
        "expiry": "05/2026",
        "usage": "10ml twice daily",
        "warnings": "None",
        "ingredients": "None",
        "confidence_score": 0.9,
        "is_medicine": False,
        "visual_details": "N/A",
        "seal_status": "N/A",
        "quantity_estimate": "N/A",
    }
    data.update(overrides)
    return data


class TestMedicineOrdering:
    """Test the medicine branch of the narration order."""

    def test_unclear_medicine_with_no_warnings(self) -> None:
        """The verify phrase survives even when the model reported no warnings."""
        result = structured_result_from_payload(
            _payload(is_medicine=True, confidence_score=0.3, quantity_estimate="Half bottle")
        )
        script = build_result_script(result, Language.ENGLISH)

        assert script.segments == (
            CAUTION,
            VERIFY,
            UNCLEAR,
            "Cough Syrup",
            f"Warnings: {VERIFY}",
            "Quantity Estimate: Half bottle",
            "Expiry: 05/2026",
            "Usage: 10ml twice daily",
        )
        assert script.kind is NarrationKind.RESULT

    def test_medicine_fixture(self, medicine_result: StructuredResult) -> None:
        script = build_result_script(medicine_result, Language.ENGLISH)
        assert script.segments == (
            CAUTION,
            VERIFY,
            "Paracetamol 500mg",
            f"Warnings: {VERIFY} Do not exceed 8 tablets in 24 hours",
            "Quantity Estimate: About half the strip left",
            "Expiry: 03/2026",
            "Usage: 1 tablet every 6 hours",
        )

    def test_unknown_quantity_is_omitted(self) -> None:
        result = structured_result_from_payload(
            _payload(is_medicine=True, quantity_estimate="Unknown")
        )
        segments = build_result_script(result, Language.ENGLISH).segments
        assert not any(s.startswith("Quantity Estimate") for s in segments)

    def test_visual_fields_ignored_for_medicine(self) -> None:
        """Descriptive fields are not read out for medicine, whatever the model sent."""
        result = structured_result_from_payload(
            _payload(is_medicine=True, visual_details="White box", seal_status="Sealed")
        )
        segments = build_result_script(result, Language.ENGLISH).segments
        assert "White box" not in segments
        assert not any(s.startswith("Condition") for s in segments)

    def test_is_medicine_override(self, food_result: StructuredResult) -> None:
        script = build_result_script(food_result, Language.ENGLISH, is_medicine=True)
        assert script.segments[:2] == (CAUTION, VERIFY)


class TestItemOrdering:
    """Test the non-medicine branch of the narration order."""

    def test_descriptive_fields_first_warnings_last(self) -> None:
        result = structured_result_from_payload(
            _payload(
                item_name="Cola",
                visual_details="Red can",
                seal_status="Sealed",
                warnings="Contains nuts",
            )
        )
        script = build_result_script(result, Language.ENGLISH)
        assert script.segments == (
            "Cola",
            "Red can",
            "Condition: Sealed",
            "Expiry: 05/2026",
            "Usage: 10ml twice daily",
            "Warnings: Contains nuts",
        )

    def test_unknown_seal_status_is_omitted(self) -> None:
        result = structured_result_from_payload(_payload(seal_status="Unknown"))
        segments = build_result_script(result, Language.ENGLISH).segments
        assert not any(s.startswith("Condition") for s in segments)

    def test_missing_warnings_read_as_none(self) -> None:
        result = structured_result_from_payload(_payload())
        assert build_result_script(result, Language.ENGLISH).segments[-1] == "Warnings: None"

    def test_ingredients_never_spoken(self, food_result: StructuredResult) -> None:
        text = build_result_script(food_result, Language.ENGLISH).text
        assert "vinegar" not in text

    def test_low_confidence_advisory_before_item(self, food_result: StructuredResult) -> None:
        result = food_result.model_copy(update={"confidence_score": 0.49})
        segments = build_result_script(result, Language.ENGLISH).segments
        assert segments[:2] == (UNCLEAR, "Tomato Ketchup")

    def test_missing_confidence_is_not_unclear(self, food_result: StructuredResult) -> None:
        result = food_result.model_copy(update={"confidence_score": None})
        assert UNCLEAR not in build_result_script(result, Language.ENGLISH).segments


class TestDeterminismAndLanguage:
    def test_identical_inputs_identical_output(self, medicine_result: StructuredResult) -> None:
        first = build_result_script(medicine_result, Language.ENGLISH)
        second = build_result_script(medicine_result, Language.ENGLISH)
        assert first == second
        assert first.text == second.text

    def test_hindi_labels(self, medicine_result: StructuredResult) -> None:
        script = build_result_script(medicine_result, Language.HINDI)
        assert script.language is Language.HINDI
        assert script.segments[0] == "सावधान: यह दवा जैसी लग रही है।"
        assert script.segments[1] == "किसी पेशेवर से जाँच करें।"
        assert script.segments[3].startswith(message(MessageKey.WARNINGS_LABEL, Language.HINDI))

    def test_spoken_text_joins_sentences(self, food_result: StructuredResult) -> None:
        text = build_result_script(food_result, Language.ENGLISH).text
        assert text.startswith("Tomato Ketchup. Red squeeze bottle. Condition: Sealed.")


class TestNormalizeWarnings:
    def test_phrase_not_duplicated(self) -> None:
        text = "verify with a professional. Keep away from children."
        assert normalize_warnings(text, Language.ENGLISH, is_medicine=True) == text

    def test_phrase_prepended(self) -> None:
        assert (
            normalize_warnings("Drowsiness", Language.ENGLISH, is_medicine=True)
            == f"{VERIFY} Drowsiness"
        )

    def test_absent_warnings_for_medicine(self) -> None:
        assert normalize_warnings(None, Language.ENGLISH, is_medicine=True) == VERIFY

    def test_item_warnings_unmodified(self) -> None:
        assert normalize_warnings("Contains nuts", Language.ENGLISH, is_medicine=False) == "Contains nuts"


class TestOtherScripts:
    def test_answer_script(self) -> None:
        script = build_answer_script("Yes, it contains sugar.", Language.ENGLISH)
        assert script.segments == ("Answer: Yes, it contains sugar.",)
        assert script.kind is NarrationKind.ANSWER

    def test_message_script_with_suffix(self) -> None:
        script = build_message_script(
            MessageKey.MODE_CHANGED, Language.ENGLISH, suffix="Full Scan"
        )
        assert script.text == "Mode changed to Full Scan"
        assert script.kind is NarrationKind.INFO
