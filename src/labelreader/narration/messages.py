"""Spoken and displayed strings, one table per language.

Every table defines exactly the same keys, so narration and display code
can look up any message for any language.
"""

from __future__ import annotations

import enum

from labelreader.domain.models import Language


class MessageKey(str, enum.Enum):
    CAMERA_PERMISSION = "camera_permission"
    CAMERA_READY = "camera_ready"
    ANALYZING = "analyzing"
    ANALYSIS_ERROR = "analysis_error"
    ITEM_LABEL = "item_label"
    EXPIRY_LABEL = "expiry_label"
    USAGE_LABEL = "usage_label"
    WARNINGS_LABEL = "warnings_label"
    INGREDIENTS_LABEL = "ingredients_label"
    CRITICAL_WARNING_LABEL = "critical_warning_label"
    VISUAL_DETAILS_LABEL = "visual_details_label"
    SEAL_STATUS_LABEL = "seal_status_label"
    QUANTITY_ESTIMATE_LABEL = "quantity_estimate_label"
    CONFIDENCE_LABEL = "confidence_label"
    NONE = "none"
    VERIFY_PROFESSIONAL = "verify_professional"
    NOTE_UNCLEAR = "note_unclear"
    CAUTION_MEDICINE = "caution_medicine"
    LANGUAGE_SELECTED = "language_selected"
    THINKING = "thinking"
    ANSWER_TITLE = "answer_title"
    ASK_ERROR = "ask_error"
    LISTENING = "listening"
    MIC_ERROR = "mic_error"
    QUICK_SCAN = "quick_scan"
    FULL_SCAN = "full_scan"
    MODE_CHANGED = "mode_changed"
    MODE_LOCKED = "mode_locked"
    ROTATE_INSTRUCTION = "rotate_instruction"
    SCAN_COMPLETE = "scan_complete"


MESSAGES: dict[Language, dict[MessageKey, str]] = {
    Language.ENGLISH: {
        MessageKey.CAMERA_PERMISSION: "Could not access camera. Please allow permissions.",
        MessageKey.CAMERA_READY: "Camera ready. Tap anywhere to scan.",
        MessageKey.ANALYZING: "Analyzing... Please wait.",
        MessageKey.ANALYSIS_ERROR: "I could not analyze that. Please try again.",
        MessageKey.ITEM_LABEL: "Item",
        MessageKey.EXPIRY_LABEL: "Expiry",
        MessageKey.USAGE_LABEL: "Usage",
        MessageKey.WARNINGS_LABEL: "Warnings",
        MessageKey.INGREDIENTS_LABEL: "Ingredients",
        MessageKey.CRITICAL_WARNING_LABEL: "CRITICAL WARNING",
        MessageKey.VISUAL_DETAILS_LABEL: "Appearance",
        MessageKey.SEAL_STATUS_LABEL: "Condition",
        MessageKey.QUANTITY_ESTIMATE_LABEL: "Quantity Estimate",
        MessageKey.CONFIDENCE_LABEL: "Match",
        MessageKey.NONE: "None",
        MessageKey.VERIFY_PROFESSIONAL: "Verify with a professional.",
        MessageKey.NOTE_UNCLEAR: "Note: Image was unclear.",
        MessageKey.CAUTION_MEDICINE: "Caution: This looks like medication.",
        MessageKey.LANGUAGE_SELECTED: "Language set to English.",
        MessageKey.THINKING: "Thinking...",
        MessageKey.ANSWER_TITLE: "Answer",
        MessageKey.ASK_ERROR: "Could not get an answer. Try again.",
        MessageKey.LISTENING: "Listening...",
        MessageKey.MIC_ERROR: "Voice input not supported",
        MessageKey.QUICK_SCAN: "Quick Scan",
        MessageKey.FULL_SCAN: "Full Scan",
        MessageKey.MODE_CHANGED: "Mode changed to",
        MessageKey.MODE_LOCKED: "Cannot switch mode while capturing.",
        MessageKey.ROTATE_INSTRUCTION: "Rotate product slowly. Capturing...",
        MessageKey.SCAN_COMPLETE: "Scan complete.",
    },
    Language.HINDI: {
        MessageKey.CAMERA_PERMISSION: "कैमरा एक्सेस नहीं मिला। कृपया अनुमति दें।",
        MessageKey.CAMERA_READY: "कैमरा तैयार है। स्कैन करने के लिए कहीं भी टैप करें।",
        MessageKey.ANALYZING: "विश्लेषण हो रहा है... कृपया प्रतीक्षा करें।",
        MessageKey.ANALYSIS_ERROR: "मैं विश्लेषण नहीं कर सका। कृपया पुनः प्रयास करें।",
        MessageKey.ITEM_LABEL: "वस्तु",
        MessageKey.EXPIRY_LABEL: "समाप्ति तिथि",
        MessageKey.USAGE_LABEL: "उपयोग",
        MessageKey.WARNINGS_LABEL: "चेतावनी",
        MessageKey.INGREDIENTS_LABEL: "सामग्री",
        MessageKey.CRITICAL_WARNING_LABEL: "गंभीर चेतावनी",
        MessageKey.VISUAL_DETAILS_LABEL: "दिखावट",
        MessageKey.SEAL_STATUS_LABEL: "स्थिति",
        MessageKey.QUANTITY_ESTIMATE_LABEL: "अनुमानित मात्रा",
        MessageKey.CONFIDENCE_LABEL: "सटीकता",
        MessageKey.NONE: "कोई नहीं",
        MessageKey.VERIFY_PROFESSIONAL: "किसी पेशेवर से जाँच करें।",
        MessageKey.NOTE_UNCLEAR: "नोट: छवि स्पष्ट नहीं थी।",
        MessageKey.CAUTION_MEDICINE: "सावधान: यह दवा जैसी लग रही है।",
        MessageKey.LANGUAGE_SELECTED: "हिंदी चुनी गई।",
        MessageKey.THINKING: "सोच रहा हूँ...",
        MessageKey.ANSWER_TITLE: "उत्तर",
        MessageKey.ASK_ERROR: "उत्तर नहीं मिला। पुनः प्रयास करें।",
        MessageKey.LISTENING: "सुन रहा हूँ...",
        MessageKey.MIC_ERROR: "आवाज़ इनपुट समर्थित नहीं है",
        MessageKey.QUICK_SCAN: "त्वरित स्कैन",
        MessageKey.FULL_SCAN: "पूरा स्कैन",
        MessageKey.MODE_CHANGED: "मोड बदल गया है:",
        MessageKey.MODE_LOCKED: "स्कैन के दौरान मोड नहीं बदल सकते।",
        MessageKey.ROTATE_INSTRUCTION: "उत्पाद को धीरे-धीरे घुमाएं। स्कैन हो रहा है...",
        MessageKey.SCAN_COMPLETE: "स्कैन पूरा हुआ।",
    },
}


def message(key: MessageKey, language: Language) -> str:
    """Look up a message in the table for ``language``."""
    return MESSAGES[language][key]
