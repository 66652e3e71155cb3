"""Narration module for labelreader.

Builds ordered spoken scripts from analysis results and drives them
through the speech and haptic outputs.

Public API:
    build_result_script -- Script for a completed analysis
    build_answer_script -- Script for a follow-up answer
    build_message_script -- Script for a single table message
    NarrationDriver -- Cancel-then-speak narration sequencer
    MessageKey, message -- Per-language message table
"""

from labelreader.narration.builder import (
    build_answer_script,
    build_message_script,
    build_result_script,
    normalize_warnings,
)
from labelreader.narration.driver import NarrationDriver
from labelreader.narration.messages import MESSAGES, MessageKey, message

__all__ = [
    "MESSAGES",
    "MessageKey",
    "NarrationDriver",
    "build_answer_script",
    "build_message_script",
    "build_result_script",
    "message",
    "normalize_warnings",
]
