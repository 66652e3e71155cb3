"""Dictation module for labelreader.

Lets the user speak a follow-up question instead of typing it.

Public API:
    Transcriber -- Abstract base class
    MicrophoneTranscriber -- SpeechRecognition implementation
"""

from labelreader.dictation.base import (
    CapabilityUnavailableError,
    Transcriber,
    TranscriptionError,
)

__all__ = [
    "CapabilityUnavailableError",
    "MicrophoneTranscriber",
    "Transcriber",
    "TranscriptionError",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "MicrophoneTranscriber":
        from labelreader.dictation.microphone import MicrophoneTranscriber
        return MicrophoneTranscriber
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
