"""Speech and haptic feedback module for labelreader.

Provides pluggable text-to-speech and vibration outputs behind small
abstract interfaces, so narration works the same on a laptop, a phone
bridge, or in tests.

Public API:
    SpeechOutput -- Abstract base class for text-to-speech
    HapticOutput -- Abstract base class for vibration
    SilentSpeechOutput, SilentHapticOutput -- No-op outputs
    Pyttsx3SpeechOutput -- Local platform voice via pyttsx3
    HttpHapticOutput -- Vibration on an HTTP companion device
"""

from labelreader.feedback.base import HapticOutput, SpeechOutput
from labelreader.feedback.silent import SilentHapticOutput, SilentSpeechOutput

__all__ = [
    "HapticOutput",
    "HttpHapticOutput",
    "Pyttsx3SpeechOutput",
    "SilentHapticOutput",
    "SilentSpeechOutput",
    "SpeechOutput",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "Pyttsx3SpeechOutput":
        from labelreader.feedback.speech import Pyttsx3SpeechOutput
        return Pyttsx3SpeechOutput
    if name == "HttpHapticOutput":
        from labelreader.feedback.haptics import HttpHapticOutput
        return HttpHapticOutput
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
