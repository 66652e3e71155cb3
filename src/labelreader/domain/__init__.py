"""Domain models for labelreader.

This package contains all core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation and serialization.
"""

from labelreader.domain.models import (
    CapturedFrame,
    CaptureResult,
    CaptureSession,
    CaptureState,
    HapticPattern,
    Language,
    NarrationKind,
    NarrationScript,
    QuestionAnswer,
    ScanMode,
    SessionState,
    StructuredResult,
)

__all__ = [
    "CapturedFrame",
    "CaptureResult",
    "CaptureSession",
    "CaptureState",
    "HapticPattern",
    "Language",
    "NarrationKind",
    "NarrationScript",
    "QuestionAnswer",
    "ScanMode",
    "SessionState",
    "StructuredResult",
]
