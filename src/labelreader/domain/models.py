"""Core domain models for the labelreader system.

These models represent the data flowing through the system: encoded
frames from the camera, the capture session that accumulates them, the
structured analysis produced by the vision model, and the narration
scripts spoken back to the user.
"""

from __future__ import annotations

import base64
import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Language(str, enum.Enum):
    """Language used for analysis output and every spoken string."""

    ENGLISH = "en"
    HINDI = "hi"

    @property
    def locale(self) -> str:
        """BCP-47 locale used by speech synthesis and recognition."""
        return "hi-IN" if self is Language.HINDI else "en-US"

    @property
    def display_name(self) -> str:
        """English name of the language, as given to the vision model."""
        return "Hindi" if self is Language.HINDI else "English"


class ScanMode(str, enum.Enum):
    """How many frames a capture collects."""

    QUICK = "quick"  # Exactly one frame
    FULL = "full"  # Timed multi-frame sweep while the product is rotated


class CaptureState(str, enum.Enum):
    """States of the capture state machine."""

    IDLE = "idle"
    ARMED = "armed"
    QUICK_CAPTURING = "quick_capturing"
    FULL_CAPTURING = "full_capturing"


class SessionState(str, enum.Enum):
    """Top-level state of an interaction session."""

    IDLE = "idle"  # Camera not started
    CAMERA = "camera"  # Ready to capture
    ANALYZING = "analyzing"  # Waiting on the vision model
    RESULT = "result"  # Result narrated, follow-up questions allowed


class HapticPattern(str, enum.Enum):
    """Named vibration cues mapped to semantic events."""

    TAP = "tap"
    SUCCESS = "success"
    ERROR = "error"
    READY = "ready"
    RECORDING = "recording"

    @property
    def durations(self) -> tuple[int, ...]:
        """Alternating vibrate/pause durations in milliseconds."""
        return _HAPTIC_DURATIONS[self]


_HAPTIC_DURATIONS: dict[HapticPattern, tuple[int, ...]] = {
    HapticPattern.TAP: (50,),
    HapticPattern.SUCCESS: (50, 50, 50),
    HapticPattern.ERROR: (200, 100, 200, 100, 200),
    HapticPattern.READY: (100,),
    HapticPattern.RECORDING: (20,),
}


class NarrationKind(str, enum.Enum):
    """Semantic class of a narration, used to pick its haptic cue."""

    RESULT = "result"  # Completed analysis
    ANSWER = "answer"  # Follow-up answer
    ACTION = "action"  # Acknowledges a user-initiated action
    READY = "ready"  # Capture surface became ready
    ERROR = "error"  # Failed analysis or follow-up
    INFO = "info"  # Plain announcement, no haptic


# ---------------------------------------------------------------------------
# Capture Models
# ---------------------------------------------------------------------------


class CapturedFrame(BaseModel):
    """A single still image grabbed from the camera, already encoded."""

    model_config = ConfigDict(frozen=True)

    image: bytes = Field(description="Encoded still image (JPEG by default)")
    media_type: str = Field(default="image/jpeg", description="MIME type of the encoded image")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the frame was captured")
    frame_number: int = Field(ge=0, description="Sequential frame counter of the source")
    source_device: str = Field(default="webcam", description="Identifier for the capture device")

    def to_base64(self) -> str:
        """Return the encoded image as a base64 string."""
        return base64.b64encode(self.image).decode("ascii")


class CaptureSession(BaseModel):
    """Transient state of one in-progress capture.

    Owned exclusively by the CaptureController while a capture is active
    and discarded on completion or cancellation.
    """

    mode: ScanMode
    elapsed_ms: int = Field(default=0, ge=0)
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    frames: list[CapturedFrame] = Field(
        default_factory=list, description="Frames in capture order (append-only)"
    )
    terminal: bool = Field(default=False, description="Set once the window has elapsed")


class CaptureResult(BaseModel):
    """The frames produced by one completed capture."""

    model_config = ConfigDict(frozen=True)

    mode: ScanMode
    frames: tuple[CapturedFrame, ...] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Analysis Models
# ---------------------------------------------------------------------------


class StructuredResult(BaseModel):
    """Structured description of a product produced by the vision model.

    Optional text fields are ``None`` when the model reported them as not
    applicable; sentinel strings are resolved at the analyzer boundary.
    """

    model_config = ConfigDict(frozen=True)

    item_name: str
    expiry: str
    usage: str
    warnings: str | None = None
    ingredients: str | None = None
    confidence_score: float | None = Field(default=None, ge=0.0, le=1.0)
    is_medicine: bool = False
    visual_details: str | None = Field(default=None, description="Colour, shape, packaging (non-medicine)")
    seal_status: str | None = Field(default=None, description="Sealed / opened (non-medicine)")
    quantity_estimate: str | None = Field(default=None, description="Amount remaining (medicine)")

    @property
    def is_low_confidence(self) -> bool:
        """Whether the model reported the image as hard to read."""
        return self.confidence_score is not None and self.confidence_score < 0.5


class QuestionAnswer(BaseModel):
    """One follow-up question and the answer it received."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


# ---------------------------------------------------------------------------
# Narration Models
# ---------------------------------------------------------------------------

_TERMINAL_PUNCTUATION = (".", "!", "?", "।")  # । is the Devanagari danda


class NarrationScript(BaseModel):
    """An ordered list of text segments to be spoken for one event."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...]
    language: Language
    kind: NarrationKind = NarrationKind.INFO

    @property
    def text(self) -> str:
        """Segments joined into a single utterance.

        A sentence break is inserted between segments unless the segment
        already ends with terminal punctuation.
        """
        parts: list[str] = []
        for segment in self.segments:
            segment = segment.strip()
            if not segment:
                continue
            if parts and not parts[-1].endswith(_TERMINAL_PUNCTUATION):
                parts[-1] += "."
            parts.append(segment)
        return " ".join(parts)
