"""Shared test fixtures for the labelreader test suite.

Provides scripted in-memory stand-ins for the camera, speech engine and
vibration motor, plus sample frames and analysis results.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from labelreader.capture.base import CaptureError, FrameSource
from labelreader.domain.models import (
    CapturedFrame,
    HapticPattern,
    Language,
    StructuredResult,
)
from labelreader.feedback.base import HapticOutput, SpeechOutput


# ---------------------------------------------------------------------------
# Fake Devices
# ---------------------------------------------------------------------------


class FakeFrameSource(FrameSource):
    """Frame source driven by a script.

    Each ``capture_frame()`` call consumes the next script entry: bytes
    become a frame, ``None`` raises CaptureError. Once the script runs
    out every call succeeds.
    """

    def __init__(self, script: list[bytes | None] | None = None, fail_open: bool = False) -> None:
        super().__init__()
        self._script = list(script or [])
        self._fail_open = fail_open
        self.calls = 0
        self.close_calls = 0

    async def open(self) -> None:
        if self._fail_open:
            raise CaptureError("Permission denied")
        self._is_open = True

    async def close(self) -> None:
        self.close_calls += 1
        self._is_open = False

    async def capture_frame(self) -> CapturedFrame:
        self.calls += 1
        image = self._script.pop(0) if self._script else b"\xff\xd8frame"
        if image is None:
            raise CaptureError("Video surface not ready")
        frame = CapturedFrame(
            image=image,
            frame_number=self._frame_counter,
            source_device="fake",
        )
        self._frame_counter += 1
        return frame


class RecordingHaptics(HapticOutput):
    """Haptic output that records every pattern played."""

    def __init__(self) -> None:
        self.patterns: list[HapticPattern] = []
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def vibrate(self, pattern: HapticPattern) -> None:
        self.patterns.append(pattern)


class RecordingSpeech(SpeechOutput):
    """Speech output that records utterances and stays 'speaking' until cancelled."""

    def __init__(self) -> None:
        self.spoken: list[tuple[str, Language]] = []
        self.cancel_calls = 0
        self._speaking = False
        self.max_concurrent = 0

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        self._speaking = False

    async def speak(self, text: str, language: Language) -> None:
        active = 1 if self._speaking else 0
        self.max_concurrent = max(self.max_concurrent, active + 1)
        self.spoken.append((text, language))
        self._speaking = True

    async def cancel(self) -> None:
        self.cancel_calls += 1
        self._speaking = False

    def finish(self) -> None:
        """Simulate the current utterance ending on its own."""
        self._speaking = False


# ---------------------------------------------------------------------------
# Frame Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_frame() -> CapturedFrame:
    """A CapturedFrame holding a tiny fake JPEG payload."""
    return CapturedFrame(
        image=b"\xff\xd8\xff\xe0fake-jpeg",
        timestamp=datetime(2025, 1, 1, 12, 0, 0),
        frame_number=0,
        source_device="test",
    )


@pytest.fixture
def frame_source() -> FakeFrameSource:
    return FakeFrameSource()


@pytest.fixture
def make_frame_source() -> type[FakeFrameSource]:
    """Factory for frame sources with a custom script."""
    return FakeFrameSource


@pytest.fixture
def haptics() -> RecordingHaptics:
    return RecordingHaptics()


@pytest.fixture
def speech() -> RecordingSpeech:
    return RecordingSpeech()


# ---------------------------------------------------------------------------
# Analysis Result Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def medicine_result() -> StructuredResult:
    """A confident medicine analysis with warnings and a quantity."""
    return StructuredResult(
        item_name="Paracetamol 500mg",
        expiry="03/2026",
        usage="1 tablet every 6 hours",
        warnings="Do not exceed 8 tablets in 24 hours",
        ingredients="Paracetamol",
        confidence_score=0.9,
        is_medicine=True,
        quantity_estimate="About half the strip left",
    )


@pytest.fixture
def food_result() -> StructuredResult:
    """A confident non-medicine analysis with visual details."""
    return StructuredResult(
        item_name="Tomato Ketchup",
        expiry="12/2025",
        usage="Refrigerate after opening",
        warnings=None,
        ingredients="Tomato, sugar, vinegar, salt",
        confidence_score=0.85,
        is_medicine=False,
        visual_details="Red squeeze bottle",
        seal_status="Sealed",
    )


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_analyzer(food_result: StructuredResult) -> AsyncMock:
    """A mock Analyzer returning the food result."""
    mock = AsyncMock()
    mock.analyze.return_value = food_result
    return mock


@pytest.fixture
def mock_answerer() -> AsyncMock:
    """A mock QuestionAnswerer with a fixed answer."""
    mock = AsyncMock()
    mock.ask.return_value = "Yes, it contains sugar."
    return mock
