"""Capture module for labelreader.

Provides the frame source abstraction, the OpenCV webcam source, and the
capture controller that runs Quick (single frame) and Full (timed
multi-frame) scans.

Public API:
    FrameSource -- Abstract base class
    CaptureController -- Capture state machine
    RecurringTimer -- Cancellable interval timer used by Full scans
    WebcamFrameSource -- OpenCV webcam implementation
"""

from labelreader.capture.base import CaptureError, FrameSource
from labelreader.capture.controller import CaptureController
from labelreader.capture.timer import RecurringTimer

__all__ = [
    "CaptureController",
    "CaptureError",
    "FrameSource",
    "RecurringTimer",
    "WebcamFrameSource",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "WebcamFrameSource":
        from labelreader.capture.webcam import WebcamFrameSource
        return WebcamFrameSource
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
