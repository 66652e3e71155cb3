"""Abstract base class for frame sources.

All frame source implementations must conform to this interface, so the
capture controller can drive a webcam, a phone camera bridge, or a
scripted test source without changing the rest of the pipeline.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from labelreader.domain.models import CapturedFrame

logger = logging.getLogger(__name__)


class FrameSource(ABC):
    """Abstract interface for grabbing encoded still images from a camera.

    A frame source owns the underlying device handle between ``open()``
    and ``close()``. It exposes a single operation, ``capture_frame()``,
    which returns the current view as an encoded still image.

    Example usage::

        async with WebcamFrameSource(device_index=0) as source:
            frame = await source.capture_frame()
    """

    def __init__(self) -> None:
        self._frame_counter: int = 0
        self._is_open: bool = False

    @property
    def is_open(self) -> bool:
        """Whether the device is currently open and ready."""
        return self._is_open

    @abstractmethod
    async def open(self) -> None:
        """Open and initialize the device.

        Raises:
            CaptureError: If the device cannot be opened.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the device. Safe to call multiple times."""
        ...

    @abstractmethod
    async def capture_frame(self) -> CapturedFrame:
        """Capture the current view as an encoded still image.

        Raises:
            CaptureError: If no frame is available, e.g. the device is
                not open or the video surface is not ready yet.
        """
        ...

    async def __aenter__(self) -> FrameSource:
        """Async context manager entry -- opens the device."""
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Async context manager exit -- closes the device."""
        await self.close()


class CaptureError(Exception):
    """Raised when a frame cannot be produced or a capture is refused."""
