"""Webcam frame source using OpenCV.

Grabs frames from a local camera and encodes them as JPEG stills.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

import cv2
import numpy as np

from labelreader.capture.base import CaptureError, FrameSource
from labelreader.domain.models import CapturedFrame
from labelreader.utils.imaging import encode_jpeg

logger = logging.getLogger(__name__)


class WebcamFrameSource(FrameSource):
    """Captures frames from a webcam using OpenCV.

    Runs OpenCV's blocking calls in a thread pool executor to avoid
    blocking the async event loop.
    """

    def __init__(
        self,
        device_index: int = 0,
        resolution: tuple[int, int] | None = None,
        jpeg_quality: int = 80,
    ) -> None:
        super().__init__()
        self._device_index = device_index
        self._resolution = resolution
        self._jpeg_quality = jpeg_quality
        self._cap: cv2.VideoCapture | None = None

    async def open(self) -> None:
        """Open the webcam device."""
        loop = asyncio.get_running_loop()
        self._cap = await loop.run_in_executor(
            None, cv2.VideoCapture, self._device_index
        )
        if not self._cap.isOpened():
            self._cap = None
            raise CaptureError(
                f"Failed to open webcam device {self._device_index}"
            )
        if self._resolution:
            w, h = self._resolution
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        self._is_open = True
        logger.info(
            "Opened webcam device %d (%dx%d)",
            self._device_index,
            int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    async def close(self) -> None:
        """Release the webcam device."""
        if self._cap is not None and self._cap.isOpened():
            self._cap.release()
            logger.info("Released webcam device %d", self._device_index)
        self._cap = None
        self._is_open = False

    async def capture_frame(self) -> CapturedFrame:
        """Grab the current view and encode it as JPEG."""
        if not self._is_open or self._cap is None:
            raise CaptureError("Webcam is not open")
        loop = asyncio.get_running_loop()
        image = await loop.run_in_executor(None, self._read_sync, self._cap)
        try:
            encoded = encode_jpeg(image, self._jpeg_quality)
        except ValueError as e:
            raise CaptureError(str(e)) from e
        self._frame_counter += 1
        return CapturedFrame(
            image=encoded,
            timestamp=datetime.now(),
            frame_number=self._frame_counter,
            source_device=f"webcam:{self._device_index}",
        )

    @staticmethod
    def _read_sync(cap: cv2.VideoCapture) -> np.ndarray:
        """Synchronous frame read (runs in thread pool)."""
        ret, frame = cap.read()
        if not ret or frame is None:
            raise CaptureError("Failed to read frame from webcam")
        return frame
