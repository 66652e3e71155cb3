"""Image encoding utilities for labelreader.

Frames leave the capture layer as encoded still images so they can be
handed to the vision model without further conversion.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def encode_jpeg(image: np.ndarray, quality: int = 80) -> bytes:
    """Encode a BGR numpy image (OpenCV format) as JPEG bytes."""
    success, buffer = cv2.imencode(".jpg", image, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not success:
        raise ValueError("Failed to encode image to JPEG")
    return buffer.tobytes()
