"""HTTP haptic output backend.

Sends vibration patterns to a companion device (e.g. a phone or wrist
band running a small HTTP service) that owns the vibration motor.
"""

from __future__ import annotations

import logging

import httpx

from labelreader.domain.models import HapticPattern
from labelreader.feedback.base import HapticOutput

logger = logging.getLogger(__name__)


class HttpHapticOutput(HapticOutput):
    """Posts vibration patterns to ``/vibrate`` on a companion device.

    Vibration is best effort: an unreachable device is logged and the
    pattern is dropped.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8090",
        timeout: float = 2.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the HTTP client and check the device is reachable."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
        )
        try:
            resp = await self._client.get("/health")
            resp.raise_for_status()
            logger.info("Connected to haptic device at %s", self._base_url)
        except httpx.HTTPError as e:
            logger.warning("Haptic device at %s not reachable: %s", self._base_url, e)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from haptic device")

    async def vibrate(self, pattern: HapticPattern) -> None:
        """Send a vibration pattern via HTTP POST."""
        if self._client is None:
            logger.debug("Haptics not connected, dropping %s", pattern.value)
            return
        payload = {"pattern": pattern.value, "durations": list(pattern.durations)}
        try:
            resp = await self._client.post("/vibrate", json=payload)
            resp.raise_for_status()
            logger.debug("Sent vibration: %s", pattern.value)
        except httpx.HTTPError as e:
            logger.warning("Vibration %s failed: %s", pattern.value, e)
