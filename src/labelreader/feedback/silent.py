"""No-op outputs used when no speech engine or vibration device exists."""

from __future__ import annotations

import logging
from typing import Callable

from labelreader.domain.models import HapticPattern, Language
from labelreader.feedback.base import HapticOutput, SpeechOutput

logger = logging.getLogger(__name__)


class SilentSpeechOutput(SpeechOutput):
    """Speech output that only logs, optionally echoing text to a callback."""

    def __init__(self, echo: Callable[[str], None] | None = None) -> None:
        self._echo = echo

    @property
    def is_speaking(self) -> bool:
        return False

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def speak(self, text: str, language: Language) -> None:
        logger.info("[%s] %s", language.value, text)
        if self._echo is not None:
            self._echo(text)

    async def cancel(self) -> None:
        pass


class SilentHapticOutput(HapticOutput):
    """Haptic output for devices without a vibration motor."""

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def vibrate(self, pattern: HapticPattern) -> None:
        logger.debug("Vibration %s %s", pattern.value, pattern.durations)
