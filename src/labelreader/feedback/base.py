"""Abstract base classes for speech and haptic output.

Both are best-effort capabilities: implementations log failures instead
of raising, and an unavailable device behaves as a silent no-op. This
lets the capture and narration code call them unconditionally.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from labelreader.domain.models import HapticPattern, Language

logger = logging.getLogger(__name__)


class SpeechOutput(ABC):
    """Abstract interface for text-to-speech.

    There is a single speech channel: ``speak()`` replaces whatever is
    currently being said.

    Example usage::

        async with Pyttsx3SpeechOutput() as speech:
            await speech.speak("Camera ready.", Language.ENGLISH)
            await speech.cancel()
    """

    @abstractmethod
    async def open(self) -> None:
        """Initialize the speech engine."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Stop speaking and release the engine. Safe to call twice."""
        ...

    @abstractmethod
    async def speak(self, text: str, language: Language) -> None:
        """Start speaking ``text``, cancelling any prior utterance.

        Returns once the utterance has started; it does not wait for
        the speech to finish.
        """
        ...

    @abstractmethod
    async def cancel(self) -> None:
        """Silence the current utterance, if any."""
        ...

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        """Whether an utterance is currently in progress."""
        ...

    async def __aenter__(self) -> SpeechOutput:
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()


class HapticOutput(ABC):
    """Abstract interface for vibration feedback."""

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the vibration device."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the vibration device. Safe to call twice."""
        ...

    @abstractmethod
    async def vibrate(self, pattern: HapticPattern) -> None:
        """Play a named vibration pattern."""
        ...

    async def __aenter__(self) -> HapticOutput:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()
