"""Abstract base class for spoken question input."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from labelreader.domain.models import Language

logger = logging.getLogger(__name__)


class Transcriber(ABC):
    """Turns one spoken utterance into text."""

    @abstractmethod
    async def transcribe(self, language: Language) -> str:
        """Listen for one utterance and return its transcript.

        Raises:
            CapabilityUnavailableError: If there is no microphone or
                recognition backend on this device.
            TranscriptionError: If nothing intelligible was heard.
        """
        ...


class TranscriptionError(Exception):
    """Raised when speech could not be turned into text."""


class CapabilityUnavailableError(Exception):
    """Raised when the device lacks a required input capability."""
