"""Microphone transcriber using the SpeechRecognition package."""

from __future__ import annotations

import asyncio
import logging

import speech_recognition as sr

from labelreader.dictation.base import (
    CapabilityUnavailableError,
    TranscriptionError,
    Transcriber,
)
from labelreader.domain.models import Language

logger = logging.getLogger(__name__)


class MicrophoneTranscriber(Transcriber):
    """Records one phrase from the default microphone and recognizes it.

    Recording and recognition block, so they run in a thread pool
    executor.
    """

    def __init__(
        self,
        listen_timeout: float = 5.0,
        phrase_time_limit: float = 10.0,
        device_index: int | None = None,
    ) -> None:
        self._listen_timeout = listen_timeout
        self._phrase_time_limit = phrase_time_limit
        self._device_index = device_index
        self._recognizer = sr.Recognizer()

    async def transcribe(self, language: Language) -> str:
        loop = asyncio.get_running_loop()
        transcript = await loop.run_in_executor(None, self._transcribe_sync, language.locale)
        logger.info("Transcribed question: %s", transcript[:80])
        return transcript

    def _transcribe_sync(self, locale: str) -> str:
        """Blocking record-and-recognize call (runs in thread pool)."""
        try:
            microphone = sr.Microphone(device_index=self._device_index)
        except (AttributeError, OSError) as e:
            # AttributeError: PyAudio is not installed
            raise CapabilityUnavailableError(f"No microphone available: {e}") from e

        try:
            with microphone as source:
                self._recognizer.adjust_for_ambient_noise(source, duration=0.5)
                audio = self._recognizer.listen(
                    source,
                    timeout=self._listen_timeout,
                    phrase_time_limit=self._phrase_time_limit,
                )
        except sr.WaitTimeoutError as e:
            raise TranscriptionError("No speech heard before timeout") from e
        except OSError as e:
            raise CapabilityUnavailableError(f"Microphone could not be opened: {e}") from e

        try:
            transcript = self._recognizer.recognize_google(audio, language=locale)
        except sr.UnknownValueError as e:
            raise TranscriptionError("Speech was not understood") from e
        except sr.RequestError as e:
            raise TranscriptionError(f"Recognition service failed: {e}") from e

        transcript = transcript.strip()
        if not transcript:
            raise TranscriptionError("Empty transcript")
        return transcript
