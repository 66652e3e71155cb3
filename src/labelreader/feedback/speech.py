"""Text-to-speech output using pyttsx3.

pyttsx3 drives the platform speech engine (SAPI5, NSSpeechSynthesizer,
eSpeak) with a blocking ``runAndWait()``. The engine lives on a
dedicated single worker thread so utterances never overlap and the
event loop stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor

import pyttsx3

from labelreader.domain.models import Language
from labelreader.feedback.base import SpeechOutput

logger = logging.getLogger(__name__)


class Pyttsx3SpeechOutput(SpeechOutput):
    """Speaks through the local platform voice via pyttsx3.

    If the engine cannot be initialized the output degrades to a silent
    no-op and says so once in the log.
    """

    def __init__(
        self,
        rate: int = 175,
        volume: float = 1.0,
        voices: dict[Language, str] | None = None,
    ) -> None:
        self._rate = rate
        self._volume = volume
        self._voices = dict(voices or {})
        self._executor: ThreadPoolExecutor | None = None
        self._engine: pyttsx3.Engine | None = None
        self._utterance: asyncio.Future[None] | None = None
        # Bumped on every cancel; a queued utterance from an older generation is skipped.
        self._generation = 0

    @property
    def is_available(self) -> bool:
        return self._engine is not None

    @property
    def is_speaking(self) -> bool:
        return self._utterance is not None and not self._utterance.done()

    async def open(self) -> None:
        """Initialize the engine on the speech thread."""
        if self._executor is not None:
            return
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="labelreader-tts")
        loop = asyncio.get_running_loop()
        try:
            self._engine = await loop.run_in_executor(self._executor, self._init_engine)
            logger.info("Speech engine initialized (rate=%d, volume=%.1f)", self._rate, self._volume)
        except (ImportError, OSError, RuntimeError) as e:
            self._engine = None
            logger.warning("Speech synthesis unavailable, continuing silently: %s", e)

    async def close(self) -> None:
        """Stop speaking and shut down the speech thread."""
        await self.cancel()
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
        self._engine = None

    async def speak(self, text: str, language: Language) -> None:
        """Start speaking ``text`` after cancelling the current utterance."""
        await self.cancel()
        if self._engine is None or self._executor is None:
            logger.debug("No speech engine, dropping utterance: %s", text[:50])
            return
        loop = asyncio.get_running_loop()
        self._utterance = loop.run_in_executor(
            self._executor, self._say_sync, text, language, self._generation
        )
        self._utterance.add_done_callback(self._log_failure)

    async def cancel(self) -> None:
        """Interrupt the current utterance.

        An utterance still queued behind one that is finishing on the
        speech thread is dropped before it reaches the engine.
        """
        self._generation += 1
        if self.is_speaking:
            self._utterance.cancel()
            if self._engine is not None:
                self._engine.stop()
            logger.debug("Speech cancelled")
        self._utterance = None

    def _init_engine(self) -> pyttsx3.Engine:
        engine = pyttsx3.init()
        engine.setProperty("rate", self._rate)
        engine.setProperty("volume", self._volume)
        return engine

    def _say_sync(self, text: str, language: Language, generation: int) -> None:
        """Blocking speech call (runs on the speech thread)."""
        engine = self._engine
        if engine is None or generation != self._generation:
            return
        voice = self._voices.get(language)
        if voice:
            engine.setProperty("voice", voice)
        engine.say(text)
        engine.runAndWait()

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.warning("Speech engine failed: %s", error)
