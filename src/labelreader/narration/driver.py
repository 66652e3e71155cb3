"""Drives narration scripts through the speech and haptic outputs."""

from __future__ import annotations

import asyncio
import logging

from labelreader.domain.models import (
    HapticPattern,
    Language,
    NarrationKind,
    NarrationScript,
)
from labelreader.feedback.base import HapticOutput, SpeechOutput
from labelreader.narration.builder import build_message_script
from labelreader.narration.messages import MessageKey

logger = logging.getLogger(__name__)

_KIND_HAPTICS: dict[NarrationKind, HapticPattern | None] = {
    NarrationKind.RESULT: HapticPattern.SUCCESS,
    NarrationKind.ANSWER: HapticPattern.SUCCESS,
    NarrationKind.ACTION: HapticPattern.TAP,
    NarrationKind.READY: HapticPattern.READY,
    NarrationKind.ERROR: HapticPattern.ERROR,
    NarrationKind.INFO: None,
}


class NarrationDriver:
    """Speaks one narration at a time.

    Starting a narration always cancels the one in flight first, so at
    most one utterance is active. Start and cancel are serialized with a
    lock because the speech channel is shared by every component.
    """

    def __init__(self, speech: SpeechOutput, haptics: HapticOutput) -> None:
        self._speech = speech
        self._haptics = haptics
        self._lock = asyncio.Lock()
        self._current: NarrationScript | None = None

    @property
    def current(self) -> NarrationScript | None:
        """The most recently started script, if it is still being spoken."""
        if self._current is not None and not self._speech.is_speaking:
            self._current = None
        return self._current

    async def narrate(self, script: NarrationScript) -> None:
        """Cancel any prior speech, play the kind's haptic cue, then speak."""
        async with self._lock:
            await self._speech.cancel()
            pattern = _KIND_HAPTICS[script.kind]
            if pattern is not None:
                await self._haptics.vibrate(pattern)
            text = script.text
            if not text:
                self._current = None
                return
            logger.debug("Narrating %s (%d segments)", script.kind.value, len(script.segments))
            self._current = script
            await self._speech.speak(text, script.language)

    async def announce(
        self,
        key: MessageKey,
        language: Language,
        kind: NarrationKind = NarrationKind.INFO,
        suffix: str | None = None,
    ) -> None:
        """Narrate a single message from the message table."""
        await self.narrate(build_message_script(key, language, kind, suffix))

    async def cue(self, pattern: HapticPattern) -> None:
        """Play a haptic cue without speaking."""
        await self._haptics.vibrate(pattern)

    async def cancel(self) -> None:
        """Stop speaking. Safe to call when nothing is being said."""
        async with self._lock:
            self._current = None
            await self._speech.cancel()
