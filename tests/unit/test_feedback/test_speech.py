"""Tests for the speech output backends."""

from __future__ import annotations

import asyncio
import threading
from unittest.mock import MagicMock, patch

import pytest

from labelreader.domain.models import HapticPattern, Language
from labelreader.feedback.silent import SilentHapticOutput, SilentSpeechOutput
from labelreader.feedback.speech import Pyttsx3SpeechOutput


class _FinishingEngine:
    """Engine whose current utterance ignores stop() until released."""

    def __init__(self) -> None:
        self.said: list[str] = []
        self.running = threading.Event()
        self.release = threading.Event()

    def setProperty(self, name, value) -> None:
        pass

    def say(self, text: str) -> None:
        self.said.append(text)

    def runAndWait(self) -> None:
        self.running.set()
        self.release.wait(timeout=2)

    def stop(self) -> None:
        pass


class TestPyttsx3SpeechOutput:
    @pytest.mark.asyncio
    async def test_speaks_with_language_voice(self) -> None:
        engine = MagicMock()
        with patch("labelreader.feedback.speech.pyttsx3.init", return_value=engine):
            speech = Pyttsx3SpeechOutput(rate=150, voices={Language.HINDI: "hindi-voice"})
            await speech.open()
            await speech.speak("नमस्ते", Language.HINDI)
            await speech._utterance
            await speech.close()

        assert speech.is_available is False
        engine.setProperty.assert_any_call("rate", 150)
        engine.setProperty.assert_any_call("voice", "hindi-voice")
        engine.say.assert_called_once_with("नमस्ते")

    @pytest.mark.asyncio
    async def test_engine_failure_degrades_to_silence(self) -> None:
        with patch("labelreader.feedback.speech.pyttsx3.init", side_effect=RuntimeError("no driver")):
            speech = Pyttsx3SpeechOutput()
            await speech.open()
            assert speech.is_available is False
            await speech.speak("Hello", Language.ENGLISH)
            assert speech.is_speaking is False
            await speech.close()

    @pytest.mark.asyncio
    async def test_cancel_when_idle(self) -> None:
        speech = Pyttsx3SpeechOutput()
        await speech.cancel()
        assert speech.is_speaking is False

    @pytest.mark.asyncio
    async def test_cancel_drops_queued_utterance(self) -> None:
        engine = _FinishingEngine()
        with patch("labelreader.feedback.speech.pyttsx3.init", return_value=engine):
            speech = Pyttsx3SpeechOutput()
            await speech.open()
            await speech.speak("A", Language.ENGLISH)
            await asyncio.to_thread(engine.running.wait, 2)
            await speech.speak("B", Language.ENGLISH)
            await speech.cancel()
            assert speech.is_speaking is False

            engine.release.set()
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(speech._executor, lambda: None)
            await speech.close()

        assert engine.said == ["A"]

    @pytest.mark.asyncio
    async def test_utterance_after_close_is_skipped(self) -> None:
        engine = MagicMock()
        with patch("labelreader.feedback.speech.pyttsx3.init", return_value=engine):
            speech = Pyttsx3SpeechOutput()
            await speech.open()
        await speech.close()

        speech._say_sync("late", Language.ENGLISH, 0)
        engine.say.assert_not_called()


class TestSilentOutputs:
    @pytest.mark.asyncio
    async def test_silent_speech_echoes(self) -> None:
        echoed: list[str] = []
        async with SilentSpeechOutput(echo=echoed.append) as speech:
            await speech.speak("Camera ready.", Language.ENGLISH)
            assert speech.is_speaking is False
        assert echoed == ["Camera ready."]

    @pytest.mark.asyncio
    async def test_silent_haptics(self) -> None:
        async with SilentHapticOutput() as haptics:
            await haptics.vibrate(HapticPattern.READY)
