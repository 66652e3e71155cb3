"""The interaction session that orchestrates a scan from tap to speech.

Ties together capture, product analysis, narration and the follow-up
question flow.
"""

from __future__ import annotations

import logging

from labelreader.analyzer.base import AnalysisError, Analyzer, QAError, QuestionAnswerer
from labelreader.capture.base import CaptureError
from labelreader.capture.controller import CaptureController
from labelreader.dictation.base import (
    CapabilityUnavailableError,
    Transcriber,
    TranscriptionError,
)
from labelreader.domain.models import (
    CapturedFrame,
    CaptureResult,
    HapticPattern,
    Language,
    NarrationKind,
    QuestionAnswer,
    ScanMode,
    SessionState,
    StructuredResult,
)
from labelreader.narration.builder import build_answer_script, build_result_script
from labelreader.narration.driver import NarrationDriver
from labelreader.narration.messages import MessageKey, message

logger = logging.getLogger(__name__)


class InteractionSession:
    """Coordinates: capture -> analyze -> narrate -> follow-up questions

    Every failure returns the session to a state it has been in before:
    a failed analysis re-arms the camera, a failed question keeps the
    current result on screen.
    """

    def __init__(
        self,
        controller: CaptureController,
        analyzer: Analyzer,
        answerer: QuestionAnswerer,
        narrator: NarrationDriver,
        transcriber: Transcriber | None = None,
        language: Language = Language.ENGLISH,
    ) -> None:
        self._controller = controller
        self._analyzer = analyzer
        self._answerer = answerer
        self._narrator = narrator
        self._transcriber = transcriber
        self._language = language
        self._state = SessionState.IDLE
        self._frames: tuple[CapturedFrame, ...] = ()
        self._result: StructuredResult | None = None
        self._last_answer: QuestionAnswer | None = None
        self._question = ""
        self._asking = False
        self._mic_unavailable_reported = False
        # Bumped by _clear_scan; an analysis started under an older id is stale.
        self._scan_id = 0

        controller.on_capture = self._handle_capture
        controller.on_announce = self._announce_capture_cue

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def language(self) -> Language:
        return self._language

    @property
    def controller(self) -> CaptureController:
        return self._controller

    @property
    def scan_mode(self) -> ScanMode:
        return self._controller.mode

    @property
    def frames(self) -> tuple[CapturedFrame, ...]:
        """Frames of the product currently being analyzed or shown."""
        return self._frames

    @property
    def result(self) -> StructuredResult | None:
        return self._result

    @property
    def last_answer(self) -> QuestionAnswer | None:
        return self._last_answer

    @property
    def pending_question(self) -> str:
        return self._question

    @property
    def is_asking(self) -> bool:
        return self._asking

    async def start(self) -> bool:
        """Open the camera and announce that scanning can begin."""
        if self._state is not SessionState.IDLE:
            return True
        try:
            await self._controller.open()
        except CaptureError as e:
            logger.error("Camera could not be opened: %s", e)
            await self._narrator.announce(
                MessageKey.CAMERA_PERMISSION, self._language, kind=NarrationKind.ERROR
            )
            return False
        self._state = SessionState.CAMERA
        logger.info("Session started, camera ready")
        await self._narrator.announce(
            MessageKey.CAMERA_READY, self._language, kind=NarrationKind.READY
        )
        return True

    async def close(self) -> None:
        """Stop any capture, release the camera and silence speech."""
        await self._controller.close()
        await self._narrator.cancel()
        self._clear_scan()
        self._state = SessionState.IDLE
        logger.info("Session closed")

    async def set_language(self, language: Language) -> None:
        self._language = language
        logger.info("Language set to %s", language.value)
        await self._narrator.announce(
            MessageKey.LANGUAGE_SELECTED, language, kind=NarrationKind.ACTION
        )

    async def set_scan_mode(self, mode: ScanMode) -> bool:
        """Switch between Quick and Full scans; refused while capturing."""
        try:
            await self._controller.set_mode(mode)
        except CaptureError as e:
            logger.info("Scan mode change refused: %s", e)
            return False
        mode_name = message(
            MessageKey.QUICK_SCAN if mode is ScanMode.QUICK else MessageKey.FULL_SCAN,
            self._language,
        )
        await self._narrator.announce(MessageKey.MODE_CHANGED, self._language, suffix=mode_name)
        return True

    async def capture(self) -> bool:
        """Trigger a capture in the current scan mode.

        Returns False when the camera is not ready or a capture is
        already running.
        """
        if self._state is not SessionState.CAMERA:
            logger.info("Capture ignored in %s state", self._state.value)
            return False
        await self._narrator.cancel()
        return await self._controller.trigger()

    async def reset(self) -> None:
        """Discard the current result and get ready to scan again."""
        await self._narrator.cancel()
        self._clear_scan()
        if self._state is SessionState.IDLE:
            return
        self._state = SessionState.CAMERA
        await self._narrator.announce(
            MessageKey.CAMERA_READY, self._language, kind=NarrationKind.READY
        )

    async def stop_speaking(self) -> None:
        await self._narrator.cancel()

    def set_question(self, text: str) -> None:
        """Set the pending follow-up question (e.g. from a text field)."""
        self._question = text

    async def ask(self, question: str | None = None) -> QuestionAnswer | None:
        """Ask a follow-up question about the current result.

        Only the answer is narrated. The pending question is cleared
        whether or not an answer was obtained.

        Args:
            question: Question text; defaults to the pending question.

        Returns:
            The question and its answer, or None if nothing was asked or
            the question failed.
        """
        if self._state is not SessionState.RESULT or self._result is None:
            logger.info("Follow-up ignored in %s state", self._state.value)
            return None
        if self._asking:
            logger.info("Follow-up ignored, another question is in flight")
            return None
        text = (question if question is not None else self._question).strip()
        if not text:
            return None

        self._asking = True
        self._question = text
        language = self._language
        result = self._result
        try:
            await self._narrator.announce(MessageKey.THINKING, language, kind=NarrationKind.ACTION)
            answer = await self._answerer.ask(self._frames, result, text, language)
        except QAError as e:
            logger.warning("Follow-up failed (%s): %s", e.provider or "unknown", e)
            await self._narrator.announce(MessageKey.ASK_ERROR, language, kind=NarrationKind.ERROR)
            return None
        except Exception:
            logger.exception("Unexpected follow-up failure")
            await self._narrator.announce(MessageKey.ASK_ERROR, language, kind=NarrationKind.ERROR)
            return None
        finally:
            self._asking = False
            self._question = ""

        if self._result is not result:
            logger.info("Result changed while waiting for an answer, discarding it")
            return None
        qa = QuestionAnswer(question=text, answer=answer)
        self._last_answer = qa
        await self._narrator.narrate(build_answer_script(answer, language))
        return qa

    async def dictate(self) -> str | None:
        """Record a spoken question and make it the pending question."""
        if self._state is not SessionState.RESULT:
            logger.info("Dictation ignored in %s state", self._state.value)
            return None
        if self._transcriber is None:
            await self._report_mic_unavailable("no transcriber configured")
            return None

        await self._narrator.cancel()
        await self._narrator.cue(HapticPattern.TAP)
        try:
            transcript = await self._transcriber.transcribe(self._language)
        except CapabilityUnavailableError as e:
            await self._report_mic_unavailable(str(e))
            return None
        except TranscriptionError as e:
            logger.info("Dictation failed: %s", e)
            await self._narrator.cue(HapticPattern.ERROR)
            return None

        self._question = transcript
        await self._narrator.cue(HapticPattern.SUCCESS)
        return transcript

    async def _handle_capture(self, capture: CaptureResult) -> None:
        """Analyze a finished capture and narrate the outcome."""
        if self._state is not SessionState.CAMERA:
            logger.warning("Dropping capture delivered in %s state", self._state.value)
            return
        language = self._language
        self._clear_scan()
        scan_id = self._scan_id
        self._frames = capture.frames
        self._state = SessionState.ANALYZING
        logger.info("Analyzing %d frame(s) from %s scan", len(capture.frames), capture.mode.value)
        await self._narrator.announce(MessageKey.ANALYZING, language)

        try:
            analysis = await self._analyzer.analyze(capture.frames, language)
        except AnalysisError as e:
            logger.error("Analysis failed (%s): %s", e.provider or "unknown", e)
            await self._recover_from_analysis_failure(scan_id, language)
            return
        except Exception:
            logger.exception("Unexpected analysis failure")
            await self._recover_from_analysis_failure(scan_id, language)
            return

        if not self._is_current_analysis(scan_id):
            logger.info("Session left analysis before the result arrived, discarding it")
            return
        self._result = analysis
        self._state = SessionState.RESULT
        await self._narrator.narrate(build_result_script(analysis, language))

    def _is_current_analysis(self, scan_id: int) -> bool:
        return self._state is SessionState.ANALYZING and self._scan_id == scan_id

    async def _recover_from_analysis_failure(self, scan_id: int, language: Language) -> None:
        if not self._is_current_analysis(scan_id):
            logger.info("Analysis of an abandoned scan failed, ignoring it")
            return
        self._clear_scan()
        self._state = SessionState.CAMERA
        await self._narrator.announce(MessageKey.ANALYSIS_ERROR, language, kind=NarrationKind.ERROR)

    async def _announce_capture_cue(self, key: MessageKey) -> None:
        await self._narrator.announce(key, self._language)

    async def _report_mic_unavailable(self, reason: str) -> None:
        logger.warning("Voice input unavailable: %s", reason)
        if self._mic_unavailable_reported:
            await self._narrator.cue(HapticPattern.ERROR)
            return
        self._mic_unavailable_reported = True
        await self._narrator.announce(MessageKey.MIC_ERROR, self._language, kind=NarrationKind.ERROR)

    def _clear_scan(self) -> None:
        self._scan_id += 1
        self._frames = ()
        self._result = None
        self._last_answer = None
        self._question = ""
