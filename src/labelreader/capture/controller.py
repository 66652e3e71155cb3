"""Capture state machine driving a frame source in Quick or Full mode.

Quick mode grabs one frame per trigger. Full mode samples the camera on
a recurring timer for a fixed window while the user rotates the product,
then delivers every frame collected. The controller owns the frame
source for its whole lifetime and releases it on ``close()``.
"""

from __future__ import annotations

import logging
import math
from typing import Awaitable, Callable

from labelreader.capture.base import CaptureError, FrameSource
from labelreader.capture.timer import RecurringTimer
from labelreader.domain.models import (
    CapturedFrame,
    CaptureResult,
    CaptureSession,
    CaptureState,
    HapticPattern,
    ScanMode,
)
from labelreader.feedback.base import HapticOutput
from labelreader.narration.messages import MessageKey

logger = logging.getLogger(__name__)

CaptureCallback = Callable[[CaptureResult], Awaitable[None]]
AnnounceCallback = Callable[[MessageKey], Awaitable[None]]
ProgressCallback = Callable[[float], None]


class CaptureController:
    """Owns the capture state machine.

    ``Idle -> Armed -> (QuickCapturing | FullCapturing) -> Idle``

    Results are delivered through ``on_capture``; spoken cues go through
    ``on_announce`` and Full-mode progress through ``on_progress``. All
    three are optional and may be assigned after construction.
    """

    def __init__(
        self,
        source: FrameSource,
        haptics: HapticOutput,
        mode: ScanMode = ScanMode.QUICK,
        window_ms: int = 4000,
        interval_ms: int = 600,
        on_capture: CaptureCallback | None = None,
        on_announce: AnnounceCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        if window_ms <= 0 or interval_ms <= 0:
            raise ValueError("window_ms and interval_ms must be > 0")
        self._source = source
        self._haptics = haptics
        self._mode = mode
        self._window_ms = window_ms
        self._interval_ms = interval_ms
        self.on_capture = on_capture
        self.on_announce = on_announce
        self.on_progress = on_progress
        self._state = CaptureState.IDLE
        self._session: CaptureSession | None = None
        self._timer: RecurringTimer | None = None

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def mode(self) -> ScanMode:
        return self._mode

    @property
    def session(self) -> CaptureSession | None:
        """The active capture session, or None while idle."""
        return self._session

    @property
    def progress(self) -> float:
        """Progress of the active Full scan in [0, 1]; 0 when idle."""
        return self._session.progress if self._session is not None else 0.0

    @property
    def can_switch_mode(self) -> bool:
        return self._state is CaptureState.IDLE

    @property
    def max_frames(self) -> int:
        """Upper bound on the frames a Full scan can collect."""
        return math.ceil(self._window_ms / self._interval_ms)

    @property
    def source(self) -> FrameSource:
        return self._source

    async def open(self) -> None:
        """Open the underlying frame source.

        Raises:
            CaptureError: If the device cannot be opened.
        """
        await self._source.open()

    async def close(self) -> None:
        """Cancel any capture in progress and release the frame source.

        A Full scan interrupted here delivers no result.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._session is not None:
            logger.info(
                "Capture cancelled during %s (%d frames discarded)",
                self._state.value,
                len(self._session.frames),
            )
        self._session = None
        self._state = CaptureState.IDLE
        await self._source.close()

    async def set_mode(self, mode: ScanMode) -> None:
        """Switch scan mode. Only allowed while idle.

        Raises:
            CaptureError: If a capture is in progress.
        """
        if not self.can_switch_mode:
            raise CaptureError(f"Cannot switch scan mode while {self._state.value}")
        self._mode = mode
        logger.info("Scan mode set to %s", mode.value)
        await self._haptics.vibrate(HapticPattern.TAP)

    async def trigger(self) -> bool:
        """Start a capture in the current mode.

        Returns False, without touching the active session, when a
        capture is already in progress.
        """
        if self._state is not CaptureState.IDLE:
            logger.info("Capture trigger ignored while %s", self._state.value)
            return False
        self._state = CaptureState.ARMED
        if self._mode is ScanMode.QUICK:
            await self._run_quick()
        else:
            await self._start_full()
        return True

    async def wait_idle(self) -> None:
        """Wait for a running Full scan to finish or be cancelled."""
        timer = self._timer
        if timer is not None:
            await timer.wait()

    async def _run_quick(self) -> None:
        session = CaptureSession(mode=ScanMode.QUICK)
        self._session = session
        self._state = CaptureState.QUICK_CAPTURING
        try:
            await self._haptics.vibrate(HapticPattern.TAP)
            frame = await self._grab()
        finally:
            cancelled = self._session is not session
            if not cancelled:
                self._session = None
                self._state = CaptureState.IDLE
        if cancelled:
            return
        if frame is None:
            logger.info("Quick scan produced no frame, nothing to analyze")
            return
        session.frames.append(frame)
        session.progress = 1.0
        session.terminal = True
        await self._deliver(CaptureResult(mode=ScanMode.QUICK, frames=(frame,)))

    async def _start_full(self) -> None:
        session = CaptureSession(mode=ScanMode.FULL)
        self._session = session
        self._state = CaptureState.FULL_CAPTURING
        self._timer = RecurringTimer(
            self._interval_ms / 1000.0,
            lambda: self._on_tick(session),
            name="full-scan",
        )
        self._timer.start()
        logger.info(
            "Full scan started (window=%dms, interval=%dms)",
            self._window_ms,
            self._interval_ms,
        )
        self._report_progress(0.0)
        await self._haptics.vibrate(HapticPattern.TAP)
        await self._announce(MessageKey.ROTATE_INSTRUCTION)

    async def _on_tick(self, session: CaptureSession) -> None:
        if self._session is not session:
            return
        session.elapsed_ms += self._interval_ms
        session.progress = min(session.elapsed_ms / self._window_ms, 1.0)
        self._report_progress(session.progress)

        frame = await self._grab()
        if self._session is not session:
            return
        if frame is not None:
            session.frames.append(frame)
        logger.debug(
            "Full scan tick at %dms: %d frames, progress %.2f",
            session.elapsed_ms,
            len(session.frames),
            session.progress,
        )
        await self._haptics.vibrate(HapticPattern.RECORDING)

        if session.elapsed_ms >= self._window_ms:
            await self._finish_full(session)

    async def _finish_full(self, session: CaptureSession) -> None:
        session.terminal = True
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self._session = None
        self._state = CaptureState.IDLE
        logger.info(
            "Full scan complete: %d of %d frames",
            len(session.frames),
            self.max_frames,
        )
        await self._haptics.vibrate(HapticPattern.SUCCESS)
        await self._announce(MessageKey.SCAN_COMPLETE)
        if not session.frames:
            logger.warning("Full scan collected no frames, nothing to analyze")
            return
        await self._deliver(CaptureResult(mode=ScanMode.FULL, frames=tuple(session.frames)))

    async def _grab(self) -> CapturedFrame | None:
        """Take one frame; a failed grab is not fatal to the capture."""
        if not self._source.is_open:
            logger.debug("Frame source is not open, skipping frame")
            return None
        try:
            return await self._source.capture_frame()
        except CaptureError as e:
            logger.debug("Frame capture failed: %s", e)
            return None

    async def _deliver(self, result: CaptureResult) -> None:
        if self.on_capture is None:
            logger.warning("Capture finished with no on_capture handler, dropping %d frames", len(result.frames))
            return
        await self.on_capture(result)

    async def _announce(self, key: MessageKey) -> None:
        if self.on_announce is not None:
            await self.on_announce(key)

    def _report_progress(self, progress: float) -> None:
        if self.on_progress is not None:
            self.on_progress(progress)
