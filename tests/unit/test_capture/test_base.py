"""Tests for the FrameSource abstract base class."""

from __future__ import annotations

import pytest

from labelreader.capture.base import CaptureError, FrameSource


class TestFrameSourceInterface:
    """Test that FrameSource defines the expected interface."""

    def test_cannot_instantiate_abstract_class(self) -> None:
        """FrameSource should not be instantiable directly."""
        with pytest.raises(TypeError):
            FrameSource()  # type: ignore[abstract]

    @pytest.mark.asyncio
    async def test_context_manager_opens_and_closes(self, frame_source) -> None:
        """The async context manager should open then close the source."""
        async with frame_source as source:
            assert source.is_open is True
        assert frame_source.is_open is False
        assert frame_source.close_calls == 1

    @pytest.mark.asyncio
    async def test_scripted_failure_raises_capture_error(self, make_frame_source) -> None:
        """A missing frame surfaces as CaptureError."""
        source = make_frame_source([None])
        await source.open()
        with pytest.raises(CaptureError):
            await source.capture_frame()
