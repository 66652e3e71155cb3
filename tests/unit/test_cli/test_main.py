"""Tests for the command-line interface."""

from __future__ import annotations

import io
import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from labelreader.cli import _scan_loop, format_result_card, main, parse_args
from labelreader.domain.models import Language, ScanMode, StructuredResult


class TestParseArgs:
    def test_scan_options(self) -> None:
        args = parse_args(["-v", "scan", "--mode", "full", "--language", "hi"])
        assert args.verbose is True
        assert args.command == "scan"
        assert args.mode == "full"
        assert args.language == "hi"

    def test_rejects_unknown_language(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["scan", "--language", "fr"])

    def test_capture_test_output(self) -> None:
        args = parse_args(["capture-test", "-o", "frame.jpg"])
        assert str(args.output) == "frame.jpg"


class TestResultCard:
    def test_medicine_card(self, medicine_result: StructuredResult) -> None:
        card = format_result_card(medicine_result, Language.ENGLISH)
        assert "Item: Paracetamol 500mg" in card
        assert "CRITICAL WARNING: Do not exceed 8 tablets in 24 hours" in card
        assert "Quantity Estimate: About half the strip left" in card
        assert "Match: 90%" in card

    def test_item_card_shows_ingredients(self, food_result: StructuredResult) -> None:
        card = format_result_card(food_result, Language.ENGLISH)
        assert "Appearance: Red squeeze bottle" in card
        assert "Condition: Sealed" in card
        assert "Warnings: None" in card
        assert "Ingredients: Tomato, sugar, vinegar, salt" in card


class TestNarrateCommand:
    @pytest.fixture(autouse=True)
    def workdir(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        yield
        app_logger = logging.getLogger("labelreader")
        for handler in list(app_logger.handlers):
            app_logger.removeHandler(handler)

    def test_narrate_prints_segments(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "result.json"
        path.write_text(
            json.dumps({
                "item_name": "Cola",
                "expiry": "06/2026",
                "usage": "Serve chilled",
                "warnings": "None",
                "ingredients": "Water, sugar",
                "is_medicine": False,
                "seal_status": "Unknown",
            }),
            encoding="utf-8",
        )

        main(["narrate", str(path)])

        out = capsys.readouterr().out
        assert "  - Cola" in out
        assert "  - Warnings: None" in out
        assert "Condition" not in out

    def test_narrate_rejects_incomplete_result(self, tmp_path) -> None:
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"item_name": "Cola"}), encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["narrate", str(path)])


class TestScanLoop:
    @pytest.mark.asyncio
    async def test_refused_mode_switch_uses_session_language(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("m quick\nq\n"))
        session = MagicMock()
        session.language = Language.HINDI
        session.set_scan_mode = AsyncMock(return_value=False)

        await _scan_loop(session)

        session.set_scan_mode.assert_awaited_once_with(ScanMode.QUICK)
        assert "स्कैन के दौरान मोड नहीं बदल सकते।" in capsys.readouterr().out
