"""Command-line interface for labelreader.

Provides the main entry point for running an interactive scanning
session, testing the camera, or narrating a saved analysis result.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from labelreader.domain.models import Language, ScanMode, StructuredResult
from labelreader.narration.messages import MessageKey, message

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

SCAN_HELP = """Commands:
  <Enter>          capture
  m quick|full     switch scan mode
  l en|hi          switch language
  a <question>     ask about the current item
  d                dictate a question
  s                stop speaking
  r                scan another item
  q                quit
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="labelreader",
        description="Spoken product label reader for visually impaired users",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/labelreader.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Run an interactive scanning session")
    scan_parser.add_argument(
        "--mode", choices=[m.value for m in ScanMode], default=None,
        help="Initial scan mode (default: from config)",
    )
    scan_parser.add_argument(
        "--language", choices=[lang.value for lang in Language], default=None,
        help="Initial language (default: from config)",
    )

    capture_parser = subparsers.add_parser("capture-test", help="Test webcam capture (saves a frame)")
    capture_parser.add_argument(
        "-o", "--output", type=Path, default=Path("capture_test.jpg"),
        help="Where to write the captured JPEG",
    )

    narrate_parser = subparsers.add_parser(
        "narrate",
        help="Print (and optionally speak) the narration for a saved result",
    )
    narrate_parser.add_argument("result_json", type=Path, help="JSON file with an analysis result")
    narrate_parser.add_argument(
        "--language", choices=[lang.value for lang in Language], default=None,
        help="Narration language (default: from config)",
    )
    narrate_parser.add_argument(
        "--speak", action="store_true",
        help="Speak the narration through the configured speech backend",
    )

    return parser.parse_args(argv)


def format_result_card(result: StructuredResult, language: Language) -> str:
    """Render a result as the text card shown alongside the narration."""

    def line(key: MessageKey, value: str | None) -> str:
        return f"  {message(key, language)}: {value or message(MessageKey.NONE, language)}"

    lines = [line(MessageKey.ITEM_LABEL, result.item_name)]
    if result.is_medicine:
        lines.append(line(MessageKey.CRITICAL_WARNING_LABEL, result.warnings))
        if result.quantity_estimate:
            lines.append(line(MessageKey.QUANTITY_ESTIMATE_LABEL, result.quantity_estimate))
    else:
        if result.visual_details:
            lines.append(line(MessageKey.VISUAL_DETAILS_LABEL, result.visual_details))
        if result.seal_status:
            lines.append(line(MessageKey.SEAL_STATUS_LABEL, result.seal_status))
    lines.append(line(MessageKey.EXPIRY_LABEL, result.expiry))
    lines.append(line(MessageKey.USAGE_LABEL, result.usage))
    if not result.is_medicine:
        lines.append(line(MessageKey.WARNINGS_LABEL, result.warnings))
    lines.append(line(MessageKey.INGREDIENTS_LABEL, result.ingredients))
    if result.confidence_score is not None:
        lines.append(f"  {message(MessageKey.CONFIDENCE_LABEL, language)}: {result.confidence_score:.0%}")
    return "\n".join(lines)


def _build_analyzer(settings):
    from labelreader.analyzer.openai import OpenAIAnalyzer

    api_key = settings.openai_api_key.get_secret_value()
    base_url = settings.analyzer.base_url
    # If OpenRouter key is set, use it
    or_key = settings.openrouter_api_key.get_secret_value()
    if or_key:
        api_key = or_key
        if not base_url:
            base_url = OPENROUTER_BASE_URL

    return OpenAIAnalyzer(
        api_key=api_key,
        model=settings.analyzer.model,
        base_url=base_url,
        max_tokens=settings.analyzer.max_tokens,
    )


def _build_speech(settings):
    from labelreader.feedback.silent import SilentSpeechOutput

    if settings.speech.backend == "pyttsx3":
        from labelreader.feedback.speech import Pyttsx3SpeechOutput

        return Pyttsx3SpeechOutput(rate=settings.speech.rate, volume=settings.speech.volume)
    return SilentSpeechOutput(echo=lambda text: print(f"  >> {text}"))


def _build_haptics(settings):
    from labelreader.feedback.silent import SilentHapticOutput

    if settings.haptics.backend == "http":
        from labelreader.feedback.haptics import HttpHapticOutput

        return HttpHapticOutput(
            base_url=settings.haptics.http_base_url,
            timeout=settings.haptics.http_timeout,
        )
    return SilentHapticOutput()


def _build_source(settings):
    from labelreader.capture.webcam import WebcamFrameSource

    resolution = None
    if settings.capture.resolution_width and settings.capture.resolution_height:
        resolution = (settings.capture.resolution_width, settings.capture.resolution_height)
    return WebcamFrameSource(
        device_index=settings.capture.device_index,
        resolution=resolution,
        jpeg_quality=settings.capture.jpeg_quality,
    )


async def _run_scan(settings, args) -> None:
    """Initialize all components and run an interactive session."""
    from labelreader.capture.controller import CaptureController
    from labelreader.narration.driver import NarrationDriver
    from labelreader.session.interaction import InteractionSession

    language = Language(args.language) if args.language else settings.language
    mode = ScanMode(args.mode) if args.mode else settings.capture.default_mode

    transcriber = None
    if settings.dictation.enabled:
        from labelreader.dictation.microphone import MicrophoneTranscriber

        transcriber = MicrophoneTranscriber(
            listen_timeout=settings.dictation.listen_timeout,
            phrase_time_limit=settings.dictation.phrase_time_limit,
        )

    analyzer = _build_analyzer(settings)
    speech = _build_speech(settings)
    haptics = _build_haptics(settings)

    async with speech, haptics:
        controller = CaptureController(
            source=_build_source(settings),
            haptics=haptics,
            mode=mode,
            window_ms=settings.capture.full_scan_window_ms,
            interval_ms=settings.capture.full_scan_interval_ms,
            on_progress=lambda p: print(f"\r  Scanning {p:.0%}", end="\n" if p >= 1.0 else "", flush=True),
        )
        session = InteractionSession(
            controller=controller,
            analyzer=analyzer,
            answerer=analyzer,
            narrator=NarrationDriver(speech, haptics),
            transcriber=transcriber,
            language=language,
        )
        if not await session.start():
            print(message(MessageKey.CAMERA_PERMISSION, session.language))
            return
        print(SCAN_HELP)
        try:
            await _scan_loop(session)
        finally:
            await session.close()


async def _scan_loop(session) -> None:
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            return
        command, _, rest = line.strip().partition(" ")
        rest = rest.strip()

        if command == "":
            if await session.capture():
                await session.controller.wait_idle()
                if session.result is not None:
                    print(format_result_card(session.result, session.language))
        elif command == "m" and rest in (ScanMode.QUICK.value, ScanMode.FULL.value):
            if not await session.set_scan_mode(ScanMode(rest)):
                print(f"  {message(MessageKey.MODE_LOCKED, session.language)}")
        elif command == "l" and rest in (Language.ENGLISH.value, Language.HINDI.value):
            await session.set_language(Language(rest))
        elif command == "a":
            qa = await session.ask(rest or None)
            if qa is not None:
                print(f"  {message(MessageKey.ANSWER_TITLE, session.language)}: {qa.answer}")
        elif command == "d":
            print(f"  {message(MessageKey.LISTENING, session.language)}")
            transcript = await session.dictate()
            if transcript:
                print(f"  ? {transcript}")
                qa = await session.ask()
                if qa is not None:
                    print(f"  {message(MessageKey.ANSWER_TITLE, session.language)}: {qa.answer}")
        elif command == "s":
            await session.stop_speaking()
        elif command == "r":
            await session.reset()
        elif command == "q":
            return
        else:
            print(SCAN_HELP)


async def _capture_test(settings, output: Path) -> None:
    """Capture a single frame and save it to a file."""
    source = _build_source(settings)
    async with source:
        frame = await source.capture_frame()
    output.write_bytes(frame.image)
    print(f"Saved frame to {output} ({len(frame.image)} bytes, {frame.media_type})")


async def _narrate(settings, args) -> None:
    """Print the narration for a saved result and optionally speak it."""
    from labelreader.analyzer.base import AnalysisError, structured_result_from_payload
    from labelreader.narration.builder import build_result_script

    language = Language(args.language) if args.language else settings.language
    raw = args.result_json.read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {args.result_json}: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    if not isinstance(data, dict):
        print(f"{args.result_json} does not contain a JSON object", file=sys.stderr)
        raise SystemExit(1)
    try:
        result = structured_result_from_payload(data, provider="file", raw_response=raw)
    except AnalysisError as e:
        print(f"Invalid result: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    script = build_result_script(result, language)
    print(format_result_card(result, language))
    print()
    for segment in script.segments:
        print(f"  - {segment}")

    if args.speak:
        speech = _build_speech(settings)
        async with speech:
            await speech.speak(script.text, language)
            while speech.is_speaking:
                await asyncio.sleep(0.1)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the labelreader CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from labelreader.config.settings import load_settings
    from labelreader.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "scan":
        logger.info("Starting scanning session")
        try:
            asyncio.run(_run_scan(settings, args))
        except KeyboardInterrupt:
            logger.info("Interrupted")

    elif args.command == "capture-test":
        logger.info("Running capture test")
        asyncio.run(_capture_test(settings, args.output))

    elif args.command == "narrate":
        asyncio.run(_narrate(settings, args))


if __name__ == "__main__":
    main()
