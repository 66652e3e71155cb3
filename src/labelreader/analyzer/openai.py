"""OpenAI-compatible analysis provider.

Works with OpenAI, OpenRouter, and any OpenAI-compatible API
by setting a custom base_url.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from labelreader.analyzer.base import (
    ANALYSIS_PROMPT,
    QUESTION_PROMPT,
    AnalysisError,
    Analyzer,
    QAError,
    QuestionAnswerer,
    parse_structured_result,
)
from labelreader.domain.models import CapturedFrame, Language, StructuredResult

logger = logging.getLogger(__name__)


class OpenAIAnalyzer(Analyzer, QuestionAnswerer):
    """Analyzes products and answers questions with a vision chat model."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._max_tokens = max_tokens
        self._client = None

    @property
    def model(self) -> str:
        return self._model

    async def _ensure_client(self) -> None:
        """Lazily initialize the OpenAI async client."""
        if self._client is not None:
            return
        from openai import AsyncOpenAI
        kwargs = {"api_key": self._api_key}
        if self._base_url:
            kwargs["base_url"] = self._base_url
        self._client = AsyncOpenAI(**kwargs)
        logger.info("Initialized OpenAI client (model=%s, base_url=%s)", self._model, self._base_url)

    async def analyze(self, frames: Sequence[CapturedFrame], language: Language) -> StructuredResult:
        """Describe the product shown in ``frames``."""
        if not frames:
            raise AnalysisError("No frames to analyze", provider="openai")

        messages = [
            {"role": "system", "content": ANALYSIS_PROMPT.format(language=language.display_name)},
            {
                "role": "user",
                "content": [
                    *self._image_parts(frames),
                    {
                        "type": "text",
                        "text": f"Analyze this product. Output the content in {language.display_name}.",
                    },
                ],
            },
        ]

        try:
            await self._ensure_client()
            response = await self._client.chat.completions.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=messages,
                response_format={"type": "json_object"},
            )
            raw_text = response.choices[0].message.content or ""
        except Exception as e:
            raise AnalysisError(f"OpenAI API call failed: {e}", provider="openai") from e

        logger.debug("Analysis raw response: %s", raw_text[:200])
        result = parse_structured_result(raw_text, provider="openai")
        logger.info(
            "Analyzed %d frame(s): %s (medicine=%s, confidence=%s)",
            len(frames),
            result.item_name,
            result.is_medicine,
            result.confidence_score,
        )
        return result

    async def ask(
        self,
        frames: Sequence[CapturedFrame],
        result: StructuredResult,
        question: str,
        language: Language,
    ) -> str:
        """Answer a follow-up question about an analyzed product."""
        context = json.dumps(result.model_dump(), ensure_ascii=False)
        messages = [
            {
                "role": "system",
                "content": QUESTION_PROMPT.format(result=context, language=language.display_name),
            },
            {
                "role": "user",
                "content": [
                    *self._image_parts(frames),
                    {"type": "text", "text": f"Question: {question}"},
                ],
            },
        ]

        try:
            await self._ensure_client()
            response = await self._client.chat.completions.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=messages,
            )
            answer = (response.choices[0].message.content or "").strip()
        except Exception as e:
            raise QAError(f"OpenAI API call failed: {e}", provider="openai") from e

        if not answer:
            raise QAError("Empty answer from analysis service", provider="openai")
        logger.debug("Answer: %s", answer[:200])
        return answer

    @staticmethod
    def _image_parts(frames: Sequence[CapturedFrame]) -> list[dict]:
        return [
            {
                "type": "image_url",
                "image_url": {
                    "url": f"data:{frame.media_type};base64,{frame.to_base64()}",
                    "detail": "high",
                },
            }
            for frame in frames
        ]
