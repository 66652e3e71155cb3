"""Product analysis module for labelreader.

Provides provider-agnostic interfaces for sending product photos to a
multimodal model and receiving a structured description, plus follow-up
question answering about the same product.

Public API:
    Analyzer -- Abstract analysis interface
    QuestionAnswerer -- Abstract follow-up interface
    parse_structured_result -- Boundary parsing of raw model replies
    OpenAIAnalyzer -- OpenAI / OpenRouter implementation of both
"""

from labelreader.analyzer.base import (
    AnalysisError,
    Analyzer,
    QAError,
    QuestionAnswerer,
    parse_structured_result,
    structured_result_from_payload,
)

__all__ = [
    "AnalysisError",
    "Analyzer",
    "OpenAIAnalyzer",
    "QAError",
    "QuestionAnswerer",
    "parse_structured_result",
    "structured_result_from_payload",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "OpenAIAnalyzer":
        from labelreader.analyzer.openai import OpenAIAnalyzer
        return OpenAIAnalyzer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
