# backend/src/notenamer/llm/__init__.py
"""Gemini client abstraction."""

from notenamer.llm.client import (
    GeminiAPIError,
    GeminiClient,
    GenerationEmpty,
    GenerationMalformed,
    GenerationParams,
    GenerationResult,
    GenerationSuccess,
    LLMConnectionError,
    LLMError,
    LLMRateLimitError,
    LLMResponseParseError,
    parse_generation_response,
)

__all__ = [
    "GeminiAPIError",
    "GeminiClient",
    "GenerationEmpty",
    "GenerationMalformed",
    "GenerationParams",
    "GenerationResult",
    "GenerationSuccess",
    "LLMConnectionError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseParseError",
    "parse_generation_response",
]
