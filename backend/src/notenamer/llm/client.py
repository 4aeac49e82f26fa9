# backend/src/notenamer/llm/client.py
"""Gemini generateContent client built on httpx."""

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import httpx

from notenamer.constants.llm import (
    GEMINI_BASE_URL,
    INITIAL_RETRY_DELAY,
    MAX_RETRIES,
    RATE_LIMIT_CODE,
    RATE_LIMIT_STATUS,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMConnectionError(LLMError):
    """Raised when the request never produced an HTTP response."""

    pass


class GeminiAPIError(LLMError):
    """Raised for a non-200 response from the Gemini API.

    Attributes:
        code: Numeric error code from the payload, or the HTTP status.
        status: Status keyword from the payload (e.g. RESOURCE_EXHAUSTED).
        detail: Service-provided explanation, or the raw response text.
    """

    def __init__(self, code: int, status: str, detail: str):
        self.code = code
        self.status = status
        self.detail = detail
        super().__init__(f"Gemini API error [{code} {status}]: {detail}")

    @property
    def is_rate_limited(self) -> bool:
        return self.code == RATE_LIMIT_CODE or self.status == RATE_LIMIT_STATUS


class LLMRateLimitError(LLMError):
    """Raised when every attempt was rate limited."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Gemini API rate limited after {attempts} attempts. Wait a moment and try again."
        )


class LLMResponseParseError(LLMError):
    """Raised when a successful response has no usable text."""

    pass


@dataclass(frozen=True)
class GenerationParams:
    """Per-call generation parameters."""

    api_key: str
    model: str
    temperature: float
    top_k: int
    top_p: float
    max_output_tokens: int


@dataclass(frozen=True)
class GenerationSuccess:
    text: str


@dataclass(frozen=True)
class GenerationEmpty:
    pass


@dataclass(frozen=True)
class GenerationMalformed:
    reason: str


GenerationResult = GenerationSuccess | GenerationEmpty | GenerationMalformed


def build_request_body(prompt: str, params: GenerationParams) -> dict[str, Any]:
    """Build the generateContent JSON body."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": params.temperature,
            "topK": params.top_k,
            "topP": params.top_p,
            "maxOutputTokens": params.max_output_tokens,
        },
    }


def parse_generation_response(payload: Any) -> GenerationResult:
    """Extract the first candidate's first text part.

    Args:
        payload: Decoded JSON body of a 200 response.

    Returns:
        GenerationSuccess with the stripped text, GenerationEmpty when the
        shape is right but the text is missing or blank, or
        GenerationMalformed naming the first level that is missing.
    """
    if not isinstance(payload, dict):
        return GenerationMalformed("response body is not an object")

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return GenerationMalformed("missing candidates")

    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    if not isinstance(content, dict):
        return GenerationMalformed("missing content")

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return GenerationMalformed("missing parts")

    text = parts[0].get("text")
    if text is None:
        return GenerationEmpty()
    if not isinstance(text, str):
        return GenerationMalformed("text part is not a string")

    text = text.strip()
    if not text:
        return GenerationEmpty()
    return GenerationSuccess(text)


def classify_error_response(status_code: int, body_text: str) -> GeminiAPIError:
    """Build a GeminiAPIError from a non-200 response.

    The structured `error` object is preferred; each missing field falls back
    to the raw body text, the HTTP status, or UNKNOWN.
    """
    error: dict[str, Any] = {}
    try:
        payload = json.loads(body_text)
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            error = payload["error"]
    except (json.JSONDecodeError, TypeError):
        pass

    code = error.get("code")
    if not isinstance(code, int) or isinstance(code, bool):
        code = status_code
    status = error.get("status") or "UNKNOWN"
    detail = error.get("message") or body_text
    return GeminiAPIError(code=code, status=str(status), detail=str(detail))


class GeminiClient:
    """Client for a single logical "generate text" operation.

    Rate-limited attempts are retried with exponential backoff; every other
    failure is raised on the first attempt.
    """

    def __init__(
        self,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        initial_retry_delay: float = INITIAL_RETRY_DELAY,
        log_path: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the client.

        Args:
            base_url: Models endpoint; the model id and method are appended.
            timeout: Per-request timeout in seconds.
            max_retries: Retries allowed after a rate-limited attempt.
            initial_retry_delay: Delay before the first retry, in seconds.
            log_path: Optional JSONL file that receives one entry per attempt.
            transport: Optional httpx transport (used by tests).
            sleep: Coroutine used to wait between attempts.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_retry_delay = initial_retry_delay
        self.log_path = log_path
        self._transport = transport
        self._sleep = sleep

    def _log_query(
        self,
        params: GenerationParams,
        prompt: str,
        attempt: int,
        status_code: int | None,
        response: str | None,
        duration_ms: int,
        error: str | None,
    ) -> None:
        """Append one attempt to the JSONL query log. Never logs the API key."""
        if not self.log_path:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "model": params.model,
            "attempt": attempt,
            "request": {
                "prompt_length": len(prompt),
                "temperature": params.temperature,
                "top_k": params.top_k,
                "top_p": params.top_p,
                "max_output_tokens": params.max_output_tokens,
            },
            "status_code": status_code,
            "response": response,
            "duration_ms": duration_ms,
            "error": error,
        }

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as e:
            logger.debug(f"Could not write LLM query log {self.log_path}: {e}")

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        """Generate text for a prompt.

        Args:
            prompt: Prompt text.
            params: Model, credential and sampling parameters.

        Returns:
            Generated text, stripped of surrounding whitespace.

        Raises:
            LLMRateLimitError: Every attempt was rate limited.
            GeminiAPIError: Any other non-200 response.
            LLMConnectionError: No HTTP response was received.
            LLMResponseParseError: A 200 response carried no usable text.
        """
        last_error: GeminiAPIError | None = None

        for attempt in range(self.max_retries + 1):
            try:
                return await self._generate_once(prompt, params, attempt)
            except GeminiAPIError as e:
                if not e.is_rate_limited:
                    raise
                last_error = e
                if attempt < self.max_retries:
                    delay = self.initial_retry_delay * (2**attempt)
                    logger.warning(
                        f"Gemini rate limited; retry {attempt + 1}/{self.max_retries} "
                        f"in {delay:.1f}s"
                    )
                    await self._sleep(delay)

        attempts = self.max_retries + 1
        logger.error(f"Gemini still rate limited after {attempts} attempts")
        raise LLMRateLimitError(attempts) from last_error

    async def _generate_once(self, prompt: str, params: GenerationParams, attempt: int) -> str:
        """Make one request and turn its outcome into text or an exception."""
        url = f"{self.base_url}/{params.model}:generateContent"
        body = build_request_body(prompt, params)

        label = f" (retry {attempt})" if attempt else ""
        logger.info(f"Gemini request{label}: model={params.model} prompt_length={len(prompt)}")

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
                response = await http.post(
                    url,
                    params={"key": params.api_key},
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            self._log_query(params, prompt, attempt, None, None, duration_ms, error=repr(e))
            logger.error(f"Gemini request failed without a response: {e!r}")
            raise LLMConnectionError(
                "A network error occurred. Check your connection and try again."
            ) from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"Gemini response: status={response.status_code} ({duration_ms} ms)")

        if response.status_code != 200:
            error = classify_error_response(response.status_code, response.text)
            self._log_query(
                params, prompt, attempt, response.status_code, None, duration_ms, error=str(error)
            )
            logger.error(f"Gemini error response: {error}")
            raise error

        try:
            payload = response.json()
        except ValueError:
            result: GenerationResult = GenerationMalformed("response body is not JSON")
        else:
            result = parse_generation_response(payload)

        if not isinstance(result, GenerationSuccess):
            reason = result.reason if isinstance(result, GenerationMalformed) else "empty text"
            self._log_query(
                params, prompt, attempt, response.status_code, None, duration_ms, error=reason
            )
            logger.error(f"Could not parse Gemini response: {reason}")
            raise LLMResponseParseError(
                f"Could not parse the response from the Gemini API ({reason})."
            )

        self._log_query(
            params, prompt, attempt, response.status_code, result.text, duration_ms, error=None
        )
        return result.text
