# backend/src/notenamer/generation/title.py
"""Title generator."""

import logging

from notenamer.config import Settings
from notenamer.constants.generation import TOP_K, TOP_P
from notenamer.constants.llm import GEMINI_MODEL
from notenamer.generation.prompts import get_title_prompt
from notenamer.generation.text import sanitize_title
from notenamer.llm.client import GeminiClient, GenerationParams

logger = logging.getLogger(__name__)


class TitleGenerator:
    """Generates a file-name-safe title for a note."""

    def __init__(self, llm_client: GeminiClient):
        self.llm_client = llm_client

    async def generate(self, content: str, settings: Settings) -> str:
        """Generate a title from the full note text.

        The model output is sanitized and, if still longer than
        max_title_length, cut at that length and right-trimmed.

        Raises:
            LLMError: Propagated unchanged from the client.
        """
        prompt = get_title_prompt(content, settings.max_title_length)
        params = GenerationParams(
            api_key=settings.api_key,
            model=GEMINI_MODEL,
            temperature=settings.title_temperature,
            top_k=TOP_K,
            top_p=TOP_P,
            max_output_tokens=settings.title_max_output_tokens,
        )

        generated = await self.llm_client.generate(prompt, params)
        title = sanitize_title(generated)

        if len(title) > settings.max_title_length:
            logger.debug(f"Truncating title of {len(title)} chars to {settings.max_title_length}")
            title = title[: settings.max_title_length].rstrip()

        return title
