# backend/src/notenamer/generation/tags.py
"""Tag generator."""

from notenamer.config import Settings
from notenamer.constants.generation import TOP_K, TOP_P
from notenamer.constants.llm import GEMINI_MODEL
from notenamer.generation.prompts import get_tag_prompt
from notenamer.generation.text import normalize_tags, remove_frontmatter, truncate_content
from notenamer.llm.client import GeminiClient, GenerationParams


class TagGenerator:
    """Generates a normalized tag set from a note's body.

    The frontmatter is removed first so existing metadata never feeds back
    into the suggested tags, and the body is cut to max_content_length.
    """

    def __init__(self, llm_client: GeminiClient):
        self.llm_client = llm_client

    async def generate(self, content: str, settings: Settings) -> list[str]:
        """Generate tags for a note.

        Args:
            content: Full note text, frontmatter included.
            settings: Current settings.

        Returns:
            Normalized, de-duplicated tags in the order the model gave them.
        """
        body = remove_frontmatter(content)
        truncated = truncate_content(body, settings.max_content_length)

        params = GenerationParams(
            api_key=settings.api_key,
            model=GEMINI_MODEL,
            temperature=settings.tag_temperature,
            top_k=TOP_K,
            top_p=TOP_P,
            max_output_tokens=settings.tag_max_output_tokens,
        )

        generated = await self.llm_client.generate(get_tag_prompt(truncated), params)
        return normalize_tags(generated)
