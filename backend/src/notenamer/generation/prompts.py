# backend/src/notenamer/generation/prompts.py
"""Prompt templates for title and tag generation."""

from dataclasses import dataclass
from typing import Any


@dataclass
class PromptTemplate:
    """A template for generating prompts with variable substitution."""

    template: str

    def render(self, **kwargs: Any) -> str:
        """Render the template with the given variables.

        Raises:
            KeyError: If a required variable is missing.
        """
        return self.template.format(**kwargs)


# =============================================================================
# Title Template
# =============================================================================

TITLE_TEMPLATE = PromptTemplate(
    """You are an editor. From the note below, write one short title that makes the note easy to find and reuse.

Requirements:
- At most {max_title_length} characters
- Include the core nouns of the content
- No symbols or emoji
- No generic prefixes such as "Memo", "Note" or "Diary"
- Use the same language as the note
- Output only the title text

Note:
{content}"""
)


# =============================================================================
# Tag Template
# =============================================================================

TAG_TEMPLATE = PromptTemplate(
    """Extract keywords from the Content below and turn them into tags.
Return only the tags as a comma-separated list, with no additional comments.
Join multi-word tags with hyphens.
Use the same language as the Content.

Content:
{content}"""
)


def get_title_prompt(content: str, max_title_length: int) -> str:
    """Build the title prompt for a full note."""
    return TITLE_TEMPLATE.render(content=content, max_title_length=max_title_length)


def get_tag_prompt(content: str) -> str:
    """Build the tag prompt for already-stripped, truncated body text."""
    return TAG_TEMPLATE.render(content=content)
