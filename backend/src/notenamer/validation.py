"""Input validation helpers."""

import re
from typing import Optional

# Gemini keys start with "AI" followed by 18+ URL-safe characters. This is an
# advisory check; the API itself decides whether a key is valid.
API_KEY_PATTERN = re.compile(r"^AI[A-Za-z0-9_-]{18,}$")


def validate_api_key(api_key: Optional[str]) -> bool:
    """Return True if the key looks like a Gemini API key."""
    if not api_key or not api_key.strip():
        return False
    return API_KEY_PATTERN.fullmatch(api_key) is not None


def validate_content(content: Optional[str]) -> bool:
    """Return True if content has at least one non-whitespace character."""
    if not content:
        return False
    return bool(content.strip())
