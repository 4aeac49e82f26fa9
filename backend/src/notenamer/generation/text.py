"""Text cleanup for generated titles and tags.

Pure functions; none of them raise on ordinary string input.
"""

import re

from notenamer.constants.generation import RESERVED_TITLE_CHARS

_RESERVED_RE = re.compile("[" + re.escape(RESERVED_TITLE_CHARS) + "]")
_WHITESPACE_RE = re.compile(r"\s+")

# Opening delimiter, lazy block body, closing delimiter line, then at least one
# newline. A block closed without a trailing newline does not match.
FRONTMATTER_BLOCK_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def sanitize_title(title: str) -> str:
    """Make a generated title safe to use as a file name.

    Reserved filesystem characters become spaces, whitespace runs (including
    tabs and newlines) collapse to one space, and the result is trimmed.
    """
    sanitized = title.strip()
    sanitized = _RESERVED_RE.sub(" ", sanitized)
    sanitized = _WHITESPACE_RE.sub(" ", sanitized)
    return sanitized.strip()


def normalize_tag(tag: str) -> str:
    """Normalize a single tag; may return an empty string."""
    normalized = tag.strip()
    if normalized.startswith("#"):
        normalized = normalized[1:]
    normalized = normalized.lower()
    return _WHITESPACE_RE.sub("-", normalized)


def normalize_tags(tags: str | list[str]) -> list[str]:
    """Normalize a comma-separated tag string or a list of tags.

    Args:
        tags: Raw model output ("Tag1, #tag two") or a list of tag strings.

    Returns:
        Lowercase, hyphenated, non-empty tags without a leading '#', with
        duplicates removed in first-seen order.
    """
    candidates = tags.split(",") if isinstance(tags, str) else tags

    # dict preserves insertion order, so this de-duplicates stably
    seen: dict[str, None] = {}
    for candidate in candidates:
        tag = normalize_tag(candidate)
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


def truncate_content(content: str, max_length: int) -> str:
    """Return at most the first max_length characters of content."""
    if max_length <= 0:
        return ""
    return content[:max_length]


def remove_frontmatter(content: str) -> str:
    """Strip a leading YAML frontmatter block and trim what remains.

    Content without a complete block (opening line, closing line and a
    newline after it) is returned unchanged.
    """
    match = FRONTMATTER_BLOCK_RE.match(content)
    if not match:
        return content
    return content[match.end() :].strip()
