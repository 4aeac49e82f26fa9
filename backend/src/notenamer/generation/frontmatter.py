"""Reading and updating the YAML frontmatter of a note.

The frontmatter is a YAML mapping between two `---` lines at the very start
of a note. Only the `tags` key is ever changed; every other key is carried
through in its original order.

Two delimiter patterns are used:
- Reading is lenient: the closing `---` need not be followed by a newline.
- Writing is strict: the closing `---` line must end with a newline, the same
  rule remove_frontmatter() applies. A block that fails the strict match is
  left in place and a new block is written ahead of it.
"""

import logging
import re
from collections import Counter
from typing import Any, Iterable

import yaml

from notenamer.generation.text import FRONTMATTER_BLOCK_RE

logger = logging.getLogger(__name__)

# Same opening rule as FRONTMATTER_BLOCK_RE, but no newline required after
# the closing delimiter.
FRONTMATTER_READ_RE = re.compile(r"^---\s*\n(.*?)\n---", re.DOTALL)


class FrontmatterParseError(ValueError):
    """Raised when a frontmatter block is not a YAML mapping."""

    pass


def build_frontmatter(metadata: dict[str, Any]) -> str:
    """Serialize metadata as a frontmatter block.

    Args:
        metadata: Mapping to serialize; key order is preserved.

    Returns:
        Block starting with `---` and ending with `---` plus a newline.
    """
    body = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    ).strip()
    return f"---\n{body}\n---\n"


def load_frontmatter_yaml(block: str) -> dict[str, Any]:
    """Parse the text between the delimiters.

    An empty block is an empty mapping.

    Raises:
        FrontmatterParseError: If the YAML is invalid or not a mapping.
    """
    try:
        metadata = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontmatterParseError(f"Invalid YAML in frontmatter: {e}") from e

    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise FrontmatterParseError(
            f"Frontmatter must be a mapping, got {type(metadata).__name__}"
        )
    return metadata


def parse_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """Split a note into its frontmatter mapping and body.

    Uses the strict (write) delimiter rule.

    Args:
        content: Full note text.

    Returns:
        Tuple of (metadata, body). If there is no complete block, or the block
        does not parse, returns (None, content).
    """
    match = FRONTMATTER_BLOCK_RE.match(content)
    if not match:
        return None, content

    try:
        metadata = load_frontmatter_yaml(match.group(1))
    except FrontmatterParseError:
        return None, content

    return metadata, content[match.end() :]


def _coerce_tags(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(tag) for tag in value if tag is not None]
    if isinstance(value, str):
        return [value]
    return []


def read_tags(content: str) -> list[str]:
    """Return the tags currently stored in a note's frontmatter.

    A list value is returned as strings; a single string becomes a
    one-element list. A missing block, a missing `tags` key, or a block that
    does not parse all yield an empty list.
    """
    match = FRONTMATTER_READ_RE.match(content)
    if not match:
        return []

    try:
        metadata = load_frontmatter_yaml(match.group(1))
    except FrontmatterParseError as e:
        logger.debug(f"Ignoring unparsable frontmatter while reading tags: {e}")
        return []

    return _coerce_tags(metadata.get("tags"))


def apply_tags(content: str, tags: list[str]) -> str:
    """Return content with the frontmatter `tags` set to tags.

    - Existing, parsable block: only `tags` changes; the block is re-serialized
      and spliced back in place.
    - Existing block that does not parse: a new block holding only the tags is
      written ahead of the untouched original text.
    - No block: a new block is prepended.
    """
    match = FRONTMATTER_BLOCK_RE.match(content)
    if not match:
        return build_frontmatter({"tags": list(tags)}) + content

    try:
        metadata = load_frontmatter_yaml(match.group(1))
    except FrontmatterParseError as e:
        logger.warning(f"Existing frontmatter could not be parsed, writing a new block: {e}")
        return build_frontmatter({"tags": list(tags)}) + content

    metadata["tags"] = list(tags)
    return build_frontmatter(metadata) + content[match.end() :]


def tags_equal(left: Iterable[str], right: Iterable[str]) -> bool:
    """Order-independent, multiplicity-aware comparison of two tag lists."""
    return Counter(left) == Counter(right)
