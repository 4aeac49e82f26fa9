"""Title and tag generation pipeline."""

from notenamer.generation.frontmatter import apply_tags, read_tags, tags_equal
from notenamer.generation.orchestrator import (
    ActionOutcome,
    ActionState,
    ActionStatus,
    NoteOrchestrator,
)
from notenamer.generation.tags import TagGenerator
from notenamer.generation.text import (
    normalize_tags,
    remove_frontmatter,
    sanitize_title,
    truncate_content,
)
from notenamer.generation.title import TitleGenerator

__all__ = [
    "ActionOutcome",
    "ActionState",
    "ActionStatus",
    "NoteOrchestrator",
    "TagGenerator",
    "TitleGenerator",
    "apply_tags",
    "normalize_tags",
    "read_tags",
    "remove_frontmatter",
    "sanitize_title",
    "tags_equal",
    "truncate_content",
]
