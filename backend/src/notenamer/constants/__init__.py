"""Configuration constants.

Re-exports all constants for convenient importing:
    from notenamer.constants import GEMINI_MODEL, MAX_RETRIES
"""

from notenamer.constants.llm import *  # noqa: F403
from notenamer.constants.generation import *  # noqa: F403
from notenamer.constants.commands import *  # noqa: F403
