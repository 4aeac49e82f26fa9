"""Process-wide record of the note the title and tag actions work on.

The host selects a note once and then runs actions against it, so the
selection has to survive across requests. Renames made by the title action
carry the selection along; a note that disappears from the vault drops it.
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class AppState:
    """Application state singleton."""

    _instance: Optional["AppState"] = None

    def __new__(cls) -> "AppState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._active_document = None
        return cls._instance

    @property
    def active_document(self) -> Optional[str]:
        """Vault-relative id of the active note, or None."""
        return self._active_document

    def select(self, doc_id: str) -> None:
        if doc_id != self._active_document:
            logger.info(f"Active note: {doc_id}")
        self._active_document = doc_id

    def follow_rename(self, old_id: str, new_id: str) -> bool:
        """Point the selection at new_id if it was on old_id.

        Returns:
            True if the active note was the one renamed.
        """
        if self._active_document != old_id:
            return False
        self._active_document = new_id
        return True

    def forget(self, doc_id: str) -> None:
        """Drop the selection if it names doc_id (e.g. the note was deleted)."""
        if self._active_document == doc_id:
            logger.info(f"Active note {doc_id} no longer exists; clearing selection")
            self._active_document = None


def get_app_state() -> AppState:
    """Get the application state singleton."""
    return AppState()


def reset_app_state() -> None:
    """Reset the application state (for testing)."""
    AppState._instance = None
