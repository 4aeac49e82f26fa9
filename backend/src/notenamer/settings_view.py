"""Headless controller for the settings form.

This is the model a host UI binds its settings form to; the HTTP API has no
form and reports the same advisory check synchronously through
api_key_feedback().

The form persists every credential edit immediately and shows format
feedback after a short debounce. Pending callbacks are owned handles: they
are cancelled whenever the form is redrawn or hidden, and each callback also
checks the `mounted` flag before touching form state, so a callback that
slips past cancellation does nothing.
"""

import asyncio
import logging
from typing import Optional

from notenamer.config import SettingsStore
from notenamer.constants.generation import VALIDATION_DEBOUNCE_SECONDS
from notenamer.validation import validate_api_key

logger = logging.getLogger(__name__)

API_KEY_FORMAT_WARNING = (
    'The API key format may be invalid (it should start with "AI" and be at '
    "least 20 characters long)."
)


def api_key_feedback(value: str) -> Optional[str]:
    """Advisory warning for a credential, or None if it looks fine or is empty."""
    if value and not validate_api_key(value):
        return API_KEY_FORMAT_WARNING
    return None


class SettingsView:
    """State behind the settings form: credential feedback and timers."""

    def __init__(
        self,
        store: SettingsStore,
        debounce_seconds: float = VALIDATION_DEBOUNCE_SECONDS,
    ) -> None:
        self.store = store
        self.debounce_seconds = debounce_seconds
        self.mounted = False
        self.validation_message: Optional[str] = None
        self._validation_handle: Optional[asyncio.TimerHandle] = None

    @property
    def has_pending_validation(self) -> bool:
        return self._validation_handle is not None

    def display(self) -> None:
        """(Re)draw the form. Drops anything left from a previous display."""
        self.cancel_all()
        self.validation_message = None
        self.mounted = True

    def hide(self) -> None:
        """Tear the form down."""
        self.mounted = False
        self.cancel_all()

    def cancel_all(self) -> None:
        """Cancel pending callbacks. Safe to call any number of times."""
        if self._validation_handle is not None:
            self._validation_handle.cancel()
            self._validation_handle = None

    def on_api_key_change(self, value: str) -> None:
        """Persist a new key and schedule format feedback.

        Must be called from a running event loop.
        """
        self.store.update(api_key=value)

        self.cancel_all()
        loop = asyncio.get_running_loop()
        self._validation_handle = loop.call_later(
            self.debounce_seconds, self._run_validation, value
        )

    def _run_validation(self, value: str) -> None:
        self._validation_handle = None
        if not self.mounted:
            logger.debug("Settings form closed; skipping API key feedback")
            return

        self.validation_message = api_key_feedback(value)
