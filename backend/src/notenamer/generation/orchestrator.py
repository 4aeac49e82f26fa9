# backend/src/notenamer/generation/orchestrator.py
"""Orchestrator for the title and tag actions.

Each action runs one pass of a small state machine:

    idle -> validating -> generating -> idempotence-check -> applying | skipped -> idle

Validation fails closed before any remote call. Generation errors (already
retried inside the client where appropriate) end the action. Outcomes are
reported through the notifier; the orchestrator itself never raises.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from notenamer.config import Settings
from notenamer.generation.frontmatter import apply_tags, read_tags, tags_equal
from notenamer.generation.tags import TagGenerator
from notenamer.generation.title import TitleGenerator
from notenamer.notifications import Notifier
from notenamer.validation import validate_api_key, validate_content
from notenamer.vault.store import DocumentStore, document_stem, sibling_id

logger = logging.getLogger(__name__)

INVALID_API_KEY_MESSAGE = (
    "GEMINI_API_KEY is missing or invalid. Enter an API key in the settings."
)
NO_ACTIVE_NOTE_MESSAGE = "No active note. Open a note and try again."
EMPTY_NOTE_MESSAGE = "The note is empty. Write some text and try again."
EMPTY_TITLE_MESSAGE = "The generated title was empty after cleanup."
EMPTY_TAGS_MESSAGE = "No usable tags were generated."


class ActionState(Enum):
    """States of a single title or tag action."""

    IDLE = "idle"
    VALIDATING = "validating"
    GENERATING = "generating"
    IDEMPOTENCE_CHECK = "idempotence-check"
    APPLYING = "applying"
    SKIPPED = "skipped"


class ActionStatus(str, Enum):
    """How an action ended."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class ActionFailed(Exception):
    """Ends an action early with a user-facing message."""

    pass


@dataclass
class ActionOutcome:
    """Result of running an action.

    Attributes:
        action: "title" or "tags".
        status: How the action ended.
        message: The message reported to the user.
        document: Id of the note after the action (renamed id for titles).
        value: Generated title or tags, when generation succeeded.
        previous: Title or tags before the action.
        states: States visited, in order.
    """

    action: str
    status: ActionStatus
    message: str
    document: Optional[str] = None
    value: str | list[str] | None = None
    previous: str | list[str] | None = None
    states: list[ActionState] = field(default_factory=list)


class _Run:
    """Per-action bookkeeping shared by both actions."""

    def __init__(self, action: str):
        self.outcome = ActionOutcome(
            action=action, status=ActionStatus.FAILED, message="", states=[ActionState.IDLE]
        )

    def enter(self, state: ActionState) -> None:
        logger.debug(f"{self.outcome.action}: -> {state.value}")
        self.outcome.states.append(state)


class NoteOrchestrator:
    """Runs the title and tag actions against the active note."""

    def __init__(
        self,
        store: DocumentStore,
        notifier: Notifier,
        settings_provider: Callable[[], Settings],
        title_generator: TitleGenerator,
        tag_generator: TagGenerator,
    ):
        """Initialize the orchestrator.

        Args:
            store: Document storage collaborator.
            notifier: Where outcome messages are sent.
            settings_provider: Returns the settings to use; called once per action.
            title_generator: Generator for the title action.
            tag_generator: Generator for the tag action.
        """
        self.store = store
        self.notifier = notifier
        self.settings_provider = settings_provider
        self.title_generator = title_generator
        self.tag_generator = tag_generator

    def _validate(self, run: _Run, settings: Settings) -> tuple[str, str]:
        """Check preconditions and return (document id, content)."""
        run.enter(ActionState.VALIDATING)

        if not validate_api_key(settings.api_key):
            raise ActionFailed(INVALID_API_KEY_MESSAGE)

        doc_id = self.store.get_active()
        if doc_id is None:
            raise ActionFailed(NO_ACTIVE_NOTE_MESSAGE)
        run.outcome.document = doc_id

        content = self.store.read(doc_id)
        if not validate_content(content):
            raise ActionFailed(EMPTY_NOTE_MESSAGE)

        return doc_id, content

    def _succeed(self, run: _Run, settings: Settings, status: ActionStatus, message: str) -> None:
        run.outcome.status = status
        run.outcome.message = message
        if settings.enable_notifications:
            self.notifier.notify(message)

    def _fail(self, run: _Run, message: str) -> ActionOutcome:
        run.outcome.status = ActionStatus.FAILED
        run.outcome.message = message
        self.notifier.notify_error(message)
        return run.outcome

    def _finish(self, run: _Run) -> ActionOutcome:
        run.enter(ActionState.IDLE)
        logger.info(
            f"{run.outcome.action} action on {run.outcome.document}: "
            f"{run.outcome.status.value} ({run.outcome.message})"
        )
        return run.outcome

    async def generate_title(self) -> ActionOutcome:
        """Generate a title for the active note and rename it."""
        run = _Run("title")
        settings = self.settings_provider()
        try:
            doc_id, content = self._validate(run, settings)

            run.enter(ActionState.GENERATING)
            new_title = await self.title_generator.generate(content, settings)
            run.outcome.value = new_title
            if not new_title:
                raise ActionFailed(EMPTY_TITLE_MESSAGE)

            run.enter(ActionState.IDEMPOTENCE_CHECK)
            current_title = document_stem(doc_id)
            run.outcome.previous = current_title
            if current_title == new_title:
                run.enter(ActionState.SKIPPED)
                self._succeed(
                    run,
                    settings,
                    ActionStatus.UNCHANGED,
                    f"Title is already up to date: {new_title}",
                )
                return self._finish(run)

            run.enter(ActionState.APPLYING)
            new_id = sibling_id(doc_id, new_title)
            self.store.rename(doc_id, new_id)
            run.outcome.document = new_id
            self._succeed(
                run,
                settings,
                ActionStatus.UPDATED,
                f"Title updated: {current_title} -> {new_title}",
            )
        except ActionFailed as e:
            self._fail(run, str(e))
        except Exception as e:
            logger.exception("Title generation failed")
            self._fail(run, str(e) or "Title generation failed.")
        return self._finish(run)

    async def generate_tags(self) -> ActionOutcome:
        """Generate tags for the active note and write them to its frontmatter."""
        run = _Run("tags")
        settings = self.settings_provider()
        try:
            doc_id, content = self._validate(run, settings)

            run.enter(ActionState.GENERATING)
            new_tags = await self.tag_generator.generate(content, settings)
            run.outcome.value = new_tags
            if not new_tags:
                raise ActionFailed(EMPTY_TAGS_MESSAGE)

            run.enter(ActionState.IDEMPOTENCE_CHECK)
            # Re-read: the note may have changed while the request was in flight
            current = self.store.read(doc_id)
            current_tags = read_tags(current)
            run.outcome.previous = current_tags
            joined = ", ".join(new_tags)
            if tags_equal(current_tags, new_tags):
                run.enter(ActionState.SKIPPED)
                self._succeed(
                    run, settings, ActionStatus.UNCHANGED, f"Tags are already up to date: {joined}"
                )
                return self._finish(run)

            run.enter(ActionState.APPLYING)
            self.store.write(doc_id, apply_tags(current, new_tags))
            self._succeed(run, settings, ActionStatus.UPDATED, f"Tags updated: {joined}")
        except ActionFailed as e:
            self._fail(run, str(e))
        except Exception as e:
            logger.exception("Tag generation failed")
            self._fail(run, str(e) or "Tag generation failed.")
        return self._finish(run)
