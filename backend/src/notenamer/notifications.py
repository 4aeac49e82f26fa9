"""Notification sink used to report outcomes to the user."""

import logging
from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

NoticeLevel = Literal["info", "error"]


@runtime_checkable
class Notifier(Protocol):
    """User-facing message channel."""

    def notify(self, message: str) -> None: ...

    def notify_error(self, message: str) -> None: ...


@dataclass
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class NoticeLog:
    """Notifier that keeps notices in memory and mirrors them to the log.

    One instance is created per request so the API can return the notices
    raised while handling it.
    """

    notices: list[Notice] = field(default_factory=list)

    def notify(self, message: str) -> None:
        logger.info(f"Notice: {message}")
        self.notices.append(Notice(level="info", message=message))

    def notify_error(self, message: str) -> None:
        logger.warning(f"Error notice: {message}")
        self.notices.append(Notice(level="error", message=message))
