"""Commands the host application can offer to the user."""

from dataclasses import dataclass

from notenamer.config import Settings
from notenamer.constants.commands import COMMAND_GENERATE_TAGS, COMMAND_GENERATE_TITLE


@dataclass(frozen=True)
class Command:
    """A user-invocable action.

    Attributes:
        id: Stable command id.
        name: Display name.
        icon: Icon name for quick-action buttons.
        action: Orchestrator action the command runs ("title" or "tags").
    """

    id: str
    name: str
    icon: str
    action: str


COMMANDS: tuple[Command, ...] = (
    Command(
        id=COMMAND_GENERATE_TITLE,
        name="Generate title with AI",
        icon="heading",
        action="title",
    ),
    Command(
        id=COMMAND_GENERATE_TAGS,
        name="Generate tags with AI",
        icon="tag",
        action="tags",
    ),
)


def get_command(command_id: str) -> Command | None:
    for command in COMMANDS:
        if command.id == command_id:
            return command
    return None


def ribbon_commands(settings: Settings) -> list[Command]:
    """Commands to show as quick-action icons; none unless enabled."""
    if not settings.show_ribbon_icons:
        return []
    return list(COMMANDS)
