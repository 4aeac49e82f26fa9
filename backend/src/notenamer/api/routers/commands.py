"""Command API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from notenamer.api.deps import get_notice_log, get_orchestrator, get_settings_store
from notenamer.api.routers.notes import run_action
from notenamer.api.schemas import ActionResponse, CommandInfo
from notenamer.commands import COMMANDS, get_command, ribbon_commands
from notenamer.config import SettingsStore
from notenamer.generation.orchestrator import NoteOrchestrator
from notenamer.notifications import NoticeLog

router = APIRouter(prefix="/api/commands", tags=["commands"])


@router.get("", response_model=list[CommandInfo])
async def list_commands(
    settings_store: SettingsStore = Depends(get_settings_store),
) -> list[CommandInfo]:
    """List available commands and whether each gets a quick-action icon."""
    ribbon_ids = {c.id for c in ribbon_commands(settings_store.settings)}
    return [
        CommandInfo(
            id=c.id,
            name=c.name,
            icon=c.icon,
            action=c.action,
            ribbon=c.id in ribbon_ids,
        )
        for c in COMMANDS
    ]


@router.post("/{command_id}", response_model=ActionResponse)
async def run_command(
    command_id: str,
    orchestrator: NoteOrchestrator = Depends(get_orchestrator),
    notices: NoticeLog = Depends(get_notice_log),
) -> ActionResponse:
    """Run a command against the active note."""
    command = get_command(command_id)
    if command is None:
        raise HTTPException(status_code=404, detail="Command not found")
    return await run_action(command.action, orchestrator, notices)
