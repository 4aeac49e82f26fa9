"""Notes API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from notenamer.api.deps import get_notice_log, get_orchestrator, get_vault
from notenamer.api.schemas import ActionResponse, ActiveNote, NoteTags
from notenamer.generation.frontmatter import read_tags
from notenamer.generation.orchestrator import NoteOrchestrator
from notenamer.notifications import NoticeLog
from notenamer.vault.store import DocumentNotFoundError, InvalidDocumentPathError, VaultStore

router = APIRouter(prefix="/api/notes", tags=["notes"])


async def run_action(
    action: str, orchestrator: NoteOrchestrator, notices: NoticeLog
) -> ActionResponse:
    """Run a title or tag action and package its outcome."""
    if action == "title":
        outcome = await orchestrator.generate_title()
    elif action == "tags":
        outcome = await orchestrator.generate_tags()
    else:
        raise ValueError(f"Unknown action: {action}")
    return ActionResponse.from_outcome(outcome, notices.notices)


@router.get("/active", response_model=ActiveNote)
async def get_active_note(store: VaultStore = Depends(get_vault)) -> ActiveNote:
    """Get the active note, if any."""
    return ActiveNote(path=store.get_active())


@router.put("/active", response_model=ActiveNote)
async def set_active_note(data: ActiveNote, store: VaultStore = Depends(get_vault)) -> ActiveNote:
    """Select the note the title and tag actions operate on."""
    if not data.path:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Path is required")
    try:
        store.set_active(data.path)
    except InvalidDocumentPathError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ActiveNote(path=data.path)


@router.get("/tags", response_model=NoteTags)
async def get_note_tags(
    path: str = Query(..., description="Vault-relative note path"),
    store: VaultStore = Depends(get_vault),
) -> NoteTags:
    """Get the tags stored in a note's frontmatter."""
    try:
        content = store.read(path)
    except InvalidDocumentPathError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return NoteTags(path=path, tags=read_tags(content))


@router.post("/title", response_model=ActionResponse)
async def generate_title(
    orchestrator: NoteOrchestrator = Depends(get_orchestrator),
    notices: NoticeLog = Depends(get_notice_log),
) -> ActionResponse:
    """Generate a title for the active note and rename it.

    Failures are reported in the response body (status "failed"), not as
    HTTP errors.
    """
    return await run_action("title", orchestrator, notices)


@router.post("/tags", response_model=ActionResponse)
async def generate_tags(
    orchestrator: NoteOrchestrator = Depends(get_orchestrator),
    notices: NoticeLog = Depends(get_notice_log),
) -> ActionResponse:
    """Generate tags for the active note and update its frontmatter."""
    return await run_action("tags", orchestrator, notices)
