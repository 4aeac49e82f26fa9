"""Filesystem-backed document store.

Documents are Markdown files under a vault root. A document id is its POSIX
path relative to the root, e.g. "projects/Weekly sync.md".
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol, runtime_checkable

from notenamer.constants.generation import NOTE_EXTENSION
from notenamer.state import get_app_state

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Base exception for document store errors."""

    pass


class DocumentNotFoundError(DocumentError):
    """Raised when a document id does not name an existing note."""

    pass


class DocumentExistsError(DocumentError):
    """Raised when a rename would overwrite a different document."""

    pass


class InvalidDocumentPathError(DocumentError):
    """Raised when a document id escapes the vault or is not a note."""

    pass


@runtime_checkable
class DocumentStore(Protocol):
    """What the orchestrator needs from the host's document storage."""

    def read(self, doc_id: str) -> str: ...

    def write(self, doc_id: str, text: str) -> None: ...

    def rename(self, doc_id: str, new_id: str) -> None: ...

    def get_active(self) -> Optional[str]: ...


def document_stem(doc_id: str) -> str:
    """Title part of a document id (file name without extension)."""
    return PurePosixPath(doc_id).stem


def sibling_id(doc_id: str, title: str) -> str:
    """Id for a document titled `title` in the same folder as doc_id."""
    parent = PurePosixPath(doc_id).parent
    return str(parent / f"{title}{NOTE_EXTENSION}")


class VaultStore:
    """DocumentStore over a directory of Markdown files."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def _resolve(self, doc_id: str) -> Path:
        """Map an id to a path inside the vault.

        Raises:
            InvalidDocumentPathError: If the id is absolute, escapes the
                vault (directly or through a symlink), or is not a .md file.
        """
        if not doc_id or PurePosixPath(doc_id).is_absolute():
            raise InvalidDocumentPathError(f"Invalid document path: {doc_id!r}")
        if PurePosixPath(doc_id).suffix.lower() != NOTE_EXTENSION:
            raise InvalidDocumentPathError(f"Not a Markdown note: {doc_id!r}")

        try:
            path = (self.root / doc_id).resolve()
        except (ValueError, OSError) as e:
            raise InvalidDocumentPathError(f"Invalid document path: {doc_id!r}") from e

        try:
            path.relative_to(self.root)
        except ValueError as e:
            raise InvalidDocumentPathError(f"Path is outside the vault: {doc_id!r}") from e
        return path

    def exists(self, doc_id: str) -> bool:
        try:
            return self._resolve(doc_id).is_file()
        except InvalidDocumentPathError:
            return False

    def read(self, doc_id: str) -> str:
        path = self._resolve(doc_id)
        if not path.is_file():
            raise DocumentNotFoundError(f"Note not found: {doc_id}")
        return path.read_text(encoding="utf-8")

    def write(self, doc_id: str, text: str) -> None:
        path = self._resolve(doc_id)
        if not path.is_file():
            raise DocumentNotFoundError(f"Note not found: {doc_id}")
        path.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {doc_id} ({len(text)} chars)")

    def rename(self, doc_id: str, new_id: str) -> None:
        """Rename a note, refusing to replace a different existing note.

        The new name is claimed with a hard link before the old name is
        removed, so an existing file at new_id is never overwritten, even one
        created while the rename is under way. A rename that only changes
        case on a case-insensitive filesystem resolves to the same file and
        is a plain rename. The active note follows the rename.

        Raises:
            DocumentNotFoundError: If doc_id does not exist.
            DocumentExistsError: If new_id names another existing file.
        """
        source = self._resolve(doc_id)
        target = self._resolve(new_id)
        if not source.is_file():
            raise DocumentNotFoundError(f"Note not found: {doc_id}")

        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists() and target.samefile(source):
            source.rename(target)
        else:
            try:
                os.link(source, target)
            except FileExistsError as e:
                raise DocumentExistsError(f"A note named {new_id!r} already exists") from e
            source.unlink()
        logger.info(f"Renamed {doc_id} -> {new_id}")

        get_app_state().follow_rename(doc_id, new_id)

    def get_active(self) -> Optional[str]:
        """Return the active note id, or None if unset or since deleted.

        A selection whose note no longer exists is cleared.
        """
        state = get_app_state()
        doc_id = state.active_document
        if doc_id is None:
            return None
        if not self.exists(doc_id):
            state.forget(doc_id)
            return None
        return doc_id

    def set_active(self, doc_id: str) -> None:
        """Make doc_id the active note.

        Raises:
            DocumentNotFoundError: If doc_id does not exist.
        """
        if not self._resolve(doc_id).is_file():
            raise DocumentNotFoundError(f"Note not found: {doc_id}")
        get_app_state().select(doc_id)
