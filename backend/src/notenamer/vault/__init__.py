"""Document storage for notes."""

from notenamer.vault.store import (
    DocumentError,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentStore,
    InvalidDocumentPathError,
    VaultStore,
)

__all__ = [
    "DocumentError",
    "DocumentExistsError",
    "DocumentNotFoundError",
    "DocumentStore",
    "InvalidDocumentPathError",
    "VaultStore",
]
