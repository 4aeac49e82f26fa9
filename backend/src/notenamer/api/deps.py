"""FastAPI dependency injection functions."""

import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from notenamer.config import SettingsStore, get_data_dir
from notenamer.generation.orchestrator import NoteOrchestrator
from notenamer.generation.tags import TagGenerator
from notenamer.generation.title import TitleGenerator
from notenamer.llm.client import GeminiClient
from notenamer.notifications import NoticeLog
from notenamer.vault.store import VaultStore


def get_vault_path() -> Path:
    """Vault root from NOTENAMER_VAULT_PATH, defaulting to the working directory."""
    vault = os.getenv("NOTENAMER_VAULT_PATH")
    if vault:
        return Path(vault).resolve()
    return Path.cwd()


@lru_cache(maxsize=1)
def get_settings_store() -> SettingsStore:
    """Process-wide settings store."""
    return SettingsStore()


@lru_cache(maxsize=1)
def get_vault() -> VaultStore:
    """Process-wide vault store."""
    return VaultStore(get_vault_path())


@lru_cache(maxsize=1)
def get_llm_client() -> GeminiClient:
    """Process-wide Gemini client with query logging in the data directory."""
    return GeminiClient(log_path=get_data_dir() / "logs" / "llm-queries.jsonl")


def get_notice_log() -> NoticeLog:
    """Fresh notice collector for each request."""
    return NoticeLog()


def get_orchestrator(
    store: VaultStore = Depends(get_vault),
    notices: NoticeLog = Depends(get_notice_log),
    settings_store: SettingsStore = Depends(get_settings_store),
    llm_client: GeminiClient = Depends(get_llm_client),
) -> NoteOrchestrator:
    """Orchestrator wired to the request's notice log."""
    return NoteOrchestrator(
        store=store,
        notifier=notices,
        settings_provider=lambda: settings_store.settings,
        title_generator=TitleGenerator(llm_client),
        tag_generator=TagGenerator(llm_client),
    )


def reset_dependencies() -> None:
    """Clear cached dependencies (for testing)."""
    get_settings_store.cache_clear()
    get_vault.cache_clear()
    get_llm_client.cache_clear()
