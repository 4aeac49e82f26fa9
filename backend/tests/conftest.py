"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from notenamer.api.deps import get_llm_client, reset_dependencies
from notenamer.config import Settings
from notenamer.main import app
from notenamer.state import reset_app_state

VALID_API_KEY = "AIzaSyD-test_key_1234567890"


@pytest.fixture(autouse=True)
def clean_app_state(monkeypatch):
    """Reset the active-note singleton and keep tests off the real API key."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    reset_app_state()
    yield
    reset_app_state()


@pytest.fixture
def settings() -> Settings:
    """Settings with a well-formed API key and default limits."""
    return Settings(api_key=VALID_API_KEY)


@pytest.fixture
def vault_path(tmp_path) -> Path:
    """Empty vault directory."""
    vault = tmp_path / "vault"
    vault.mkdir()
    return vault


class FakeLLMClient:
    """Stands in for GeminiClient; returns queued responses or raises queued errors."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def generate(self, prompt, params):
        self.calls.append((prompt, params))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_llm():
    """Factory for FakeLLMClient instances."""
    return FakeLLMClient


# =============================================================================
# API fixtures
# =============================================================================


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point NOTENAMER_DATA_DIR at a temporary directory."""
    directory = tmp_path / ".notenamer"
    directory.mkdir()
    monkeypatch.setenv("NOTENAMER_DATA_DIR", str(directory))
    return directory


@pytest.fixture
def vault(vault_path, monkeypatch):
    """Point NOTENAMER_VAULT_PATH at an empty vault."""
    monkeypatch.setenv("NOTENAMER_VAULT_PATH", str(vault_path))
    return vault_path


@pytest.fixture
def llm():
    """Replace the Gemini client with a fake; tests queue responses on it."""
    client = FakeLLMClient()
    app.dependency_overrides[get_llm_client] = lambda: client
    yield client
    app.dependency_overrides.pop(get_llm_client, None)


@pytest.fixture
async def client(data_dir, vault):
    """Async test client with fresh cached dependencies."""
    reset_dependencies()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    reset_dependencies()
