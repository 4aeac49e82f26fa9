"""Settings API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from notenamer.api.deps import get_settings_store
from notenamer.api.schemas import SettingsResponse, SettingsUpdate
from notenamer.config import ConfigError, SettingsStore
from notenamer.settings_view import api_key_feedback

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    settings_store: SettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    """Get current settings with the API key masked."""
    return SettingsResponse.from_settings(settings_store.settings)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    data: SettingsUpdate,
    settings_store: SettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    """Update and persist settings.

    Only the fields present in the request change. A malformed-looking API
    key is still saved; the response carries an advisory warning.
    """
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    try:
        settings = settings_store.update(**changes)
    except ConfigError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    warning = api_key_feedback(settings.api_key) if "api_key" in changes else None
    return SettingsResponse.from_settings(settings, api_key_warning=warning)
