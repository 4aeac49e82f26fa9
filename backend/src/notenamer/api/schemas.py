"""Pydantic schemas for API requests and responses."""

from typing import Optional

from pydantic import BaseModel, Field

from notenamer.config import Settings
from notenamer.generation.orchestrator import ActionOutcome
from notenamer.notifications import Notice
from notenamer.validation import validate_api_key


def mask_api_key(api_key: str) -> str:
    """Show only the last four characters of a key."""
    if not api_key:
        return ""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]


class SettingsResponse(BaseModel):
    """Current settings, with the API key masked."""

    api_key: str = Field(..., description="Masked API key")
    api_key_valid: bool = Field(..., description="Whether the key passes the format check")
    api_key_warning: Optional[str] = Field(None, description="Advisory format warning")
    max_title_length: int
    title_temperature: float
    title_max_output_tokens: int
    tag_temperature: float
    tag_max_output_tokens: int
    max_content_length: int
    show_ribbon_icons: bool
    enable_notifications: bool

    @classmethod
    def from_settings(
        cls, settings: Settings, api_key_warning: Optional[str] = None
    ) -> "SettingsResponse":
        values = settings.to_dict()
        values["api_key"] = mask_api_key(settings.api_key)
        return cls(
            **values,
            api_key_valid=validate_api_key(settings.api_key),
            api_key_warning=api_key_warning,
        )


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their value."""

    api_key: Optional[str] = None
    max_title_length: Optional[int] = Field(None, ge=10, le=100)
    title_temperature: Optional[float] = Field(None, ge=0.0, le=1.0)
    title_max_output_tokens: Optional[int] = Field(None, ge=1, le=8192)
    tag_temperature: Optional[float] = Field(None, ge=0.0, le=1.0)
    tag_max_output_tokens: Optional[int] = Field(None, ge=1, le=8192)
    max_content_length: Optional[int] = Field(None, ge=50, le=500)
    show_ribbon_icons: Optional[bool] = None
    enable_notifications: Optional[bool] = None


class ActiveNote(BaseModel):
    """Active note selection."""

    path: Optional[str] = Field(None, description="Vault-relative path of the active note")


class NoteTags(BaseModel):
    """Tags currently stored in a note."""

    path: str
    tags: list[str]


class NoticeModel(BaseModel):
    level: str
    message: str

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeModel":
        return cls(level=notice.level, message=notice.message)


class ActionResponse(BaseModel):
    """Outcome of a title or tag action."""

    action: str
    status: str = Field(..., description="updated, unchanged or failed")
    message: str
    document: Optional[str] = None
    value: str | list[str] | None = None
    previous: str | list[str] | None = None
    states: list[str]
    notices: list[NoticeModel]

    @classmethod
    def from_outcome(cls, outcome: ActionOutcome, notices: list[Notice]) -> "ActionResponse":
        return cls(
            action=outcome.action,
            status=outcome.status.value,
            message=outcome.message,
            document=outcome.document,
            value=outcome.value,
            previous=outcome.previous,
            states=[state.value for state in outcome.states],
            notices=[NoticeModel.from_notice(n) for n in notices],
        )


class CommandInfo(BaseModel):
    """A command the host can offer."""

    id: str
    name: str
    icon: str
    action: str
    ribbon: bool = Field(..., description="Whether to show a quick-action icon")
