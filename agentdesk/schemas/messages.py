"""Conversation and library schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .artifacts import ContextRecord, utc_now
from .enums import ArtifactStatus, LibraryItemType, MessageRole, MessageType


class SelectedAgent(BaseModel):
    """Agent chosen for a user message."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str = ""


class AppData(BaseModel):
    """Agent progress shown on an app-response message."""

    model_config = ConfigDict(frozen=True)

    agent_id: str
    agent_name: str
    agent_icon: str = ""
    status: ArtifactStatus = ArtifactStatus.THINKING
    intro_text: str | None = None
    follow_up_text: str | None = None


class Message(BaseModel):
    """A message in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: MessageRole
    type: MessageType = MessageType.TEXT
    content: str = ""
    agent_name: str | None = None
    artifact_id: str | None = None
    app_data: AppData | None = None
    selected_agent: SelectedAgent | None = None
    context_snapshot: tuple[ContextRecord, ...] = ()
    system_prompt: str = ""
    created_at: datetime = Field(default_factory=utc_now)


class LibraryArtifact(BaseModel):
    """A completed artifact saved for later retrieval."""

    id: str
    type: LibraryItemType
    title: str
    thumbnail: str | None = None
    content: str
    agent_id: str
    agent_name: str
    agent_icon: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    session_id: str
    session_title: str | None = None
    prompt: str
    used_count: int = 0
    is_deleted: bool = False


__all__ = [
    "SelectedAgent",
    "AppData",
    "Message",
    "LibraryArtifact",
]
