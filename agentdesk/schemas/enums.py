"""Enumerations for the AgentDesk dispatch core."""

from __future__ import annotations

from enum import Enum


class AgentProvider(str, Enum):
    """Where an agent implementation comes from."""

    NATIVE = "native"
    MCP = "mcp"
    CUSTOM = "custom"


class InputType(str, Enum):
    """Kinds of input an agent accepts."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    CONTEXT = "context"


class OutputType(str, Enum):
    """Kind of primary result an agent produces."""

    IMAGE = "image"
    CODE = "code"
    DOCUMENT = "document"
    DATA = "data"
    ACTION = "action"


class ArtifactStatus(str, Enum):
    """Lifecycle state of a dispatched request.

    IDLE is a conceptual pre-state; artifacts are created in THINKING.
    COMPLETED is terminal.
    """

    IDLE = "idle"
    THINKING = "thinking"
    GENERATING = "generating"
    BUILDING = "building"
    COMPLETED = "completed"


class MessageRole(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class MessageType(str, Enum):
    """Payload kind of a conversation message."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    APP_RESPONSE = "app-response"


class LibraryItemType(str, Enum):
    """Type of a saved library entry."""

    IMAGE = "image"
    CODE = "code"
    DOCUMENT = "document"
    WORKFLOW = "workflow"


# Forward order of the lifecycle, excluding the conceptual IDLE state.
LIFECYCLE_ORDER: tuple[ArtifactStatus, ...] = (
    ArtifactStatus.THINKING,
    ArtifactStatus.GENERATING,
    ArtifactStatus.BUILDING,
    ArtifactStatus.COMPLETED,
)


__all__ = [
    "AgentProvider",
    "InputType",
    "OutputType",
    "ArtifactStatus",
    "MessageRole",
    "MessageType",
    "LibraryItemType",
    "LIFECYCLE_ORDER",
]
