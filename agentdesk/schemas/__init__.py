"""AgentDesk data model."""

from agentdesk.schemas.agents import (
    AgentCapabilities,
    AgentDescriptor,
    AgentInput,
    AgentMetadata,
    AgentOutput,
    AgentTriggers,
)
from agentdesk.schemas.artifacts import Artifact, ContextRecord, MatchResult, utc_now
from agentdesk.schemas.enums import (
    LIFECYCLE_ORDER,
    AgentProvider,
    ArtifactStatus,
    InputType,
    LibraryItemType,
    MessageRole,
    MessageType,
    OutputType,
)
from agentdesk.schemas.mentions import MentionEntity, Segment, TextSegment
from agentdesk.schemas.messages import AppData, LibraryArtifact, Message, SelectedAgent

__all__ = [
    "AgentCapabilities",
    "AgentDescriptor",
    "AgentInput",
    "AgentMetadata",
    "AgentOutput",
    "AgentTriggers",
    "Artifact",
    "ContextRecord",
    "MatchResult",
    "utc_now",
    "LIFECYCLE_ORDER",
    "AgentProvider",
    "ArtifactStatus",
    "InputType",
    "LibraryItemType",
    "MessageRole",
    "MessageType",
    "OutputType",
    "MentionEntity",
    "Segment",
    "TextSegment",
    "AppData",
    "LibraryArtifact",
    "Message",
    "SelectedAgent",
]
