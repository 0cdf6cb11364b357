"""Agent descriptor schemas."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .enums import AgentProvider, InputType, OutputType


class AgentCapabilities(BaseModel):
    """Capability tags declared by an agent."""

    model_config = ConfigDict(frozen=True)

    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)


class AgentTriggers(BaseModel):
    """Rules used to route free text to an agent."""

    model_config = ConfigDict(frozen=True)

    keywords: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(
        default_factory=list,
        description="Regular expressions, matched case-insensitively",
    )
    context_types: list[str] = Field(
        default_factory=list,
        description="Context tags this agent can consume from prior results",
    )

    _compiled: list[re.Pattern[str]] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        self._compiled = [re.compile(p, re.IGNORECASE) for p in self.patterns]

    def compiled_patterns(self) -> list[re.Pattern[str]]:
        """Patterns compiled once at construction."""
        return self._compiled


class AgentInput(BaseModel):
    """Accepted inputs."""

    model_config = ConfigDict(frozen=True)

    accepts: list[InputType] = Field(default_factory=lambda: [InputType.TEXT])
    max_size: int | None = None


class AgentOutput(BaseModel):
    """Produced output."""

    model_config = ConfigDict(frozen=True)

    type: OutputType
    formats: list[str] = Field(default_factory=list)


class AgentMetadata(BaseModel):
    """Descriptive metadata."""

    model_config = ConfigDict(frozen=True)

    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    author: str | None = None
    version: str | None = None


class AgentDescriptor(BaseModel):
    """A registered capability provider."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique agent identifier")
    name: str = Field(..., description="Display name, used as the mention label")
    icon: str = ""
    description: str = ""
    provider: AgentProvider = AgentProvider.NATIVE
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    triggers: AgentTriggers = Field(default_factory=AgentTriggers)
    input: AgentInput = Field(default_factory=AgentInput)
    output: AgentOutput = Field(default_factory=lambda: AgentOutput(type=OutputType.DATA))
    mcp_endpoint: str | None = None
    mcp_version: str | None = None
    metadata: AgentMetadata = Field(default_factory=AgentMetadata)


__all__ = [
    "AgentCapabilities",
    "AgentTriggers",
    "AgentInput",
    "AgentOutput",
    "AgentMetadata",
    "AgentDescriptor",
]
