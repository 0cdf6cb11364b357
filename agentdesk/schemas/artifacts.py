"""Artifact, context and match schemas."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field

from .enums import ArtifactStatus


def utc_now() -> datetime:
    return datetime.now(UTC)


class ContextRecord(BaseModel):
    """Reusable summary of a completed artifact's output.

    Created once when the source artifact completes; never mutated. The
    structured payload is copied in and handed out as a copy, so records
    shared through snapshots cannot be changed in place.
    """

    model_config = ConfigDict(frozen=True)

    summary: str = Field(..., description="Human-readable summary")
    tags: tuple[str, ...] = Field(default=(), description="Keywords used for matching")
    source_artifact_id: str
    source_agent_name: str
    size_estimate: str | None = None

    _structured_data: dict[str, Any] = PrivateAttr(default_factory=dict)

    def __init__(self, /, structured_data: Mapping[str, Any] | None = None, **data: Any) -> None:
        super().__init__(**data)
        self._structured_data = copy.deepcopy(dict(structured_data or {}))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def structured_data(self) -> dict[str, Any]:
        return copy.deepcopy(self._structured_data)


class Artifact(BaseModel):
    """State of one dispatched request.

    Frozen: the lifecycle engine replaces an artifact by id on every
    transition, so references held elsewhere never change underneath.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    agent_id: str
    agent_name: str
    agent_icon: str = ""
    status: ArtifactStatus = ArtifactStatus.THINKING
    title: str
    request_text: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    message_id: str | None = None
    edit_url: str | None = None
    output: str | None = None
    outputs: list[str] = Field(default_factory=list)
    context_data: ContextRecord | None = None
    context_snapshot: tuple[ContextRecord, ...] = ()


class MatchResult(BaseModel):
    """One ranked agent recommendation for a piece of text."""

    agent_id: str
    agent_name: str
    agent_icon: str = ""
    confidence: int = Field(..., ge=0, le=100)
    reason: str


__all__ = [
    "utc_now",
    "ContextRecord",
    "Artifact",
    "MatchResult",
]
