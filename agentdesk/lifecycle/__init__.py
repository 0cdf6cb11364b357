"""Artifact lifecycle engine."""

from agentdesk.lifecycle.engine import ArtifactEngine, LifecycleEvent, Observer
from agentdesk.lifecycle.outputs import (
    EDIT_URLS,
    FOLLOW_UP_TEXTS,
    INTRO_TEXTS,
    MOCK_OUTPUTS,
    mock_outputs,
    status_message,
)

__all__ = [
    "ArtifactEngine",
    "LifecycleEvent",
    "Observer",
    "EDIT_URLS",
    "FOLLOW_UP_TEXTS",
    "INTRO_TEXTS",
    "MOCK_OUTPUTS",
    "mock_outputs",
    "status_message",
]
