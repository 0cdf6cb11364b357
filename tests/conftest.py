"""Shared test fixtures for pytest."""

import pytest

from agentdesk.config import Settings
from agentdesk.registry import CapabilityRegistry, create_default_registry
from agentdesk.schemas import (
    AgentCapabilities,
    AgentDescriptor,
    AgentOutput,
    AgentTriggers,
    OutputType,
)


@pytest.fixture
def registry() -> CapabilityRegistry:
    """Isolated registry with the built-in agents."""
    return create_default_registry()


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with lifecycle delays short enough for tests."""
    return Settings(
        thinking_seconds=0.01,
        generating_seconds=0.02,
        building_seconds=0.03,
        match_debounce_seconds=0.01,
    )


@pytest.fixture
def make_agent():
    """Factory for minimal agent descriptors."""

    def _make(
        agent_id: str,
        name: str | None = None,
        keywords: list[str] | None = None,
        patterns: list[str] | None = None,
        primary: list[str] | None = None,
        context_types: list[str] | None = None,
    ) -> AgentDescriptor:
        return AgentDescriptor(
            id=agent_id,
            name=name or agent_id.title(),
            description=f"{agent_id} agent",
            capabilities=AgentCapabilities(primary=primary or []),
            triggers=AgentTriggers(
                keywords=keywords or [],
                patterns=patterns or [],
                context_types=context_types or [],
            ),
            output=AgentOutput(type=OutputType.DOCUMENT),
        )

    return _make
