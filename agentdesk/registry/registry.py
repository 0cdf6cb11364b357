"""Capability registry.

The registry is:
- An explicitly constructed instance, passed to whoever needs it
- Keyed by agent id; re-registering an id replaces the descriptor
- In-memory only, never invalidated
"""

from collections.abc import Iterable
from dataclasses import dataclass

from agentdesk.schemas import AgentDescriptor, AgentProvider

PATTERN_SCORE = 10


@dataclass(frozen=True)
class KeywordMatch:
    """A descriptor together with its keyword score for some text."""

    descriptor: AgentDescriptor
    score: int


class CapabilityRegistry:
    """Catalog of agents and their trigger rules.

    Provides:
    - Registration (single and batch)
    - Lookup by id, display name, capability and category
    - Keyword/pattern scoring of free text
    """

    def __init__(self, descriptors: Iterable[AgentDescriptor] | None = None) -> None:
        self._agents: dict[str, AgentDescriptor] = {}
        if descriptors is not None:
            self.register_batch(descriptors)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def register(self, descriptor: AgentDescriptor) -> None:
        """Insert or replace a descriptor by id.

        A replaced descriptor keeps its original position in scan order.
        """
        self._agents[descriptor.id] = descriptor

    def register_batch(self, descriptors: Iterable[AgentDescriptor]) -> None:
        """Register several descriptors in order."""
        for descriptor in descriptors:
            self.register(descriptor)

    def get_all(self) -> list[AgentDescriptor]:
        """All descriptors in registration order."""
        return list(self._agents.values())

    def get_builtin(self) -> list[AgentDescriptor]:
        """Descriptors shipped with the application."""
        return [a for a in self._agents.values() if a.provider == AgentProvider.NATIVE]

    def get_by_id(self, agent_id: str) -> AgentDescriptor | None:
        """Get a descriptor by id."""
        return self._agents.get(agent_id)

    def get_by_display_name(self, name: str) -> AgentDescriptor | None:
        """Get a descriptor by exact, case-sensitive display name."""
        for descriptor in self._agents.values():
            if descriptor.name == name:
                return descriptor
        return None

    def get_icon(self, name: str) -> str:
        """Icon for a display name, or an empty string."""
        descriptor = self.get_by_display_name(name)
        return descriptor.icon if descriptor else ""

    def find_by_capability(self, tag: str) -> list[AgentDescriptor]:
        """Descriptors whose primary or secondary capabilities contain tag."""
        return [
            a
            for a in self._agents.values()
            if tag in a.capabilities.primary or tag in a.capabilities.secondary
        ]

    def find_by_category(self, category: str) -> list[AgentDescriptor]:
        """Descriptors with the given metadata category."""
        return [a for a in self._agents.values() if a.metadata.category == category]

    def find_by_keyword(self, text: str) -> list[KeywordMatch]:
        """Score every descriptor against text.

        Each keyword found (case-insensitively) in the text adds its own
        length; each matching pattern adds PATTERN_SCORE. Only positive
        scores are returned, highest first, ties in registration order.
        """
        lowered = text.lower()
        matches: list[KeywordMatch] = []

        for descriptor in self._agents.values():
            score = 0
            for keyword in descriptor.triggers.keywords:
                keyword_lower = keyword.lower()
                if keyword_lower and keyword_lower in lowered:
                    score += len(keyword_lower)
            for pattern in descriptor.triggers.compiled_patterns():
                if pattern.search(lowered):
                    score += PATTERN_SCORE
            if score > 0:
                matches.append(KeywordMatch(descriptor=descriptor, score=score))

        # sorted() is stable, so equal scores keep registration order
        return sorted(matches, key=lambda m: m.score, reverse=True)
