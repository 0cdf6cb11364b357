"""Agent capability registry."""

from agentdesk.registry.builtin import BUILTIN_AGENTS, create_default_registry
from agentdesk.registry.registry import PATTERN_SCORE, CapabilityRegistry, KeywordMatch

__all__ = [
    "BUILTIN_AGENTS",
    "PATTERN_SCORE",
    "CapabilityRegistry",
    "KeywordMatch",
    "create_default_registry",
]
