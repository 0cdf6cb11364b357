"""Composed messages with atomic agent mentions."""

from agentdesk.mentions.input_model import KeyAction, MentionInputModel, SuggestionState, filter_agents
from agentdesk.mentions.message import DEFAULT_TRIGGER, ComposedMessage, mention_pattern
from agentdesk.mentions.rendering import MarkupRenderer, MentionRenderer, PlainTextRenderer

__all__ = [
    "DEFAULT_TRIGGER",
    "ComposedMessage",
    "KeyAction",
    "MarkupRenderer",
    "MentionInputModel",
    "MentionRenderer",
    "PlainTextRenderer",
    "SuggestionState",
    "filter_agents",
    "mention_pattern",
]
