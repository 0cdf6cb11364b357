"""Rendering adapters for composed messages.

The input model never renders itself; an editor surface picks one of these
(or supplies its own) to turn segments into display text.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from agentdesk.mentions.message import ComposedMessage
from agentdesk.schemas import MentionEntity


@runtime_checkable
class MentionRenderer(Protocol):
    """Turns a composed message into something a surface can display."""

    def render(self, message: ComposedMessage) -> str: ...


class PlainTextRenderer:
    """Renders the canonical string."""

    def render(self, message: ComposedMessage) -> str:
        return message.canonical


class MarkupRenderer:
    """Renders mentions as markdown-style badges: ``[@Hunter](agent:hunter)``."""

    def __init__(self, scheme: str = "agent") -> None:
        self.scheme = scheme

    def render(self, message: ComposedMessage) -> str:
        parts = []
        for segment in message.segments:
            if isinstance(segment, MentionEntity):
                label = segment.render(message.trigger)
                parts.append(f"[{label}]({self.scheme}:{segment.entity_id})")
            else:
                parts.append(segment.text)
        return "".join(parts)
