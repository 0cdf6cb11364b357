"""Segments of a composed message."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TextSegment(BaseModel):
    """A run of plain text."""

    model_config = ConfigDict(frozen=True)

    text: str


class MentionEntity(BaseModel):
    """An atomic inline reference to an agent.

    Either fully present in a message or fully absent.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    display_label: str

    def render(self, trigger: str) -> str:
        return f"{trigger}{self.display_label}"


Segment = TextSegment | MentionEntity


__all__ = [
    "TextSegment",
    "MentionEntity",
    "Segment",
]
