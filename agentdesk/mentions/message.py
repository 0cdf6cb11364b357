"""Composed messages: plain text interleaved with atomic agent mentions.

Positions are offsets into the canonical string, where every mention is
rendered as the trigger followed by its label. A mention counts as a single
unit for editing: any deletion that touches it removes all of it, and text
inserted inside it lands after it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from agentdesk.registry import CapabilityRegistry
from agentdesk.schemas import MentionEntity, Segment, TextSegment

DEFAULT_TRIGGER = "@"


def mention_pattern(trigger: str) -> re.Pattern[str]:
    return re.compile(re.escape(trigger) + r"(\w+)")


def _normalize(segments: Iterable[Segment]) -> tuple[Segment, ...]:
    """Merge adjacent text runs and drop empty ones."""
    result: list[Segment] = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            if not segment.text:
                continue
            if result and isinstance(result[-1], TextSegment):
                result[-1] = TextSegment(text=result[-1].text + segment.text)
                continue
        result.append(segment)
    return tuple(result)


class ComposedMessage:
    """Immutable sequence of text runs and mention entities.

    Every edit returns a new message together with the resulting cursor.
    """

    __slots__ = ("segments", "trigger")

    def __init__(
        self,
        segments: Iterable[Segment] = (),
        trigger: str = DEFAULT_TRIGGER,
    ) -> None:
        self.trigger = trigger
        self.segments: tuple[Segment, ...] = _normalize(segments)

    @classmethod
    def from_canonical(
        cls,
        text: str,
        registry: CapabilityRegistry,
        trigger: str = DEFAULT_TRIGGER,
    ) -> ComposedMessage:
        """Parse a canonical string.

        ``@Label`` tokens whose label is a registered display name become
        entities; anything else stays plain text.
        """
        segments: list[Segment] = []
        last = 0
        for match in mention_pattern(trigger).finditer(text):
            descriptor = registry.get_by_display_name(match.group(1))
            if descriptor is None:
                continue
            segments.append(TextSegment(text=text[last : match.start()]))
            segments.append(MentionEntity(entity_id=descriptor.id, display_label=descriptor.name))
            last = match.end()
        segments.append(TextSegment(text=text[last:]))
        return cls(segments, trigger)

    @property
    def canonical(self) -> str:
        return "".join(self._render(s) for s in self.segments)

    def __len__(self) -> int:
        return len(self.canonical)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComposedMessage):
            return NotImplemented
        return self.segments == other.segments and self.trigger == other.trigger

    def __hash__(self) -> int:
        return hash((self.segments, self.trigger))

    def __repr__(self) -> str:
        return f"ComposedMessage({self.canonical!r})"

    def mentions(self) -> list[MentionEntity]:
        """Entities in order of appearance."""
        return [s for s in self.segments if isinstance(s, MentionEntity)]

    def plain_text(self) -> str:
        """Text runs only, without mentions."""
        return "".join(s.text for s in self.segments if isinstance(s, TextSegment))

    def is_empty(self) -> bool:
        """True when there is neither text nor a mention to send."""
        return not self.mentions() and not self.plain_text().strip()

    def entity_spans(self) -> list[tuple[int, int, MentionEntity]]:
        """``(start, end, entity)`` for each mention in the canonical string."""
        spans = []
        offset = 0
        for segment in self.segments:
            width = len(self._render(segment))
            if isinstance(segment, MentionEntity):
                spans.append((offset, offset + width, segment))
            offset += width
        return spans

    def entity_at(self, position: int) -> tuple[int, int, MentionEntity] | None:
        """The mention whose interior contains position, if any."""
        for start, end, entity in self.entity_spans():
            if start < position < end:
                return start, end, entity
        return None

    def snap(self, position: int) -> int:
        """Clamp position and move it out of a mention's interior."""
        position = max(0, min(position, len(self)))
        span = self.entity_at(position)
        return span[1] if span else position

    # -- edits -------------------------------------------------------------

    def replace_range(
        self,
        start: int,
        end: int,
        replacement: str | Sequence[Segment] = "",
    ) -> tuple[ComposedMessage, int]:
        """Replace ``[start, end)`` with text or segments.

        A non-empty range grows to cover every mention it touches. An empty
        range inside a mention moves to the mention's end.

        Returns:
            The new message and the cursor just after the replacement.
        """
        length = len(self)
        start = max(0, min(start, length))
        end = max(start, min(end, length))

        for span_start, span_end, _ in self.entity_spans():
            if start < end:
                if span_start < end and span_end > start:
                    start = min(start, span_start)
                    end = max(end, span_end)
            elif span_start < start < span_end:
                start = end = span_end

        if isinstance(replacement, str):
            inserted: tuple[Segment, ...] = (TextSegment(text=replacement),)
        else:
            inserted = tuple(replacement)

        before, after = self._split(start, end)
        message = ComposedMessage((*before, *inserted, *after), self.trigger)
        cursor = start + sum(len(self._render(s)) for s in inserted)
        return message, cursor

    def delete_range(self, start: int, end: int) -> tuple[ComposedMessage, int]:
        return self.replace_range(start, end)

    def insert_text(self, position: int, text: str) -> tuple[ComposedMessage, int]:
        return self.replace_range(position, position, text)

    def insert_entity(
        self,
        position: int,
        entity: MentionEntity,
        trailing_space: bool = True,
    ) -> tuple[ComposedMessage, int]:
        """Insert a mention, followed by one space by default."""
        segments: list[Segment] = [entity]
        if trailing_space:
            segments.append(TextSegment(text=" "))
        return self.replace_range(position, position, segments)

    def delete_backward(self, cursor: int) -> tuple[ComposedMessage, int]:
        """Backspace at cursor; removes a whole mention when it ends there."""
        if cursor <= 0:
            return self, 0
        return self.replace_range(cursor - 1, cursor)

    def delete_forward(self, cursor: int) -> tuple[ComposedMessage, int]:
        """Delete at cursor; removes a whole mention when it starts there."""
        if cursor >= len(self):
            return self, len(self)
        return self.replace_range(cursor, cursor + 1)

    # -- helpers -----------------------------------------------------------

    def _render(self, segment: Segment) -> str:
        if isinstance(segment, MentionEntity):
            return segment.render(self.trigger)
        return segment.text

    def _split(self, start: int, end: int) -> tuple[list[Segment], list[Segment]]:
        """Segments before start and after end.

        Both offsets must lie on mention boundaries.
        """
        before: list[Segment] = []
        after: list[Segment] = []
        offset = 0
        for segment in self.segments:
            width = len(self._render(segment))
            seg_start, seg_end = offset, offset + width
            offset = seg_end
            if isinstance(segment, MentionEntity):
                if seg_end <= start:
                    before.append(segment)
                elif seg_start >= end:
                    after.append(segment)
                continue
            if seg_start < start:
                before.append(TextSegment(text=segment.text[: start - seg_start]))
            if seg_end > end:
                after.append(TextSegment(text=segment.text[max(0, end - seg_start) :]))
        return before, after
