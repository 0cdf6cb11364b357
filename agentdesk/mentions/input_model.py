"""Mention-entity input model.

Holds the message being composed, the cursor, and the trigger-driven
suggestion workflow. It has no UI dependency: a rendering adapter draws it,
and an editor surface feeds raw text changes back through
``on_text_changed``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from agentdesk.config import Settings, get_settings
from agentdesk.logging import get_logger
from agentdesk.matcher import CapabilityMatcher, Recommender
from agentdesk.mentions.message import ComposedMessage
from agentdesk.registry import CapabilityRegistry
from agentdesk.schemas import AgentDescriptor, ContextRecord, MatchResult, MentionEntity, TextSegment

logger = get_logger(__name__)


class KeyAction(str, Enum):
    """Outcome of a key press."""

    NAVIGATED = "navigated"
    SELECTED = "selected"
    CANCELLED = "cancelled"
    SUBMIT = "submit"
    IGNORED = "ignored"


@dataclass
class SuggestionState:
    """Active suggestion query."""

    trigger_pos: int
    query: str
    selected_index: int = 0
    agents: list[AgentDescriptor] = field(default_factory=list)


def filter_agents(agents: Sequence[AgentDescriptor], query: str) -> list[AgentDescriptor]:
    """Agents whose name, description or a primary capability contains query."""
    if not query.strip():
        return list(agents)
    lowered = query.lower()
    return [
        agent
        for agent in agents
        if lowered in agent.name.lower()
        or lowered in agent.description.lower()
        or any(lowered in cap.lower() for cap in agent.capabilities.primary)
    ]


def _common_prefix(a: str, b: str, limit: int) -> int:
    n = 0
    while n < limit and a[n] == b[n]:
        n += 1
    return n


def _common_suffix(a: str, b: str, limit: int) -> int:
    n = 0
    while n < limit and a[len(a) - 1 - n] == b[len(b) - 1 - n]:
        n += 1
    return n


class MentionInputModel:
    """Composer state for one chat input.

    With a ``recommender`` every edit schedules a debounced re-score of the
    text, using the records returned by ``context_source`` if given.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        matcher: CapabilityMatcher | None = None,
        settings: Settings | None = None,
        recommender: Recommender | None = None,
        context_source: Callable[[], Sequence[ContextRecord]] | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.registry = registry
        self.matcher = matcher
        self.recommender = recommender
        self.context_source = context_source
        self.trigger = settings.trigger_char
        self.send_key = settings.send_key
        self.message = ComposedMessage(trigger=self.trigger)
        self.cursor = 0
        self.focused = True
        self.suggestion: SuggestionState | None = None

    @property
    def canonical(self) -> str:
        return self.message.canonical

    @property
    def suggesting(self) -> bool:
        return self.suggestion is not None

    @property
    def suggestions(self) -> list[AgentDescriptor]:
        return self.suggestion.agents if self.suggestion else []

    @property
    def selected_index(self) -> int:
        return self.suggestion.selected_index if self.suggestion else 0

    def load(self, text: str) -> None:
        """Replace the content with a canonical string, cursor at the end."""
        self.message = ComposedMessage.from_canonical(text, self.registry, self.trigger)
        self.cursor = len(self.message)
        self.suggestion = None
        self._recommend()

    def clear(self) -> None:
        self.message = ComposedMessage(trigger=self.trigger)
        self.cursor = 0
        self.suggestion = None
        self._recommend()

    def set_focus(self, focused: bool) -> None:
        """Track editor focus; recommendations are hidden while unfocused."""
        self.focused = focused
        self._recommend()

    # -- editing -----------------------------------------------------------

    def on_text_changed(self, text: str, cursor: int | None = None) -> None:
        """Apply a raw edit reported by the editor surface.

        The new text is diffed against the canonical string and the change
        is applied to the segment model, so an edit touching a mention
        removes the whole mention. Suggestion mode is then re-evaluated.

        Args:
            text: Full text of the editor after the edit.
            cursor: Cursor offset in ``text``; defaults to the end of the edit.
        """
        old = self.canonical
        if text != old:
            limit = min(len(old), len(text))
            prefix_limit = limit if cursor is None else min(limit, max(cursor, 0))
            prefix = _common_prefix(old, text, prefix_limit)

            suffix_limit = limit - prefix
            if cursor is not None:
                suffix_limit = min(suffix_limit, max(len(text) - cursor, 0))
            suffix = _common_suffix(old, text, suffix_limit)

            inserted = text[prefix : len(text) - suffix]
            self.message, edit_cursor = self.message.replace_range(
                prefix, len(old) - suffix, inserted
            )
            if cursor is not None and self.canonical == text:
                self.cursor = self.message.snap(cursor)
            else:
                self.cursor = edit_cursor
        elif cursor is not None:
            self.cursor = self.message.snap(cursor)

        self._detect_trigger()
        if text != old:
            self._recommend()

    def move_cursor(self, position: int) -> None:
        self.cursor = self.message.snap(position)
        self._detect_trigger()

    def type_text(self, text: str) -> None:
        """Insert text at the cursor, as if typed."""
        self.message, self.cursor = self.message.insert_text(self.cursor, text)
        self._detect_trigger()
        self._recommend()

    def backspace(self) -> None:
        self.message, self.cursor = self.message.delete_backward(self.cursor)
        self._detect_trigger()
        self._recommend()

    def delete(self) -> None:
        self.message, self.cursor = self.message.delete_forward(self.cursor)
        self._detect_trigger()
        self._recommend()

    def insert_agent(self, agent_id: str) -> bool:
        """Insert a mention at the cursor from an explicit picker.

        Returns:
            False when the agent id is unknown; nothing changes then.
        """
        descriptor = self.registry.get_by_id(agent_id)
        if descriptor is None:
            return False
        self.message, self.cursor = self.message.insert_entity(
            self.cursor, self._entity_for(descriptor)
        )
        self.suggestion = None
        self._recommend()
        return True

    # -- suggestion mode ---------------------------------------------------

    def move_selection(self, delta: int) -> None:
        """Move the highlighted suggestion, clamped to the list."""
        if self.suggestion is None:
            return
        last = max(len(self.suggestion.agents) - 1, 0)
        self.suggestion.selected_index = max(0, min(self.suggestion.selected_index + delta, last))

    def confirm_suggestion(self, index: int | None = None) -> MentionEntity | None:
        """Replace the trigger and query with the selected agent's mention.

        Returns:
            The inserted entity, or None when nothing is selectable.
        """
        if self.suggestion is None:
            return None
        agents = self.suggestion.agents
        index = self.suggestion.selected_index if index is None else index
        if not 0 <= index < len(agents):
            return None

        entity = self._entity_for(agents[index])
        self.message, self.cursor = self.message.replace_range(
            self.suggestion.trigger_pos,
            self.cursor,
            [entity, TextSegment(text=" ")],
        )
        self.suggestion = None
        logger.debug("mention_inserted", agent_id=entity.entity_id)
        self._recommend()
        return entity

    def cancel_suggestion(self) -> None:
        """Leave suggestion mode without touching the text."""
        self.suggestion = None

    def handle_key(self, key: str, shift: bool = False) -> KeyAction:
        """Handle a key press that the editor surface did not consume.

        In suggestion mode ArrowUp/ArrowDown navigate, Enter selects and
        Escape cancels. Otherwise the send key without Shift submits a
        non-empty message.
        """
        if self.suggestion is not None:
            if key == "ArrowDown":
                self.move_selection(1)
                return KeyAction.NAVIGATED
            if key == "ArrowUp":
                self.move_selection(-1)
                return KeyAction.NAVIGATED
            if key == "Enter" and not shift:
                entity = self.confirm_suggestion()
                return KeyAction.SELECTED if entity else KeyAction.IGNORED
            if key == "Escape":
                self.cancel_suggestion()
                return KeyAction.CANCELLED
            return KeyAction.IGNORED

        if key == self.send_key and not shift and not self.message.is_empty():
            return KeyAction.SUBMIT
        return KeyAction.IGNORED

    # -- output ------------------------------------------------------------

    def submit(self) -> ComposedMessage | None:
        """Hand over the composed message and reset the input.

        Returns:
            None when there is nothing to send.
        """
        if self.message.is_empty():
            return None
        message = self.message
        self.clear()
        return message

    def recommendations(self, context: Sequence[ContextRecord] = ()) -> list[MatchResult]:
        """Agents the matcher suggests for the current text, scored now."""
        if self.matcher is None:
            return []
        return self.matcher.match(self.canonical, context)

    # -- helpers -----------------------------------------------------------

    def _recommend(self) -> None:
        if self.recommender is None:
            return
        context = self.context_source() if self.context_source else ()
        self.recommender.update(self.canonical, self.focused, context)

    def _entity_for(self, descriptor: AgentDescriptor) -> MentionEntity:
        return MentionEntity(entity_id=descriptor.id, display_label=descriptor.name)

    def _detect_trigger(self) -> None:
        """Enter or leave suggestion mode based on the text before the cursor."""
        before = self.canonical[: self.cursor]
        trigger_pos = before.rfind(self.trigger)
        if trigger_pos == -1 or self._inside_mention(trigger_pos):
            self.suggestion = None
            return
        if trigger_pos > 0 and not before[trigger_pos - 1].isspace():
            self.suggestion = None
            return

        query = before[trigger_pos + len(self.trigger) :]
        if any(ch.isspace() for ch in query):
            self.suggestion = None
            return

        agents = filter_agents(self.registry.get_all(), query)
        previous = self.suggestion
        selected = 0
        if previous is not None and previous.trigger_pos == trigger_pos and previous.query == query:
            selected = min(previous.selected_index, max(len(agents) - 1, 0))
        self.suggestion = SuggestionState(
            trigger_pos=trigger_pos,
            query=query,
            selected_index=selected,
            agents=agents,
        )

    def _inside_mention(self, position: int) -> bool:
        return any(start <= position < end for start, end, _ in self.message.entity_spans())
