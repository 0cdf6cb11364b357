"""Tests for composed messages and the mention input model."""

import pytest

from agentdesk.config import Settings
from agentdesk.matcher import CapabilityMatcher
from agentdesk.mentions import (
    ComposedMessage,
    KeyAction,
    MarkupRenderer,
    MentionInputModel,
    MentionRenderer,
    PlainTextRenderer,
    filter_agents,
)
from agentdesk.registry import CapabilityRegistry
from agentdesk.registry.builtin import ENTER, HUNTER
from agentdesk.schemas import MentionEntity, TextSegment

HUNTER_MENTION = MentionEntity(entity_id="hunter", display_label="Hunter")


def assert_whole_mentions(message: ComposedMessage) -> None:
    """Every mention renders in full at its span."""
    canonical = message.canonical
    for start, end, entity in message.entity_spans():
        assert canonical[start:end] == entity.render(message.trigger)


class TestComposedMessage:
    """Tests for the segment model."""

    def test_round_trip(self, registry):
        """Resolvable mentions survive canonical -> segments -> canonical."""
        text = "ask @Hunter then @Enter."
        message = ComposedMessage.from_canonical(text, registry)
        assert message.canonical == text
        assert [m.entity_id for m in message.mentions()] == ["hunter", "enter"]

    def test_unresolved_label_is_text(self, registry):
        """Unknown labels degrade to plain text."""
        message = ComposedMessage.from_canonical("ping @Nobody and @hunter", registry)
        assert message.mentions() == []
        assert message.plain_text() == "ping @Nobody and @hunter"

    def test_adjacent_text_is_merged(self):
        """Text runs are normalized on construction."""
        message = ComposedMessage([TextSegment(text="a"), TextSegment(text=""), TextSegment(text="b")])
        assert message.segments == (TextSegment(text="ab"),)

    def test_is_empty(self, registry):
        """Whitespace alone is empty; a lone mention is not."""
        assert ComposedMessage.from_canonical("  \n", registry).is_empty()
        assert not ComposedMessage.from_canonical("@Hunter", registry).is_empty()

    def test_backspace_removes_whole_mention(self, registry):
        """Backspace right after a mention deletes all of it."""
        message = ComposedMessage.from_canonical("hi @Hunter", registry)
        message, cursor = message.delete_backward(len(message))
        assert message.canonical == "hi "
        assert cursor == 3

    def test_delete_forward_removes_whole_mention(self, registry):
        """Delete right before a mention deletes all of it."""
        message = ComposedMessage.from_canonical("hi @Hunter!", registry)
        message, cursor = message.delete_forward(3)
        assert message.canonical == "hi !"
        assert cursor == 3

    def test_range_touching_mention_expands(self, registry):
        """A selection overlapping part of a mention removes the mention."""
        message = ComposedMessage.from_canonical("hi @Hunter there", registry)
        message, cursor = message.delete_range(2, 6)
        assert message.canonical == "hi there"
        assert message.mentions() == []
        assert cursor == 2

    def test_insert_inside_mention_lands_after(self, registry):
        """Typing inside a mention never splits it."""
        message = ComposedMessage.from_canonical("@Hunter", registry)
        message, cursor = message.insert_text(3, "z")
        assert message.canonical == "@Hunterz"
        assert message.mentions() == [HUNTER_MENTION]
        assert cursor == 8

    def test_insert_entity(self):
        """Inserted entities are followed by a space by default."""
        message = ComposedMessage([TextSegment(text="ask ")])
        message, cursor = message.insert_entity(4, HUNTER_MENTION)
        assert message.canonical == "ask @Hunter "
        assert cursor == len("ask @Hunter ")

        bare, _ = ComposedMessage().insert_entity(0, HUNTER_MENTION, trailing_space=False)
        assert bare.canonical == "@Hunter"

    def test_snap(self, registry):
        """Positions inside a mention snap to its end."""
        message = ComposedMessage.from_canonical("a @Hunter b", registry)
        assert message.snap(4) == 9
        assert message.snap(2) == 2
        assert message.snap(-5) == 0
        assert message.snap(100) == len(message)

    def test_edit_sequence_keeps_mentions_whole(self, registry):
        """No edit ever leaves a fragment of a mention label."""
        message = ComposedMessage.from_canonical("x @Hunter y @Enter z", registry)
        edits = [
            lambda m: m.insert_text(5, "!"),
            lambda m: m.delete_range(0, 3),
            lambda m: m.delete_backward(4),
            lambda m: m.insert_text(0, "@Hun"),
            lambda m: m.delete_forward(0),
        ]
        for edit in edits:
            message, _ = edit(message)
            assert_whole_mentions(message)

    def test_custom_trigger(self, registry):
        """The trigger character is configurable."""
        message = ComposedMessage.from_canonical("ask #Hunter", registry, trigger="#")
        assert message.mentions() == [HUNTER_MENTION]
        assert message.canonical == "ask #Hunter"


class TestFilterAgents:
    """Tests for suggestion filtering."""

    def test_empty_query_returns_all(self, registry):
        assert filter_agents(registry.get_all(), "") == registry.get_all()

    def test_matches_name_description_and_primary(self, registry):
        """Substring match, case-insensitive."""
        assert [a.id for a in filter_agents(registry.get_all(), "hunt")] == ["hunter"]
        assert [a.id for a in filter_agents(registry.get_all(), "workflows")] == ["combos"]
        assert [a.id for a in filter_agents(registry.get_all(), "DEVELOP")] == ["enter"]


class TestSuggestionMode:
    """Tests for trigger-driven suggestions."""

    def test_mention_by_typing(self):
        """@Hu suggests Hunter only; confirming inserts it and closes suggestions."""
        model = MentionInputModel(CapabilityRegistry([HUNTER, ENTER]))
        model.type_text("@Hu")

        assert model.suggesting
        assert [a.name for a in model.suggestions] == ["Hunter"]

        entity = model.confirm_suggestion()
        assert entity == HUNTER_MENTION
        assert model.canonical == "@Hunter "
        assert model.message.mentions() == [HUNTER_MENTION]

        model.on_text_changed(model.canonical)
        assert not model.suggesting

    def test_bare_trigger_lists_everyone(self, registry):
        model = MentionInputModel(registry)
        model.type_text("@")
        assert len(model.suggestions) == 4

    def test_whitespace_exits(self, registry):
        model = MentionInputModel(registry)
        model.type_text("@Hu")
        model.type_text(" ")
        assert not model.suggesting

    def test_trigger_must_start_a_word(self, registry):
        """An @ inside a word, like an email address, is not a trigger."""
        model = MentionInputModel(registry)
        model.type_text("mail@Hu")
        assert not model.suggesting

    def test_no_match_is_empty_not_error(self, registry):
        model = MentionInputModel(registry)
        model.type_text("@zzz")
        assert model.suggesting
        assert model.suggestions == []
        assert model.handle_key("Enter") == KeyAction.IGNORED
        assert model.canonical == "@zzz"

    def test_navigation_clamps(self, registry):
        model = MentionInputModel(registry)
        model.type_text("@")
        for _ in range(6):
            model.handle_key("ArrowDown")
        assert model.selected_index == 3
        for _ in range(10):
            model.handle_key("ArrowUp")
        assert model.selected_index == 0

    def test_enter_selects_highlighted(self, registry):
        model = MentionInputModel(registry)
        model.type_text("hey @")
        model.handle_key("ArrowDown")
        assert model.handle_key("Enter") == KeyAction.SELECTED
        assert model.canonical == "hey @Enter "
        assert not model.suggesting

    def test_escape_cancels_without_edit(self, registry):
        model = MentionInputModel(registry)
        model.type_text("@Hu")
        assert model.handle_key("Escape") == KeyAction.CANCELLED
        assert not model.suggesting
        assert model.canonical == "@Hu"

    def test_custom_trigger_char(self, registry):
        model = MentionInputModel(registry, settings=Settings(trigger_char="#"))
        model.type_text("#Hu")
        assert [a.id for a in model.suggestions] == ["hunter"]
        model.confirm_suggestion()
        assert model.canonical == "#Hunter "


class TestEditorEdits:
    """Tests for raw edits reported by an editor surface."""

    def test_partial_label_deletion_removes_mention(self, registry):
        """Deleting one character of a label removes the whole mention."""
        model = MentionInputModel(registry)
        model.load("ask @Hunter now")
        model.on_text_changed("ask @Hunte now", cursor=10)

        assert model.canonical == "ask  now"
        assert model.message.mentions() == []
        assert model.cursor == 4

    def test_typing_inside_label_keeps_mention(self, registry):
        """Text typed into a label moves after the mention."""
        model = MentionInputModel(registry)
        model.load("@Hunter")
        model.on_text_changed("@Huxnter", cursor=4)

        assert model.canonical == "@Hunterx"
        assert model.message.mentions() == [HUNTER_MENTION]

    def test_plain_edit(self, registry):
        model = MentionInputModel(registry)
        model.on_text_changed("hello @Hu", cursor=9)
        assert model.canonical == "hello @Hu"
        assert model.suggesting
        assert model.suggestions[0].id == "hunter"

    def test_cursor_moves_out_of_mention(self, registry):
        model = MentionInputModel(registry)
        model.load("@Hunter x")
        model.move_cursor(3)
        assert model.cursor == 7
        assert not model.suggesting


class TestInsertAndSubmit:
    """Tests for explicit insertion, keys and submission."""

    def test_insert_agent(self, registry):
        model = MentionInputModel(registry)
        model.type_text("ask ")
        assert model.insert_agent("hunter")
        assert model.canonical == "ask @Hunter "
        assert model.cursor == len("ask @Hunter ")

    def test_insert_unknown_agent(self, registry):
        model = MentionInputModel(registry)
        assert not model.insert_agent("nobody")
        assert model.canonical == ""

    def test_send_key(self, registry):
        model = MentionInputModel(registry)
        assert model.handle_key("Enter") == KeyAction.IGNORED
        model.type_text("hi")
        assert model.handle_key("Enter", shift=True) == KeyAction.IGNORED
        assert model.handle_key("Enter") == KeyAction.SUBMIT

    def test_submit_resets(self, registry):
        model = MentionInputModel(registry)
        assert model.submit() is None

        model.load("@Hunter research this")
        message = model.submit()
        assert message.canonical == "@Hunter research this"
        assert model.canonical == ""
        assert model.cursor == 0

    def test_recommendations(self, registry):
        model = MentionInputModel(registry)
        model.type_text("research the market")
        assert model.recommendations() == []

        model = MentionInputModel(registry, CapabilityMatcher(registry))
        model.type_text("research the market")
        assert model.recommendations()[0].agent_id == "hunter"


class TestRenderers:
    """Tests for rendering adapters."""

    @pytest.mark.parametrize("renderer", [PlainTextRenderer(), MarkupRenderer()])
    def test_protocol(self, renderer):
        assert isinstance(renderer, MentionRenderer)

    def test_plain(self, registry):
        message = ComposedMessage.from_canonical("ask @Hunter now", registry)
        assert PlainTextRenderer().render(message) == "ask @Hunter now"

    def test_markup(self, registry):
        message = ComposedMessage.from_canonical("ask @Hunter now", registry)
        assert MarkupRenderer().render(message) == "ask [@Hunter](agent:hunter) now"
