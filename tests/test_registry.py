"""Tests for the capability registry."""

from agentdesk.registry import PATTERN_SCORE, BUILTIN_AGENTS, CapabilityRegistry
from agentdesk.schemas import AgentMetadata, AgentProvider


class TestRegistration:
    """Tests for registering descriptors."""

    def test_builtin_agents_registered(self, registry):
        """Default registry holds the four built-in agents in order."""
        assert [a.id for a in registry.get_all()] == ["framia", "enter", "hunter", "combos"]
        assert len(registry) == len(BUILTIN_AGENTS)
        assert "hunter" in registry

    def test_reregistration_replaces_by_id(self, make_agent):
        """Registering the same id again replaces the descriptor in place."""
        registry = CapabilityRegistry()
        registry.register_batch([make_agent("a"), make_agent("b")])
        registry.register(make_agent("a", name="Renamed"))

        assert len(registry) == 2
        assert registry.get_by_id("a").name == "Renamed"
        assert [a.id for a in registry.get_all()] == ["a", "b"]

    def test_registries_are_isolated(self, make_agent):
        """Separate instances do not share state."""
        first = CapabilityRegistry()
        second = CapabilityRegistry()
        first.register(make_agent("solo"))
        assert second.get_by_id("solo") is None

    def test_get_builtin_filters_by_provider(self, registry, make_agent):
        """Only native agents are reported as built-in."""
        external = make_agent("remote").model_copy(update={"provider": AgentProvider.MCP})
        registry.register(external)
        assert "remote" not in [a.id for a in registry.get_builtin()]
        assert len(registry.get_builtin()) == 4


class TestLookup:
    """Tests for lookups."""

    def test_lookup_miss_returns_none(self, registry):
        """Unknown ids and names are not errors."""
        assert registry.get_by_id("nobody") is None
        assert registry.get_by_display_name("Nobody") is None
        assert registry.get_icon("Nobody") == ""

    def test_display_name_is_case_sensitive(self, registry):
        """Display name lookup is an exact match."""
        assert registry.get_by_display_name("Hunter").id == "hunter"
        assert registry.get_by_display_name("hunter") is None

    def test_get_icon(self, registry):
        """Icon is resolved through the display name."""
        assert registry.get_icon("Framia").endswith("framia.png")

    def test_find_by_capability(self, registry):
        """Primary and secondary capabilities are both searched."""
        assert [a.id for a in registry.find_by_capability("research")] == ["hunter"]
        assert [a.id for a in registry.find_by_capability("api")] == ["combos"]
        assert registry.find_by_capability("cooking") == []

    def test_find_by_category(self, registry, make_agent):
        """Agents are grouped by metadata category."""
        extra = make_agent("sketch").model_copy(
            update={"metadata": AgentMetadata(category="design")}
        )
        registry.register(extra)
        assert [a.id for a in registry.find_by_category("design")] == ["framia", "sketch"]


class TestKeywordScoring:
    """Tests for find_by_keyword."""

    def test_score_is_sum_of_keyword_lengths(self, make_agent):
        """Each keyword found adds its length."""
        registry = CapabilityRegistry([make_agent("a", keywords=["design", "logo", "absent"])])
        [match] = registry.find_by_keyword("Design a LOGO")
        assert match.score == len("design") + len("logo")

    def test_patterns_add_fixed_score(self, make_agent):
        """Each matching pattern adds a fixed score."""
        registry = CapabilityRegistry(
            [make_agent("a", patterns=[r"create.*design", r"never\d+"])]
        )
        [match] = registry.find_by_keyword("Create a new design")
        assert match.score == PATTERN_SCORE

    def test_zero_scores_are_dropped(self, make_agent):
        """Descriptors with no hit are not returned."""
        registry = CapabilityRegistry([make_agent("a", keywords=["design"])])
        assert registry.find_by_keyword("unrelated text") == []

    def test_sorted_descending_with_stable_ties(self, make_agent):
        """Higher scores first; equal scores keep registration order."""
        registry = CapabilityRegistry(
            [
                make_agent("first", keywords=["data"]),
                make_agent("second", keywords=["data"]),
                make_agent("best", keywords=["data", "report"]),
            ]
        )
        matches = registry.find_by_keyword("data report")
        assert [m.descriptor.id for m in matches] == ["best", "first", "second"]

    def test_builtin_keywords(self, registry):
        """Built-in triggers route a research request to Hunter."""
        matches = registry.find_by_keyword("research the competitor market")
        assert matches[0].descriptor.id == "hunter"
