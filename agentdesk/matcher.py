"""Capability matching.

Scores free text (and optionally prior context) against the registry.
Scoring is additive and deterministic: the same text, context and registry
contents always produce the same ranking.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from agentdesk.config import Settings, get_settings
from agentdesk.logging import get_logger
from agentdesk.metrics import record_match
from agentdesk.registry import CapabilityRegistry
from agentdesk.schemas import AgentDescriptor, ContextRecord, MatchResult

logger = get_logger(__name__)

CONTEXT_BONUS = 20
PRIMARY_CAPABILITY_BONUS = 15
MAX_CONFIDENCE = 100


def relevant_context(
    descriptor: AgentDescriptor,
    context: Sequence[ContextRecord],
) -> list[ContextRecord]:
    """Context records the agent declares it can consume."""
    context_types = descriptor.triggers.context_types
    if not context_types:
        return []
    return [
        record
        for record in context
        if any(
            ctype in record.tags or ctype in record.source_agent_name.lower()
            for ctype in context_types
        )
    ]


class CapabilityMatcher:
    """Ranks registered agents for a piece of text."""

    def __init__(self, registry: CapabilityRegistry, limit: int = 3) -> None:
        self.registry = registry
        self.limit = limit

    def match(
        self,
        text: str,
        context: Sequence[ContextRecord] = (),
    ) -> list[MatchResult]:
        """Return the top agents for text, best first.

        Args:
            text: Free text typed by the user.
            context: Context records from completed artifacts.

        Returns:
            Up to ``limit`` results; empty for blank text or no match.
        """
        if not text or not text.strip():
            return []

        lowered = text.lower()
        results: list[MatchResult] = []

        for keyword_match in self.registry.find_by_keyword(text):
            descriptor = keyword_match.descriptor
            confidence = keyword_match.score
            reason = f"Matched keywords: {', '.join(descriptor.triggers.keywords[:3])}"

            usable = relevant_context(descriptor, context)
            if usable:
                confidence += CONTEXT_BONUS
                sources = ", ".join(r.source_agent_name for r in usable)
                reason = f"Context-aware match: can use {sources}"

            primary = [cap for cap in descriptor.capabilities.primary if cap.lower() in lowered]
            if primary:
                confidence += PRIMARY_CAPABILITY_BONUS
                reason = f"Primary capability match: {', '.join(primary)}"

            results.append(
                MatchResult(
                    agent_id=descriptor.id,
                    agent_name=descriptor.name,
                    agent_icon=descriptor.icon,
                    confidence=max(0, min(confidence, MAX_CONFIDENCE)),
                    reason=reason,
                )
            )

        results.sort(key=lambda r: r.confidence, reverse=True)
        top = results[: self.limit]
        for result in top:
            record_match(result.agent_id, result.confidence)
        return top


class Recommender:
    """Debounced agent recommendations for text being typed.

    Each call to ``update`` cancels the previous pending pass, so only the
    last keystroke inside the debounce window is scored.
    """

    def __init__(
        self,
        matcher: CapabilityMatcher,
        settings: Settings | None = None,
    ) -> None:
        self.matcher = matcher
        self.debounce_seconds = (settings or get_settings()).match_debounce_seconds
        self.recommendations: list[MatchResult] = []
        self.visible = False
        self._pending: asyncio.Task[None] | None = None

    def update(
        self,
        text: str,
        focused: bool,
        context: Sequence[ContextRecord] = (),
    ) -> None:
        """Schedule a re-score of text. Must run inside an event loop."""
        self._cancel_pending()

        if not focused:
            self.visible = False
            return
        if not text or not text.strip():
            self.visible = False
            self.recommendations = []
            return

        self._pending = asyncio.get_running_loop().create_task(
            self._score_after_delay(text, tuple(context))
        )

    def show_now(self, text: str, context: Sequence[ContextRecord] = ()) -> None:
        """Score immediately, skipping the debounce."""
        self._cancel_pending()
        if text and text.strip():
            self._apply(self.matcher.match(text, context))

    def hide(self) -> None:
        self.visible = False

    async def flush(self) -> None:
        """Wait for a pending pass, if any."""
        if self._pending is not None and not self._pending.done():
            await asyncio.wait({self._pending})

    async def _score_after_delay(self, text: str, context: tuple[ContextRecord, ...]) -> None:
        await asyncio.sleep(self.debounce_seconds)
        matches = self.matcher.match(text, context)
        if matches:
            self._apply(matches)
        else:
            self.visible = False
        logger.debug("recommendations_updated", count=len(matches))

    def _apply(self, matches: list[MatchResult]) -> None:
        if matches:
            self.recommendations = matches
            self.visible = True

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
