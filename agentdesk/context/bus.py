"""Context bus.

Collects the context records of completed artifacts and turns them into
the payload handed to the next dispatched agent.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from agentdesk.logging import get_logger
from agentdesk.schemas import AgentDescriptor, Artifact, ArtifactStatus, ContextRecord

logger = get_logger(__name__)

PROMPT_HEADER = "You have access to the following context from previous work:"
PROMPT_INSTRUCTION = (
    "Please use this information to inform your response and maintain "
    "consistency with previous outputs."
)
PROMPT_DATA_HEADER = "Structured data is available if needed:"


def extract_context(artifact: Artifact) -> ContextRecord | None:
    """Context of a single artifact, only once it has completed."""
    if artifact.status != ArtifactStatus.COMPLETED:
        return None
    return artifact.context_data


def is_relevant(
    record: ContextRecord,
    target_agent: AgentDescriptor | str | None,
    request_text: str,
) -> bool:
    """True when one of the record's tags appears in the request text."""
    lowered = request_text.lower()
    return any(tag.lower() in lowered for tag in record.tags)


def filter_relevant_context(
    records: Sequence[ContextRecord],
    target_agent: AgentDescriptor | str | None,
    request_text: str,
) -> list[ContextRecord]:
    """Context offered to a dispatch.

    Every record is offered; ``is_relevant`` is not applied here.
    """
    return list(records)


class ContextBus:
    """Context aggregation for one conversation.

    ``records`` grows monotonically with published completions: there is
    no eviction, size cap or deduplication.
    """

    def __init__(self) -> None:
        self._records: list[ContextRecord] = []

    @property
    def records(self) -> tuple[ContextRecord, ...]:
        return tuple(self._records)

    def publish(self, record: ContextRecord) -> None:
        """Append the record of a newly completed artifact."""
        self._records.append(record)
        logger.info(
            "context_published",
            source_artifact_id=record.source_artifact_id,
            source_agent=record.source_agent_name,
            tags=record.tags,
        )

    def clear(self) -> None:
        """Forget the session history, e.g. when a new conversation starts."""
        self._records.clear()

    def collect(self, artifacts: Iterable[Artifact]) -> list[ContextRecord]:
        """Context of every completed artifact, in artifact order."""
        records = []
        for artifact in artifacts:
            record = extract_context(artifact)
            if record is not None:
                records.append(record)
        return records

    def snapshot(self, artifacts: Iterable[Artifact]) -> tuple[ContextRecord, ...]:
        """Frozen copy of ``collect`` for storing on an outgoing dispatch."""
        return tuple(self.collect(artifacts))

    def build_summary_prompt(
        self,
        records: Sequence[ContextRecord],
        target_agent: AgentDescriptor | str | None = None,
    ) -> str:
        """Deterministic context payload for a newly dispatched agent.

        Returns an empty string when there is no context.
        """
        if not records:
            return ""

        summaries = "\n".join(f"- {r.source_agent_name}: {r.summary}" for r in records)
        data = json.dumps(
            [
                {"source": r.source_agent_name, "data": r.structured_data, "tags": r.tags}
                for r in records
            ],
            indent=2,
            ensure_ascii=False,
        )
        return (
            f"{PROMPT_HEADER}\n\n{summaries}\n\n{PROMPT_INSTRUCTION}\n\n"
            f"{PROMPT_DATA_HEADER}\n{data}"
        )
