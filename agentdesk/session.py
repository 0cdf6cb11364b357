"""Conversation workspace.

Wires the registry, matcher, lifecycle engine, context bus and a library
sink together for one conversation:

- A user message naming an agent (explicitly or by mention) dispatches an
  artifact and records the context the dispatch saw
- Lifecycle events update the linked assistant message by id
- Completed artifacts publish their context and are saved to the library
"""

from __future__ import annotations

import uuid
from typing import Protocol

from agentdesk.config import Settings, get_settings
from agentdesk.context import ContextBus
from agentdesk.lifecycle import (
    FOLLOW_UP_TEXTS,
    INTRO_TEXTS,
    ArtifactEngine,
    LifecycleEvent,
    mock_outputs,
)
from agentdesk.logging import get_logger
from agentdesk.matcher import CapabilityMatcher, Recommender
from agentdesk.mentions import ComposedMessage, MentionInputModel
from agentdesk.registry import CapabilityRegistry, create_default_registry
from agentdesk.schemas import (
    AgentDescriptor,
    AppData,
    Artifact,
    ArtifactStatus,
    ContextRecord,
    LibraryArtifact,
    LibraryItemType,
    MatchResult,
    Message,
    MessageRole,
    MessageType,
    OutputType,
    SelectedAgent,
)

logger = get_logger(__name__)

IMAGE_REPLY_URL = "https://images.unsplash.com/photo-1620641788427-b9f4dbf2700f?q=80&w=1200&auto=format&fit=crop"
TEXT_REPLY = (
    "Here is the information you requested. I can help you refine this further "
    "or convert it into a document format if needed."
)
IMAGE_HINTS = ("图", "画", "image")

LIBRARY_TYPES: dict[OutputType, LibraryItemType] = {
    OutputType.IMAGE: LibraryItemType.IMAGE,
    OutputType.CODE: LibraryItemType.CODE,
    OutputType.DOCUMENT: LibraryItemType.DOCUMENT,
    OutputType.ACTION: LibraryItemType.WORKFLOW,
}


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ArtifactSink(Protocol):
    """Somewhere completed artifacts are kept for later retrieval."""

    def save(self, artifact: Artifact, item_type: LibraryItemType, session_id: str) -> LibraryArtifact | None: ...


class InMemoryLibrary:
    """Library of completed artifacts, newest first."""

    def __init__(self) -> None:
        self._items: dict[str, LibraryArtifact] = {}

    def save(
        self,
        artifact: Artifact,
        item_type: LibraryItemType,
        session_id: str,
    ) -> LibraryArtifact | None:
        """Save an artifact once; a second save of the same id is ignored."""
        library_id = f"lib-{artifact.id}"
        if library_id in self._items:
            return None
        content = artifact.output or ""
        item = LibraryArtifact(
            id=library_id,
            type=item_type,
            title=artifact.title,
            thumbnail=content or None,
            content=content,
            agent_id=artifact.agent_id,
            agent_name=artifact.agent_name,
            agent_icon=artifact.agent_icon,
            created_at=artifact.created_at,
            session_id=session_id,
            prompt=artifact.request_text or artifact.title,
        )
        self._items[library_id] = item
        return item

    def get(self, library_id: str) -> LibraryArtifact | None:
        return self._items.get(library_id)

    def list_items(self, include_deleted: bool = False) -> list[LibraryArtifact]:
        return [i for i in reversed(self._items.values()) if include_deleted or not i.is_deleted]


class Workspace:
    """One conversation and the agents working on it."""

    def __init__(
        self,
        registry: CapabilityRegistry | None = None,
        settings: Settings | None = None,
        library: ArtifactSink | None = None,
        session_id: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else create_default_registry()
        self.matcher = CapabilityMatcher(self.registry, limit=self.settings.max_matches)
        self.engine = ArtifactEngine(self.registry, self.settings)
        self.bus = ContextBus()
        self.library: ArtifactSink = library if library is not None else InMemoryLibrary()
        self.session_id = session_id or _new_id("session")
        self._messages: dict[str, Message] = {}
        self._log = logger.bind(session_id=self.session_id)
        self.engine.subscribe(self._on_lifecycle_event)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages.values())

    def get_message(self, message_id: str) -> Message | None:
        return self._messages.get(message_id)

    def composer(self) -> MentionInputModel:
        """A fresh input model bound to this workspace.

        Edits feed a debounced recommender that scores against the context
        the next dispatch would see.
        """
        return MentionInputModel(
            self.registry,
            self.matcher,
            self.settings,
            recommender=Recommender(self.matcher, self.settings),
            context_source=self.available_context,
        )

    def available_context(self) -> list[ContextRecord]:
        """Context the next dispatch would see."""
        return self.bus.collect(self.engine.list_artifacts())

    def recommend(self, text: str) -> list[MatchResult]:
        """Context-aware agent recommendations for text."""
        return self.matcher.match(text, self.available_context())

    # -- sending -----------------------------------------------------------

    def send(
        self,
        message: ComposedMessage | str,
        selected_agent_id: str | None = None,
    ) -> Message | None:
        """Finalize a composed message.

        The target agent is the selected agent if given and known, otherwise
        the first mention that resolves. Without a target a canned assistant
        reply is added instead of a dispatch. Must run inside an event loop.

        Returns:
            The assistant message created for the request, or None when the
            request was empty and therefore rejected.
        """
        if isinstance(message, str):
            message = ComposedMessage.from_canonical(
                message, self.registry, self.settings.trigger_char
            )
        if message.is_empty():
            self._log.info("dispatch_rejected", reason="empty_request")
            return None

        text = message.canonical
        target = self._resolve_target(message, selected_agent_id)

        self._append(
            Message(
                id=_new_id("msg"),
                role=MessageRole.USER,
                content=text,
                selected_agent=(
                    SelectedAgent(id=target.id, name=target.name, icon=target.icon)
                    if target
                    else None
                ),
            )
        )

        if target is None:
            return self._append(self._normal_reply(text))
        return self._start_agent_flow(target, text)

    def _resolve_target(
        self,
        message: ComposedMessage,
        selected_agent_id: str | None,
    ) -> AgentDescriptor | None:
        if selected_agent_id is not None:
            selected = self.registry.get_by_id(selected_agent_id)
            if selected is not None:
                return selected
        # Typed and picked mentions resolve alike.
        parsed = ComposedMessage.from_canonical(
            message.canonical, self.registry, self.settings.trigger_char
        )
        for entity in parsed.mentions():
            descriptor = self.registry.get_by_id(entity.entity_id)
            if descriptor is not None:
                return descriptor
        return None

    def _start_agent_flow(self, agent: AgentDescriptor, text: str) -> Message:
        snapshot = self.bus.snapshot(self.engine.list_artifacts())
        system_prompt = self.bus.build_summary_prompt(snapshot, agent)
        if snapshot:
            self._log.info(
                "context_attached",
                agent_id=agent.id,
                sources=[r.source_agent_name for r in snapshot],
            )

        message_id = _new_id("msg")
        artifact_id = self.engine.dispatch(agent.id, text, snapshot, message_id=message_id)
        return self._append(
            Message(
                id=message_id,
                role=MessageRole.ASSISTANT,
                type=MessageType.APP_RESPONSE,
                artifact_id=artifact_id,
                app_data=AppData(
                    agent_id=agent.id,
                    agent_name=agent.name,
                    agent_icon=agent.icon,
                    status=self.engine.get(artifact_id).status,
                    intro_text=INTRO_TEXTS.get(agent.id),
                    follow_up_text=FOLLOW_UP_TEXTS.get(agent.id),
                ),
                context_snapshot=snapshot,
                system_prompt=system_prompt,
            )
        )

    def _normal_reply(self, text: str) -> Message:
        if any(hint in text for hint in IMAGE_HINTS):
            return Message(
                id=_new_id("msg"),
                role=MessageRole.ASSISTANT,
                type=MessageType.IMAGE,
                content=IMAGE_REPLY_URL,
                agent_name="Visual Artist",
            )
        return Message(id=_new_id("msg"), role=MessageRole.ASSISTANT, content=TEXT_REPLY)

    def _append(self, message: Message) -> Message:
        self._messages[message.id] = message
        return message

    # -- lifecycle ---------------------------------------------------------

    def _on_lifecycle_event(self, event: LifecycleEvent) -> None:
        tracked = self._update_message_status(event.artifact_id, event.status)
        if event.status != ArtifactStatus.COMPLETED or event.context_record is None:
            return

        # Work finishing after new_conversation() is still saved, but its
        # context belongs to the old conversation.
        if tracked:
            self.bus.publish(event.context_record)
        descriptor = self.registry.get_by_id(event.artifact.agent_id)
        item_type = LIBRARY_TYPES.get(
            descriptor.output.type if descriptor else OutputType.IMAGE,
            LibraryItemType.IMAGE,
        )
        saved = self.library.save(event.artifact, item_type, self.session_id)
        if saved is not None:
            self._log.info("artifact_saved", library_id=saved.id)

    def _update_message_status(self, artifact_id: str, status: ArtifactStatus) -> bool:
        """Set the status of every message linked to the artifact."""
        found = False
        for message_id, message in self._messages.items():
            if message.artifact_id == artifact_id and message.app_data is not None:
                self._messages[message_id] = message.model_copy(
                    update={"app_data": message.app_data.model_copy(update={"status": status})}
                )
                found = True
        return found

    # -- canvas ------------------------------------------------------------

    def open_artifact_from_message(self, message_id: str) -> Artifact | None:
        """Show the artifact behind an app-response message.

        An artifact that was closed is rebuilt from the message and its last
        known status. It keeps progressing only if its task is still running.
        """
        message = self._messages.get(message_id)
        if message is None or message.artifact_id is None or message.app_data is None:
            return None

        existing = self.engine.get(message.artifact_id)
        if existing is not None:
            return existing

        app = message.app_data
        outputs = mock_outputs(app.agent_id)
        return self.engine.reopen(
            Artifact(
                id=message.artifact_id,
                agent_id=app.agent_id,
                agent_name=app.agent_name,
                agent_icon=app.agent_icon,
                status=app.status,
                title="Reopened artifact",
                message_id=message.id,
                output=outputs[0] if outputs else None,
                outputs=outputs if len(outputs) > 1 else [],
                context_snapshot=message.context_snapshot,
            )
        )

    def close_artifact(self, artifact_id: str) -> bool:
        return self.engine.close(artifact_id)

    def close_all_artifacts(self) -> None:
        self.engine.close_all()

    def new_conversation(self) -> None:
        """Start over: close artifacts and forget messages and context."""
        self.engine.close_all()
        self._messages.clear()
        self.bus.clear()
