"""Artifact lifecycle engine.

Every dispatched request becomes an Artifact that moves through
``thinking -> generating -> building -> completed``. Each artifact is
advanced by one supervised asyncio task, with delays measured from dispatch
time. Transitions are applied by replacing the artifact by id, and each one
first checks that the artifact is still in the expected predecessor state.

Closing an artifact takes it off the active set. Unless ``cancel_on_close``
is set, its task keeps running against a detached copy: observers still see
the remaining transitions, but ``get`` and ``list_artifacts`` never return
the artifact again.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from agentdesk.config import Settings, get_settings
from agentdesk.context import create_context_record
from agentdesk.exceptions import EmptyRequestError, UnknownAgentError
from agentdesk.lifecycle.outputs import EDIT_URLS, mock_outputs
from agentdesk.logging import get_logger
from agentdesk.metrics import record_completion, record_dispatch, record_transition
from agentdesk.registry import CapabilityRegistry
from agentdesk.schemas import Artifact, ArtifactStatus, ContextRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class LifecycleEvent:
    """Notification sent to observers on every state change."""

    artifact_id: str
    status: ArtifactStatus
    artifact: Artifact
    context_record: ContextRecord | None = None


Observer = Callable[[LifecycleEvent], None]

# Shared by all engines in the process so ids never repeat.
_last_id_ms = 0


class ArtifactEngine:
    """Creates artifacts and advances their state machines."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or get_settings()
        self._artifacts: dict[str, Artifact] = {}
        # Closed artifacts whose task is still running.
        self._detached: dict[str, Artifact] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._observers: list[Observer] = []

    # -- observers ---------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event: LifecycleEvent) -> None:
        for observer in list(self._observers):
            observer(event)

    # -- queries -----------------------------------------------------------

    def get(self, artifact_id: str) -> Artifact | None:
        return self._artifacts.get(artifact_id)

    def list_artifacts(self) -> list[Artifact]:
        """Active artifacts in dispatch order."""
        return list(self._artifacts.values())

    def is_running(self, artifact_id: str) -> bool:
        task = self._tasks.get(artifact_id)
        return task is not None and not task.done()

    # -- dispatch ----------------------------------------------------------

    def dispatch(
        self,
        agent_id: str,
        request_text: str,
        context_snapshot: Iterable[ContextRecord] = (),
        message_id: str | None = None,
    ) -> str:
        """Create an artifact in ``thinking`` and schedule its transitions.

        Must be called while an event loop is running.

        Args:
            agent_id: Target agent.
            request_text: The user's request; used for the title and context.
            context_snapshot: Context visible at dispatch time; stored frozen.
            message_id: Assistant message that tracks this artifact.

        Returns:
            The new artifact id.

        Raises:
            EmptyRequestError: The request text is blank.
            UnknownAgentError: The agent is not registered.
        """
        if not request_text or not request_text.strip():
            raise EmptyRequestError("Cannot dispatch an empty request")
        descriptor = self.registry.get_by_id(agent_id)
        if descriptor is None:
            raise UnknownAgentError(agent_id)

        loop = asyncio.get_running_loop()
        artifact = Artifact(
            id=self._next_id(),
            agent_id=descriptor.id,
            agent_name=descriptor.name,
            agent_icon=descriptor.icon,
            status=ArtifactStatus.THINKING,
            title=request_text[: self.settings.title_length],
            request_text=request_text,
            message_id=message_id,
            edit_url=EDIT_URLS.get(descriptor.id),
            context_snapshot=tuple(context_snapshot),
        )
        self._artifacts[artifact.id] = artifact

        task = loop.create_task(self._run(artifact.id, loop.time()))
        self._tasks[artifact.id] = task
        task.add_done_callback(lambda t, aid=artifact.id: self._forget_task(aid, t))

        record_dispatch(descriptor.id)
        logger.info(
            "artifact_dispatched",
            artifact_id=artifact.id,
            agent_id=descriptor.id,
            context_records=len(artifact.context_snapshot),
        )
        self._notify(LifecycleEvent(artifact.id, artifact.status, artifact))
        return artifact.id

    async def wait(self, artifact_id: str) -> Artifact | None:
        """Wait until the artifact's task ends; returns its final state.

        A cancelled task is not an error; an observer failure re-raises.
        """
        task = self._tasks.get(artifact_id)
        if task is not None:
            await asyncio.wait({task})
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]
        return self._artifacts.get(artifact_id)

    async def _run(self, artifact_id: str, dispatched_at: float) -> None:
        loop = asyncio.get_running_loop()
        schedule = (
            (self.settings.thinking_seconds, ArtifactStatus.THINKING, ArtifactStatus.GENERATING),
            (self.settings.generating_seconds, ArtifactStatus.GENERATING, ArtifactStatus.BUILDING),
            (self.settings.building_seconds, ArtifactStatus.BUILDING, ArtifactStatus.COMPLETED),
        )
        for offset, expected, target in schedule:
            await asyncio.sleep(max(0.0, dispatched_at + offset - loop.time()))
            if not self._advance(artifact_id, expected, target):
                return
        artifact = self._artifacts.get(artifact_id) or self._detached.get(artifact_id)
        if artifact is not None:
            record_completion(artifact.agent_id, loop.time() - dispatched_at)

    def _advance(
        self,
        artifact_id: str,
        expected: ArtifactStatus,
        target: ArtifactStatus,
    ) -> bool:
        """Apply one transition if the artifact is still where we left it."""
        detached = artifact_id not in self._artifacts
        store = self._detached if detached else self._artifacts
        artifact = store.get(artifact_id)
        if artifact is None or artifact.status != expected:
            logger.debug(
                "stale_transition_ignored",
                artifact_id=artifact_id,
                target=target.value,
                current=artifact.status.value if artifact else None,
            )
            return False

        update: dict[str, object] = {"status": target}
        record = None
        if target == ArtifactStatus.COMPLETED:
            outputs = mock_outputs(artifact.agent_id)
            update["output"] = outputs[0] if outputs else None
            update["outputs"] = outputs if len(outputs) > 1 else []
            record = create_context_record(artifact, artifact.request_text)
            update["context_data"] = record

        updated = artifact.model_copy(update=update)
        store[artifact_id] = updated

        record_transition(updated.agent_id, target.value)
        logger.info(
            "artifact_transition",
            artifact_id=artifact_id,
            status=target.value,
            detached=detached,
        )
        self._notify(LifecycleEvent(artifact_id, target, updated, record))
        return True

    # -- closing -----------------------------------------------------------

    def close(self, artifact_id: str) -> bool:
        """Remove an artifact from the active set.

        Pending transitions are cancelled when ``cancel_on_close`` is set.
        Otherwise they still fire against a detached copy and are reported
        to observers, so the work the artifact stood for still finishes.

        Returns:
            False when no such artifact was active.
        """
        artifact = self._artifacts.pop(artifact_id, None)
        if artifact is None:
            return False
        task = self._tasks.get(artifact_id)
        if task is not None and not task.done():
            if self.settings.cancel_on_close:
                task.cancel()
            else:
                self._detached[artifact_id] = artifact
        logger.info(
            "artifact_closed",
            artifact_id=artifact_id,
            status=artifact.status.value,
            detached=artifact_id in self._detached,
        )
        return True

    def close_all(self) -> None:
        for artifact_id in list(self._artifacts):
            self.close(artifact_id)

    def reopen(self, artifact: Artifact) -> Artifact:
        """Show a previously seen artifact again without scheduling work.

        An artifact that is already active is left as it is. If the artifact
        was closed while its task was still running, the task picks it up
        again from the status it is reopened with.
        """
        existing = self._artifacts.get(artifact.id)
        if existing is not None:
            return existing
        self._detached.pop(artifact.id, None)
        self._artifacts[artifact.id] = artifact
        logger.info("artifact_reopened", artifact_id=artifact.id, status=artifact.status.value)
        return artifact

    async def shutdown(self) -> None:
        """Cancel every pending task and wait for them to finish."""
        tasks = [t for t in self._tasks.values() if not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)

    # -- helpers -----------------------------------------------------------

    def _next_id(self) -> str:
        """Time-based id that strictly increases, so ids are never reused."""
        global _last_id_ms
        now_ms = time.time_ns() // 1_000_000
        _last_id_ms = max(now_ms, _last_id_ms + 1)
        return f"artifact-{_last_id_ms}"

    def _forget_task(self, artifact_id: str, task: asyncio.Task[None]) -> None:
        if self._tasks.get(artifact_id) is task:
            del self._tasks[artifact_id]
            self._detached.pop(artifact_id, None)
