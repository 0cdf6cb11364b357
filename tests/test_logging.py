"""Tests for logging helpers."""

import structlog

from agentdesk.logging import _enum_values, session_context
from agentdesk.schemas import ArtifactStatus


class TestSessionContext:
    """Tests for session_context."""

    def test_binds_session_inside_block(self):
        with session_context("session-1", command="run"):
            assert structlog.contextvars.get_contextvars() == {
                "session_id": "session-1",
                "command": "run",
            }
        assert "session_id" not in structlog.contextvars.get_contextvars()

    def test_drops_leftover_context(self):
        structlog.contextvars.bind_contextvars(session_id="old", stale=True)
        try:
            with session_context("session-2"):
                assert structlog.contextvars.get_contextvars() == {"session_id": "session-2"}
        finally:
            structlog.contextvars.clear_contextvars()


def test_enum_fields_render_as_values():
    event = _enum_values(None, "info", {"event": "artifact_transition", "status": ArtifactStatus.BUILDING})
    assert event["status"] == "building"
