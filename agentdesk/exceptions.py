"""Exceptions raised by the dispatch core.

Lookup misses and empty match results are not errors and never raise.
"""


class AgentDeskError(Exception):
    """Base class for AgentDesk errors."""


class UnknownAgentError(AgentDeskError):
    """Raised when dispatching to an agent id that is not registered."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(f"Unknown agent: {agent_id}")
        self.agent_id = agent_id


class EmptyRequestError(AgentDeskError):
    """Raised when a dispatch carries no request text."""
