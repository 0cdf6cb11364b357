"""AgentDesk - agent dispatch for a conversational workspace."""

__version__ = "0.1.0"
