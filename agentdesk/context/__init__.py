"""Context bus for multi-agent workflows."""

from agentdesk.context.bus import (
    ContextBus,
    extract_context,
    filter_relevant_context,
    is_relevant,
)
from agentdesk.context.templates import (
    CONTEXT_TEMPLATES,
    create_context_record,
    format_context_size,
)

__all__ = [
    "CONTEXT_TEMPLATES",
    "ContextBus",
    "create_context_record",
    "extract_context",
    "filter_relevant_context",
    "format_context_size",
    "is_relevant",
]
