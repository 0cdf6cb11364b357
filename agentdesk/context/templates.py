"""Context record templates per agent type.

Stand-ins for the structured payload a real agent API would return.
"""

from __future__ import annotations

import json
from typing import Any

from agentdesk.schemas import Artifact, ContextRecord

KB = 1024
MB = 1024 * 1024


def format_context_size(data: Any) -> str:
    """Human-readable size of data's compact JSON encoding."""
    size = len(json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    if size < KB:
        return f"{size}B"
    if size < MB:
        return f"{round(size / KB)}KB"
    return f"{round(size / MB)}MB"


CONTEXT_TEMPLATES: dict[str, dict[str, Any]] = {
    "hunter": {
        "summary": "Market research completed: {title}",
        "structured_data": {
            "type": "research",
            "findings": [
                "Identified key competitors and pricing strategies",
                "Market trends and opportunities analyzed",
            ],
            "keyInsights": [
                "Market gap identified in vertical industry customization",
                "Price sensitivity varies by segment",
            ],
        },
        "tags": ["research", "market-analysis", "competitor", "pricing", "trends"],
    },
    "framia": {
        "summary": "Design created: {title}",
        "structured_data": {
            "type": "design",
            "style": {
                "colors": ["#4F46E5", "#10B981"],
                "typography": "Modern sans-serif",
                "layout": "Grid-based",
            },
            "components": ["Header", "Hero Section", "CTA Button"],
        },
        "tags": ["design", "visual", "ui", "branding", "layout"],
    },
    "enter": {
        "summary": "Application built: {title}",
        "structured_data": {
            "type": "code",
            "techStack": ["React", "TypeScript", "Tailwind CSS"],
            "features": ["Responsive layout", "Form validation", "API integration"],
            "apiEndpoints": ["/api/users", "/api/data"],
        },
        "tags": ["code", "development", "react", "typescript", "web-app"],
    },
    "combos": {
        "summary": "Workflow automated: {title}",
        "structured_data": {
            "type": "workflow",
            "steps": ["Data collection", "Processing", "Publishing"],
            "triggers": ["Schedule", "Event-based"],
            "integrations": ["Twitter API", "Google Sheets"],
        },
        "tags": ["automation", "workflow", "integration", "process"],
    },
}


def create_context_record(artifact: Artifact, request_text: str) -> ContextRecord:
    """Build the context record for a completed artifact.

    Agents without a template get a bare record carrying only a summary.
    """
    template = CONTEXT_TEMPLATES.get(artifact.agent_id)
    if template is None:
        return ContextRecord(
            summary=f"{artifact.agent_name} finished: {artifact.title}",
            source_artifact_id=artifact.id,
            source_agent_name=artifact.agent_name,
            size_estimate=format_context_size({}),
        )

    structured = json.loads(json.dumps(template["structured_data"]))
    structured["request"] = request_text
    return ContextRecord(
        summary=template["summary"].format(title=artifact.title),
        structured_data=structured,
        tags=tuple(template["tags"]),
        source_artifact_id=artifact.id,
        source_agent_name=artifact.agent_name,
        size_estimate=format_context_size(structured),
    )
