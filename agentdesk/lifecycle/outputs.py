"""Static outputs and progress copy for simulated agents."""

from __future__ import annotations

from agentdesk.schemas import ArtifactStatus

IMAGE_BASE = "https://images.unsplash.com"

MOCK_OUTPUTS: dict[str, list[str]] = {
    "framia": [
        f"{IMAGE_BASE}/photo-1558655146-9f40138edfeb?q=80&w=1200&auto=format&fit=crop",
        f"{IMAGE_BASE}/photo-1557683316-973673baf926?q=80&w=1200&auto=format&fit=crop",
        f"{IMAGE_BASE}/photo-1557682250-33bd709cbe85?q=80&w=1200&auto=format&fit=crop",
        f"{IMAGE_BASE}/photo-1557683311-eac922347aa1?q=80&w=1200&auto=format&fit=crop",
    ],
    "enter": [f"{IMAGE_BASE}/photo-1555066931-4365d14bab8c?q=80&w=800&auto=format&fit=crop"],
    "hunter": [f"{IMAGE_BASE}/photo-1460925895917-afdab827c52f?q=80&w=800&auto=format&fit=crop"],
    "combos": [f"{IMAGE_BASE}/photo-1551288049-bebda4e38f71?q=80&w=800&auto=format&fit=crop"],
}

EDIT_URLS: dict[str, str] = {
    "framia": "https://framia.pro/project/6b9df416-353c-4293-94cb-da1ea22bffd8",
    "enter": "https://enter.pro/project/demo-calculator",
    "hunter": "https://hunter.pro/report/demo",
    "combos": "https://combos.pro/workflow/demo",
}

INTRO_TEXTS: dict[str, str] = {
    "framia": "I'll use Framia to handle your design task",
    "enter": "I'll use Enter to build your application",
    "hunter": "I'll use Hunter to search and analyze the information",
    "combos": "I'll use Combos to run your workflow",
}

FOLLOW_UP_TEXTS: dict[str, str] = {
    "framia": (
        "The design is ready! You can:\n"
        "• View the full result in the canvas\n"
        '• Click "Edit in Framia" for more customization\n'
        "• Tell me what to change\n"
        "• Download it as PNG/PDF\n\n"
        "Anything you'd like me to adjust?"
    ),
    "enter": (
        "The application is built! You can:\n"
        "• Preview it in the canvas\n"
        '• Click "Open in Enter" to keep editing the code\n'
        "• Tell me which features to add\n"
        "• Deploy it online\n\n"
        "Anything you'd like me to adjust?"
    ),
    "hunter": (
        "The report is ready! You can:\n"
        "• Read the full report in the canvas\n"
        "• Export it as PDF or Excel\n"
        "• Tell me which part to analyze further\n\n"
        "What else would you like to know?"
    ),
    "combos": (
        "The workflow has finished! You can:\n"
        "• Check the results in the canvas\n"
        "• Save it as a reusable template\n"
        "• Adjust parameters and run it again\n\n"
        "Anything you'd like me to adjust?"
    ),
}

STATUS_MESSAGES: dict[str, dict[ArtifactStatus, str]] = {
    "framia": {
        ArtifactStatus.THINKING: "Thinking...",
        ArtifactStatus.GENERATING: "Generating images...",
        ArtifactStatus.BUILDING: "Building design...",
    },
    "enter": {
        ArtifactStatus.THINKING: "Analyzing requirements...",
        ArtifactStatus.GENERATING: "Writing code...",
        ArtifactStatus.BUILDING: "Building application...",
    },
    "hunter": {
        ArtifactStatus.THINKING: "Searching...",
        ArtifactStatus.GENERATING: "Analyzing results...",
        ArtifactStatus.BUILDING: "Compiling report...",
    },
    "combos": {
        ArtifactStatus.THINKING: "Processing...",
        ArtifactStatus.GENERATING: "Generating content...",
        ArtifactStatus.BUILDING: "Finalizing...",
    },
}

DEFAULT_STATUS_MESSAGES: dict[ArtifactStatus, str] = {
    ArtifactStatus.IDLE: "Waiting...",
    ArtifactStatus.THINKING: "Thinking...",
    ArtifactStatus.GENERATING: "Generating...",
    ArtifactStatus.BUILDING: "Building...",
    ArtifactStatus.COMPLETED: "Done",
}


def mock_outputs(agent_id: str) -> list[str]:
    """Outputs for an agent; the first one is the primary output."""
    return list(MOCK_OUTPUTS.get(agent_id, []))


def status_message(agent_id: str, status: ArtifactStatus) -> str:
    """Progress line shown while an agent works."""
    per_agent = STATUS_MESSAGES.get(agent_id, {})
    return per_agent.get(status, DEFAULT_STATUS_MESSAGES[status])
