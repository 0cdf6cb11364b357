"""Built-in agents.

Four native agents cover the workspace's core request types:
- Framia: visual design
- Enter: application building and code
- Hunter: research and analysis
- Combos: workflow automation
"""

from agentdesk.registry.registry import CapabilityRegistry
from agentdesk.schemas import (
    AgentCapabilities,
    AgentDescriptor,
    AgentInput,
    AgentMetadata,
    AgentOutput,
    AgentTriggers,
    InputType,
    OutputType,
)

ICON_BASE = "https://assets.agentdesk.dev/icons"

FRAMIA = AgentDescriptor(
    id="framia",
    name="Framia",
    icon=f"{ICON_BASE}/framia.png",
    description="Create visual designs and graphics",
    capabilities=AgentCapabilities(
        primary=["design", "graphics", "visual"],
        secondary=["ui", "mockup", "branding", "poster", "banner"],
    ),
    triggers=AgentTriggers(
        keywords=[
            "设计", "画", "海报", "图片", "视觉", "UI", "视频",
            "design", "poster", "image", "visual", "graphic", "video",
            "mockup", "banner", "logo", "icon", "illustration", "draw", "paint",
        ],
        patterns=[r"设计.*", r"create.*design", r"make.*visual"],
    ),
    input=AgentInput(accepts=[InputType.TEXT, InputType.CONTEXT]),
    output=AgentOutput(type=OutputType.IMAGE, formats=["png", "jpg", "svg"]),
    metadata=AgentMetadata(category="design", tags=["design", "visual", "graphics"]),
)

ENTER = AgentDescriptor(
    id="enter",
    name="Enter",
    icon=f"{ICON_BASE}/enter.png",
    description="Build applications and write code",
    capabilities=AgentCapabilities(
        primary=["code", "build", "develop"],
        secondary=["web", "app", "programming", "react", "typescript"],
    ),
    triggers=AgentTriggers(
        keywords=[
            "代码", "开发", "网站", "应用",
            "code", "develop", "programming", "web", "application", "software",
            "react", "vue", "angular", "html", "css", "javascript", "typescript",
            "build", "website", "app",
        ],
        patterns=[r"写.*代码", r"build.*app", r"create.*website", r"develop.*"],
        context_types=["design", "image"],
    ),
    input=AgentInput(accepts=[InputType.TEXT, InputType.CONTEXT, InputType.IMAGE]),
    output=AgentOutput(
        type=OutputType.CODE, formats=["react", "typescript", "javascript", "html"]
    ),
    metadata=AgentMetadata(category="development", tags=["code", "development", "web"]),
)

HUNTER = AgentDescriptor(
    id="hunter",
    name="Hunter",
    icon=f"{ICON_BASE}/hunter.png",
    description="Research and analyze information",
    capabilities=AgentCapabilities(
        primary=["research", "analyze", "search"],
        secondary=["market", "competitor", "data", "insight", "trend"],
    ),
    triggers=AgentTriggers(
        keywords=[
            "调研", "分析", "报告", "搜索",
            "research", "analyze", "report", "search", "investigate", "study",
            "market", "competitor", "analysis", "data", "insight", "trend", "survey",
        ],
        patterns=[r"调研.*", r"分析.*", r"research.*", r"analyze.*"],
    ),
    input=AgentInput(accepts=[InputType.TEXT, InputType.FILE]),
    output=AgentOutput(type=OutputType.DOCUMENT, formats=["pdf", "markdown", "text"]),
    metadata=AgentMetadata(category="research", tags=["research", "analysis", "data"]),
)

COMBOS = AgentDescriptor(
    id="combos",
    name="Combos",
    icon=f"{ICON_BASE}/combos.png",
    description="Automate workflows and integrate services",
    capabilities=AgentCapabilities(
        primary=["automate", "workflow", "integrate"],
        secondary=["process", "pipeline", "schedule", "task", "api"],
    ),
    triggers=AgentTriggers(
        keywords=[
            "自动化", "工作流", "流程",
            "automate", "workflow", "automation", "process", "pipeline",
            "schedule", "task", "integration", "api", "trigger", "action",
        ],
        patterns=[r"自动化.*", r"workflow.*", r"automate.*"],
    ),
    input=AgentInput(accepts=[InputType.TEXT, InputType.CONTEXT]),
    output=AgentOutput(type=OutputType.ACTION, formats=["json", "yaml"]),
    metadata=AgentMetadata(
        category="automation", tags=["automation", "workflow", "integration"]
    ),
)

BUILTIN_AGENTS: tuple[AgentDescriptor, ...] = (FRAMIA, ENTER, HUNTER, COMBOS)


def create_default_registry() -> CapabilityRegistry:
    """Create a registry populated with the built-in agents."""
    return CapabilityRegistry(BUILTIN_AGENTS)
