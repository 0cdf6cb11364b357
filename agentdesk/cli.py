"""CLI interface for AgentDesk.

Provides commands for:
- Listing registered agents
- Scoring text against the registry
- Running a request through the full dispatch lifecycle
"""

import asyncio

import click

from agentdesk import __version__
from agentdesk.config import Settings, get_settings
from agentdesk.lifecycle import LifecycleEvent, status_message
from agentdesk.logging import configure_logging, session_context
from agentdesk.matcher import CapabilityMatcher
from agentdesk.registry import create_default_registry
from agentdesk.session import Workspace

FAST_DELAYS = {
    "thinking_seconds": 0.05,
    "generating_seconds": 0.1,
    "building_seconds": 0.15,
}


@click.group()
@click.version_option(version=__version__, prog_name="agentdesk")
def cli() -> None:
    """AgentDesk - agent dispatch core.

    Match requests to agents, track artifacts and share their context.
    """
    configure_logging(get_settings())


@cli.group()
def agents() -> None:
    """Agent registry commands."""
    pass


@agents.command("list")
def list_agents() -> None:
    """List all registered agents."""
    registry = create_default_registry()
    descriptors = registry.get_all()

    if not descriptors:
        click.echo("No agents registered.")
        return

    click.echo(f"Registered agents ({len(descriptors)}):\n")

    for agent in descriptors:
        click.echo(f"  {agent.icon} {click.style(agent.name, fg='green', bold=True)} ({agent.id})")
        click.echo(f"    {agent.description}")
        if agent.capabilities.primary:
            click.echo(f"    Capabilities: {', '.join(agent.capabilities.primary)}")
        click.echo()


@cli.command()
@click.argument("text")
def match(text: str) -> None:
    """Show which agents fit TEXT best."""
    settings = get_settings()
    matcher = CapabilityMatcher(create_default_registry(), limit=settings.max_matches)
    results = matcher.match(text)

    if not results:
        click.echo("No matching agents.")
        return

    for result in results:
        click.echo(
            f"  {result.agent_icon} {click.style(result.agent_name, fg='green', bold=True)}"
            f"  {result.confidence}"
        )
        click.echo(f"    {result.reason}")


@cli.command()
@click.argument("text")
@click.option("--agent", "-a", "agent_id", default=None, help="Agent id to send the request to")
@click.option("--fast", is_flag=True, help="Shorten lifecycle delays")
def run(text: str, agent_id: str | None, fast: bool) -> None:
    """Send TEXT and follow the artifact until it completes.

    The target is --agent if given, otherwise the first @mention in TEXT.
    """
    settings = get_settings()
    if fast:
        settings = settings.model_copy(update=FAST_DELAYS)

    workspace = Workspace(settings=settings)
    if agent_id is not None and workspace.registry.get_by_id(agent_id) is None:
        raise click.ClickException(f"Unknown agent: {agent_id}")

    with session_context(workspace.session_id):
        asyncio.run(_run_request(workspace, text, agent_id))


async def _run_request(workspace: Workspace, text: str, agent_id: str | None) -> None:
    def on_event(event: LifecycleEvent) -> None:
        label = click.style(event.status.value, fg="yellow")
        click.echo(f"  [{label}] {status_message(event.artifact.agent_id, event.status)}")

    workspace.engine.subscribe(on_event)
    reply = workspace.send(text, selected_agent_id=agent_id)
    if reply is None:
        raise click.ClickException("Nothing to send.")

    if reply.artifact_id is None:
        click.echo(reply.content)
        return

    try:
        artifact = await workspace.engine.wait(reply.artifact_id)
    finally:
        await workspace.engine.shutdown()

    if artifact is None:
        return
    click.echo(f"\n{artifact.agent_icon} {artifact.agent_name}: {artifact.title}")
    for output in artifact.outputs or [artifact.output]:
        if output:
            click.echo(f"  {output}")
    if artifact.context_data is not None:
        click.echo(f"\nContext: {artifact.context_data.summary}")


@cli.command()
def info() -> None:
    """Show dispatch configuration."""
    settings: Settings = get_settings()

    click.echo("AgentDesk Configuration:\n")
    click.echo(f"  Trigger:   {settings.trigger_char}")
    click.echo(f"  Send Key:  {settings.send_key}")
    click.echo(
        "  Delays:    "
        f"{settings.thinking_seconds}s / {settings.generating_seconds}s / {settings.building_seconds}s"
    )
    click.echo(f"  Cancel On Close: {settings.cancel_on_close}")
    click.echo(f"  Max Matches: {settings.max_matches}")
    click.echo(f"  Debug:     {settings.debug}")
    click.echo(f"  Log Level: {settings.log_level}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
