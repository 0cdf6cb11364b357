from __future__ import annotations

from click.testing import CliRunner

import agentdesk.cli as cli


def test_agents_list() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["agents", "list"])

    assert result.exit_code == 0
    assert "Registered agents (4)" in result.output
    for name in ("Framia", "Enter", "Hunter", "Combos"):
        assert name in result.output


def test_match_ranks_agents() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["match", "design a logo"])

    assert result.exit_code == 0
    assert "Framia" in result.output
    assert "25" in result.output
    assert "Primary capability match: design" in result.output


def test_match_nothing() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["match", "hello there"])

    assert result.exit_code == 0
    assert "No matching agents." in result.output


def test_run_follows_lifecycle() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["run", "@Hunter research the pet market", "--fast"])

    assert result.exit_code == 0, result.output
    for status in ("thinking", "generating", "building", "completed"):
        assert status in result.output
    assert "Context: Market research completed" in result.output


def test_run_with_explicit_agent() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["run", "a poster for the launch", "--agent", "framia", "--fast"])

    assert result.exit_code == 0, result.output
    assert "Framia" in result.output
    assert "Design created" in result.output


def test_run_unknown_agent() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["run", "anything", "--agent", "nobody"])

    assert result.exit_code != 0
    assert "Unknown agent: nobody" in result.output


def test_run_without_agent_replies() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["run", "hello there", "--fast"])

    assert result.exit_code == 0
    assert "Here is the information you requested" in result.output


def test_run_empty_request() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["run", "   "])

    assert result.exit_code != 0
    assert "Nothing to send." in result.output


def test_info() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["info"])

    assert result.exit_code == 0
    assert "AgentDesk Configuration" in result.output
    assert "Trigger:   @" in result.output
