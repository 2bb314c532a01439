"""Tests for command help and listing rendering."""

from descriptors import CommandDescriptor, render_command_help, render_commands_section


def test_render_command_help() -> None:
    command = CommandDescriptor(
        name="plan",
        description="Create a plan",
        argument_hint="[feature or task]",
        required_skill="planning",
        required_agent="planner",
    )
    result = render_command_help(command)

    assert result.startswith("Usage: /plan [feature or task]")
    assert "Create a plan" in result
    assert "Uses skill: planning, agent: planner" in result


def test_render_command_help_without_references() -> None:
    result = render_command_help(CommandDescriptor(name="sync", description="Sync"))
    assert result == "Usage: /sync\n\nSync"


def test_render_commands_section_empty() -> None:
    assert render_commands_section([]) is None
    hidden = CommandDescriptor(name="sync", description="Sync", user_invocable=False)
    assert render_commands_section([hidden]) is None


def test_render_commands_section_sorted_and_filtered() -> None:
    commands = [
        CommandDescriptor(name="tdd", description="Test first"),
        CommandDescriptor(name="internal", description="Hidden", user_invocable=False),
        CommandDescriptor(name="plan", description="Plan", argument_hint="[task]"),
    ]
    result = render_commands_section(commands)

    assert result is not None
    assert result.splitlines() == [
        "## Commands",
        "- `/plan [task]`: Plan",
        "- `/tdd`: Test first",
    ]
