"""Render command help text and listings."""

from __future__ import annotations

from .types import CommandDescriptor


def render_command_help(command: CommandDescriptor) -> str:
    lines = [f"Usage: {command.usage}", "", command.description]
    uses: list[str] = []
    if command.required_skill:
        uses.append(f"skill: {command.required_skill}")
    if command.required_agent:
        uses.append(f"agent: {command.required_agent}")
    if uses:
        lines.append("")
        lines.append("Uses " + ", ".join(uses))
    return "\n".join(lines)


def render_commands_section(commands: list[CommandDescriptor]) -> str | None:
    """Render user-invocable commands as a markdown section.

    Args:
        commands: Loaded command descriptors.

    Returns:
        Formatted markdown section, or None if no command is user-invocable.
    """
    visible = sorted((c for c in commands if c.user_invocable), key=lambda c: c.name)
    if not visible:
        return None

    lines: list[str] = ["## Commands"]
    for command in visible:
        lines.append(f"- `{command.usage}`: {command.description}")
    return "\n".join(lines)
