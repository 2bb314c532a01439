"""Command, skill and agent descriptors for plugkit."""

from .errors import (
    DescriptorError,
    FrontmatterError,
    PluginsDirNotFoundError,
    UnknownReferenceError,
)
from .parser import dump_command, find_command_references, parse_command, split_frontmatter
from .registry import BUILTIN_DIR, CommandRegistry
from .render import render_command_help, render_commands_section
from .types import AgentInfo, CommandDescriptor, ResolvedInput, SkillInfo

__all__ = [
    "AgentInfo",
    "BUILTIN_DIR",
    "CommandDescriptor",
    "CommandRegistry",
    "DescriptorError",
    "FrontmatterError",
    "PluginsDirNotFoundError",
    "ResolvedInput",
    "SkillInfo",
    "UnknownReferenceError",
    "dump_command",
    "find_command_references",
    "parse_command",
    "render_command_help",
    "render_commands_section",
    "split_frontmatter",
]
