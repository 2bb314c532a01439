"""Command registry: loads descriptors from a plugins tree and resolves them."""

from __future__ import annotations

from pathlib import Path

from utils import get_logger

from .errors import DescriptorError, UnknownReferenceError
from .parser import (
    list_agent_files,
    list_command_files,
    list_plugin_dirs,
    list_skill_files,
    parse_agent,
    parse_command,
    parse_skill,
    read_descriptor,
    render_template,
    split_invocation,
)
from .types import AgentInfo, CommandDescriptor, ResolvedInput, SkillInfo

logger = get_logger(__name__)

# Bundled descriptors, laid out like a single plugin
BUILTIN_DIR = Path(__file__).parent / "builtin"


class CommandRegistry:
    """Index commands, skills and agents found under a plugins directory."""

    def __init__(self, plugins_dir: Path, include_builtin: bool = True) -> None:
        self.plugins_dir = plugins_dir
        self.include_builtin = include_builtin
        self.commands: dict[str, CommandDescriptor] = {}
        self.skills: dict[str, SkillInfo] = {}
        self.agents: dict[str, AgentInfo] = {}
        self.errors: list[DescriptorError] = []

    async def load(self) -> None:
        self.commands = {}
        self.skills = {}
        self.agents = {}
        self.errors = []

        roots = await list_plugin_dirs(self.plugins_dir)
        # Bundled descriptors load last so plugins take precedence
        if self.include_builtin:
            roots.append(BUILTIN_DIR)

        for root in roots:
            await self._load_plugin(root)

        logger.info(
            f"Loaded {len(self.commands)} commands, {len(self.skills)} skills, "
            f"{len(self.agents)} agents from {self.plugins_dir}"
        )

    async def _load_plugin(self, root: Path) -> None:
        for command_file in await list_command_files(root / "commands"):
            try:
                command = parse_command(
                    await read_descriptor(command_file), command_file.stem, command_file
                )
            except DescriptorError as e:
                self._skip(e)
                continue
            self._add(self.commands, command.name, command, command_file)

        for skill_file in await list_skill_files(root / "skills"):
            try:
                skill = parse_skill(await read_descriptor(skill_file), skill_file)
            except DescriptorError as e:
                self._skip(e)
                continue
            self._add(self.skills, skill.name, skill, skill_file)

        for agent_file in await list_agent_files(root / "agents"):
            try:
                agent = parse_agent(await read_descriptor(agent_file), agent_file)
            except DescriptorError as e:
                self._skip(e)
                continue
            self._add(self.agents, agent.name, agent, agent_file)

    def _skip(self, error: DescriptorError) -> None:
        logger.warning(f"Skipping descriptor: {error}")
        self.errors.append(error)

    @staticmethod
    def _add(index: dict, name: str, item: object, source: Path) -> None:
        if name in index:
            logger.warning(f"Duplicate descriptor '{name}' at {source} ignored")
            return
        index[name] = item

    def get_command(self, name: str) -> CommandDescriptor | None:
        return self.commands.get(name.removeprefix("/"))

    def user_commands(self) -> list[CommandDescriptor]:
        """Commands a user may trigger directly, sorted by name."""
        return sorted(
            (c for c in self.commands.values() if c.user_invocable),
            key=lambda c: c.name,
        )

    def resolve_references(
        self, command: CommandDescriptor
    ) -> tuple[SkillInfo | None, AgentInfo | None]:
        """Look up the skill and agent a command names.

        Raises:
            UnknownReferenceError: If a named skill or agent is not loaded
        """
        skill = None
        agent = None
        if command.required_skill:
            skill = self.skills.get(command.required_skill)
            if skill is None:
                raise UnknownReferenceError("skill", command.required_skill, command.name)
        if command.required_agent:
            agent = self.agents.get(command.required_agent)
            if agent is None:
                raise UnknownReferenceError("agent", command.required_agent, command.name)
        return skill, agent

    def resolve_user_input(self, user_input: str) -> ResolvedInput:
        if user_input.startswith("/"):
            name, args = split_invocation(user_input, "/")
            command = self.commands.get(name)
            if command and command.user_invocable:
                rendered = render_template(command.body.strip(), args)
                return ResolvedInput(user_input, rendered, command.name, args)

        return ResolvedInput(user_input, user_input, None, "")
