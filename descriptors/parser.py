"""Parsing, serialization and rendering helpers for descriptors."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
import yaml

from .errors import FrontmatterError
from .types import AgentInfo, CommandDescriptor, SkillInfo

FRONTMATTER_DELIMITER = "---"

# Front-matter keys owned by CommandDescriptor fields; everything else goes to `extra`.
COMMAND_KEYS = ("description", "user-invocable", "argument-hint")

_COMMAND_REF_RE = re.compile(r"(?<![\w/])/([a-z0-9]+(?:-[a-z0-9]+)*)(?![\w/-])")
_SKILL_REF_RE = re.compile(r"`([A-Za-z0-9_.:-]+)`\s+skill\b", re.IGNORECASE)
_AGENT_REF_RE = re.compile(r"`([A-Za-z0-9_.:-]+)`\s+agent\b", re.IGNORECASE)


def _find_block(text: str) -> tuple[str, str] | None:
    """Return (yaml_text, body) for a leading front-matter block, or None."""
    text = text.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None

    for i in range(1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIMITER:
            return "".join(lines[1:i]), "".join(lines[i + 1 :])
    return None


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    block = _find_block(text)
    if block is None:
        return {}, text

    yaml_text, body = block
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError:
        return {}, text

    if not isinstance(data, dict):
        return {}, body

    return data, body


def parse_frontmatter_strict(
    text: str, path: Path | None = None
) -> tuple[dict[str, Any] | None, str]:
    """Like split_frontmatter, but malformed blocks raise instead of degrading.

    Returns (None, text) when the text has no front-matter block at all.

    Raises:
        FrontmatterError: If the block is unterminated, not YAML, or not a mapping
    """
    stripped = text.removeprefix("\ufeff")
    first_line = stripped.split("\n", 1)[0]
    if first_line.strip() != FRONTMATTER_DELIMITER:
        return None, text

    block = _find_block(stripped)
    if block is None:
        raise FrontmatterError("unterminated front-matter block", path)

    yaml_text, body = block
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"invalid YAML in front-matter: {e}", path) from e
    if not isinstance(data, dict):
        raise FrontmatterError("front-matter must be a mapping", path)
    return data, body


def _hint_to_str(value: Any) -> str:
    # `argument-hint: [feature or task]` is a YAML flow sequence, not a string.
    if value is None:
        return ""
    if isinstance(value, list):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)


def find_skill_reference(body: str) -> str | None:
    match = _SKILL_REF_RE.search(body)
    return match.group(1) if match else None


def find_agent_reference(body: str) -> str | None:
    match = _AGENT_REF_RE.search(body)
    return match.group(1) if match else None


def find_command_references(body: str) -> set[str]:
    """Collect slash-command names mentioned in a descriptor body.

    A reference is a `/kebab-name` token standing on its own; path segments
    such as `src/app` or `/usr/bin` are not references.
    """
    return {f"/{name}" for name in _COMMAND_REF_RE.findall(body)}


def parse_command(text: str, name: str, path: Path | None = None) -> CommandDescriptor:
    """Parse a command descriptor document.

    Args:
        text: Full file content
        name: Command name (normally the file stem)
        path: Source file, used in error messages

    Returns:
        Parsed CommandDescriptor

    Raises:
        FrontmatterError: If front-matter is missing, malformed, or incomplete
    """
    data, body = parse_frontmatter_strict(text, path)
    if data is None:
        raise FrontmatterError("missing front-matter block", path)

    description = data.get("description")
    if description is None or not str(description).strip():
        raise FrontmatterError("missing required front-matter key: description", path)

    user_invocable = data.get("user-invocable", True)
    if not isinstance(user_invocable, bool):
        raise FrontmatterError(
            f"user-invocable must be true or false (got {user_invocable!r})", path
        )

    extra = {k: v for k, v in data.items() if k not in COMMAND_KEYS}
    skill = extra.get("skill")
    agent = extra.get("agent")

    return CommandDescriptor(
        name=name,
        description=str(description).strip(),
        user_invocable=user_invocable,
        argument_hint=_hint_to_str(data.get("argument-hint")),
        required_skill=str(skill) if skill else find_skill_reference(body),
        required_agent=str(agent) if agent else find_agent_reference(body),
        body=body,
        extra=extra,
        path=path,
    )


def dump_command(descriptor: CommandDescriptor) -> str:
    data: dict[str, Any] = {
        "description": descriptor.description,
        "user-invocable": descriptor.user_invocable,
    }
    if descriptor.argument_hint:
        data["argument-hint"] = descriptor.argument_hint
    data.update(descriptor.extra)

    yaml_text = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"{FRONTMATTER_DELIMITER}\n{yaml_text}{FRONTMATTER_DELIMITER}\n{descriptor.body}"


def parse_skill(text: str, path: Path) -> SkillInfo:
    data, _ = parse_frontmatter_strict(text, path)
    if data is None:
        raise FrontmatterError("missing front-matter block", path)
    name = str(data.get("name") or "").strip()
    description = str(data.get("description") or "").strip()
    if not name or not description:
        raise FrontmatterError("skill requires name and description", path)
    return SkillInfo(name=name, description=description, path=path.parent)


def _split_tools(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, list):
        return tuple(str(v).strip() for v in value if str(v).strip())
    return tuple(part.strip() for part in str(value).split(",") if part.strip())


def parse_agent(text: str, path: Path) -> AgentInfo:
    data, _ = parse_frontmatter_strict(text, path)
    if data is None:
        raise FrontmatterError("missing front-matter block", path)
    return AgentInfo(
        name=str(data.get("name") or path.stem).strip(),
        description=str(data.get("description") or "").strip(),
        model=str(data.get("model") or "").strip(),
        tools=_split_tools(data.get("tools")),
        path=path,
    )


def split_invocation(value: str, prefix: str) -> tuple[str, str]:
    stripped = value[len(prefix) :].strip()
    name, _, rest = stripped.partition(" ")
    return name.strip(), rest.strip()


def render_template(template: str, arguments: str) -> str:
    if "$ARGUMENTS" in template:
        return template.replace("$ARGUMENTS", arguments)
    if not arguments:
        return template
    suffix = f"\n\nARGUMENTS: {arguments}" if template.strip() else f"ARGUMENTS: {arguments}"
    return f"{template.rstrip()}{suffix}"


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as handle:
        return await handle.read()


async def read_descriptor(path: Path) -> str:
    """Read a descriptor file, raising FrontmatterError if it is unreadable or not UTF-8."""
    try:
        return await read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise FrontmatterError(f"Cannot read file: {e}", path) from e


async def list_plugin_dirs(plugins_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.isdir(plugins_dir):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in plugins_dir.iterdir() if p.is_dir())

    return await asyncio.to_thread(_collect)


async def list_command_files(commands_dir: Path) -> list[Path]:
    """List `*.md` files in a commands dir and its immediate subdirectories."""
    if not await aiofiles.os.path.exists(commands_dir):
        return []

    def _collect() -> list[Path]:
        files = [p for p in commands_dir.glob("*.md") if p.is_file()]
        files.extend(p for p in commands_dir.glob("*/*.md") if p.is_file())
        return sorted(files)

    return await asyncio.to_thread(_collect)


async def list_skill_files(skills_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(skills_dir):
        return []

    def _collect() -> list[Path]:
        results: list[Path] = []
        for entry in sorted(skills_dir.iterdir()):
            if not entry.is_dir():
                continue
            candidate = entry / "SKILL.md"
            if candidate.is_file():
                results.append(candidate)
        return results

    return await asyncio.to_thread(_collect)


async def list_agent_files(agents_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(agents_dir):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in agents_dir.glob("*.md") if p.is_file())

    return await asyncio.to_thread(_collect)
