"""Validate command descriptor files."""

from __future__ import annotations

from pathlib import Path

from descriptors.errors import FrontmatterError
from descriptors.parser import (
    find_command_references,
    list_command_files,
    parse_command,
    read_text,
)
from descriptors.registry import BUILTIN_DIR
from descriptors.types import CommandDescriptor
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)


async def validate_commands(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="commands", noun="command files", plugins=len(plugins))

    parsed: list[tuple[str, CommandDescriptor]] = []
    for plugin in plugins:
        commands_dir = plugin / "commands"
        for path in await list_command_files(commands_dir):
            location = f"{plugin.name}/commands/{path.relative_to(commands_dir).as_posix()}"
            try:
                content = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                report.error(location, str(e))
                continue
            if not content.strip():
                report.error(location, "Empty command file")
                continue

            try:
                command = parse_command(content, path.stem, path)
            except FrontmatterError as e:
                report.error(location, e.message)
                continue

            parsed.append((location, command))
            report.checked += 1

    known = {command.invocation for _, command in parsed}
    known.update(f"/{p.stem}" for p in await list_command_files(BUILTIN_DIR / "commands"))
    for location, command in parsed:
        for ref in sorted(find_command_references(command.body) - known):
            report.warning(location, f"References unknown command {ref}")

    logger.debug(report.summary)
    return report
