"""Validate agent descriptor files."""

from __future__ import annotations

from pathlib import Path

from descriptors.errors import FrontmatterError
from descriptors.parser import list_agent_files, parse_frontmatter_strict, read_text
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)

REQUIRED_FIELDS = ("model", "tools")


async def validate_agents(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="agents", noun="agent files", plugins=len(plugins))

    for plugin in plugins:
        for path in await list_agent_files(plugin / "agents"):
            location = f"{plugin.name}/agents/{path.name}"
            try:
                content = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                report.error(location, str(e))
                continue
            try:
                frontmatter, _ = parse_frontmatter_strict(content, path)
            except FrontmatterError as e:
                report.error(location, e.message)
                continue
            if frontmatter is None:
                report.error(location, "Missing frontmatter")
                continue

            for name in REQUIRED_FIELDS:
                if not frontmatter.get(name):
                    report.error(location, f"Missing required field: {name}")

            report.checked += 1

    logger.debug(report.summary)
    return report
