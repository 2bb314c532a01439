"""Validate rule documents."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiofiles.os

from descriptors.parser import read_text
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)


async def validate_rules(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="rules", noun="rule files", plugins=len(plugins))

    for plugin in plugins:
        rules_dir = plugin / "rules"
        if not await aiofiles.os.path.isdir(rules_dir):
            continue

        files = await asyncio.to_thread(
            lambda d=rules_dir: sorted(p for p in d.rglob("*.md") if p.is_file())
        )
        for path in files:
            location = f"{plugin.name}/rules/{path.relative_to(rules_dir).as_posix()}"
            try:
                content = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                report.error(location, str(e))
                continue
            if not content.strip():
                report.error(location, "Empty rule file")
                continue
            report.checked += 1

    logger.debug(report.summary)
    return report
