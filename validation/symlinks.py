"""Validate that symlinks inside plugin component directories resolve."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import aiofiles.os

from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)

SCANNED_DIRS = ("agents", "commands", "skills", "rules")


def scan_symlinks(directory: Path, label: str) -> tuple[int, list[tuple[str, str]]]:
    """Walk a directory for symlinks.

    Returns:
        (symlink count, [(location, target) for each broken link])
    """
    count = 0
    broken: list[tuple[str, str]] = []
    for entry in sorted(directory.iterdir()):
        location = f"{label}/{entry.name}"
        if entry.is_symlink():
            count += 1
            target = os.readlink(entry)
            if not (directory / target).exists():
                broken.append((location, target))
        elif entry.is_dir():
            nested_count, nested_broken = scan_symlinks(entry, location)
            count += nested_count
            broken.extend(nested_broken)
    return count, broken


async def validate_symlinks(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="symlinks", noun="symlinks", plugins=len(plugins))

    for plugin in plugins:
        for subdir in SCANNED_DIRS:
            directory = plugin / subdir
            if not await aiofiles.os.path.isdir(directory):
                continue
            count, broken = await asyncio.to_thread(
                scan_symlinks, directory, f"{plugin.name}/{subdir}"
            )
            report.checked += count
            for location, target in broken:
                report.error(location, f"Broken symlink -> {target}")

    logger.debug(report.summary)
    return report
