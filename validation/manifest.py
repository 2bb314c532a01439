"""Validate plugin.json manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import aiofiles.os

from descriptors.parser import read_text
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)

MANIFEST_DIR = ".claude-plugin"
MANIFEST_FILE = "plugin.json"
REQUIRED_FIELDS = ("name", "version", "description", "license")
PATH_FIELDS = ("agents", "skills", "commands", "rules", "hooks")

# Text written by the plugin scaffolder that must be replaced before release
PLACEHOLDER_PATTERNS = ("Description of your plugin", "Your Name", "keyword1", "keyword2")


async def check_manifest(data: Any, plugin_dir: Path) -> list[str]:
    if not isinstance(data, dict):
        return ["plugin.json must be an object"]

    problems: list[str] = []
    for name in REQUIRED_FIELDS:
        if not data.get(name):
            problems.append(f"Missing required field: {name}")

    serialized = json.dumps(data, ensure_ascii=False)
    for placeholder in PLACEHOLDER_PATTERNS:
        if placeholder in serialized:
            problems.append(f'Contains placeholder text: "{placeholder}"')

    name = data.get("name")
    if name and name != plugin_dir.name:
        problems.append(f'Name "{name}" does not match directory "{plugin_dir.name}"')

    for field_name in PATH_FIELDS:
        value = data.get(field_name)
        if not value:
            continue
        paths = value if isinstance(value, list) else [value]
        for declared in paths:
            if not await aiofiles.os.path.exists(plugin_dir / str(declared)):
                problems.append(f'"{field_name}" path does not exist: {declared}')

    return problems


async def validate_manifests(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="manifest", noun="plugin.json manifests", plugins=len(plugins))

    for plugin in plugins:
        manifest = plugin / MANIFEST_DIR / MANIFEST_FILE
        if not await aiofiles.os.path.isfile(manifest):
            report.error(f"{plugin.name}/", f"Missing {MANIFEST_DIR}/{MANIFEST_FILE}")
            continue

        location = f"{plugin.name}/{MANIFEST_FILE}"
        try:
            data = json.loads(await read_text(manifest))
        except json.JSONDecodeError as e:
            report.error(location, f"Invalid JSON: {e}")
            continue
        except (OSError, UnicodeDecodeError) as e:
            report.error(location, str(e))
            continue

        for problem in await check_manifest(data, plugin):
            report.error(location, problem)
        report.checked += 1

    logger.debug(report.summary)
    return report
