"""Validate hooks/hooks.json files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import aiofiles.os

from descriptors.parser import read_text
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)

VALID_EVENTS = (
    "PreToolUse",
    "PostToolUse",
    "PreCompact",
    "SessionStart",
    "SessionEnd",
    "Stop",
    "Notification",
    "SubagentStop",
)


def _check_hook_entries(entries: Any, label: str) -> list[str]:
    problems: list[str] = []
    if not isinstance(entries, list):
        return [f"{label} missing 'hooks' array"]
    for j, hook in enumerate(entries):
        if not isinstance(hook, dict):
            problems.append(f"{label}.hooks[{j}] is not an object")
            continue
        if not hook.get("type") or not isinstance(hook["type"], str):
            problems.append(f"{label}.hooks[{j}] missing or invalid 'type' field")
        command = hook.get("command")
        if not command or not isinstance(command, (str, list)):
            problems.append(f"{label}.hooks[{j}] missing or invalid 'command' field")
    return problems


def _check_matcher(matcher: Any, label: str) -> list[str]:
    if not isinstance(matcher, dict):
        return [f"{label} is not an object"]
    problems: list[str] = []
    if not matcher.get("matcher"):
        problems.append(f"{label} missing 'matcher' field")
    problems.extend(_check_hook_entries(matcher.get("hooks"), label))
    return problems


def check_hooks_data(data: Any) -> tuple[int, list[str]]:
    """Check parsed hooks.json content.

    Accepts `{"hooks": {...}}`, a bare `{Event: [matcher, ...]}` mapping, or the
    legacy flat list of matchers.

    Returns:
        (matcher count, problems)
    """
    hooks = data.get("hooks", data) if isinstance(data, dict) else data
    problems: list[str] = []
    total = 0

    if isinstance(hooks, dict):
        for event, matchers in hooks.items():
            if event not in VALID_EVENTS:
                problems.append(f"Invalid event type: {event}")
                continue
            if not isinstance(matchers, list):
                problems.append(f"{event} must be an array")
                continue
            for i, matcher in enumerate(matchers):
                found = _check_matcher(matcher, f"{event}[{i}]")
                problems.extend(found)
                if isinstance(matcher, dict):
                    total += 1
    elif isinstance(hooks, list):
        for i, matcher in enumerate(hooks):
            problems.extend(_check_matcher(matcher, f"Hook {i}"))
            total += 1
    else:
        problems.append("must be an object or array")

    return total, problems


async def validate_hooks(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="hooks", noun="hook matchers", plugins=len(plugins))

    for plugin in plugins:
        hooks_file = plugin / "hooks" / "hooks.json"
        if not await aiofiles.os.path.isfile(hooks_file):
            continue

        location = f"{plugin.name}/hooks/hooks.json"
        try:
            data = json.loads(await read_text(hooks_file))
        except json.JSONDecodeError as e:
            report.error(location, f"Invalid JSON: {e}")
            continue
        except (OSError, UnicodeDecodeError) as e:
            report.error(location, str(e))
            continue

        total, problems = check_hooks_data(data)
        report.checked += total
        for problem in problems:
            report.error(location, problem)

    logger.debug(report.summary)
    return report
