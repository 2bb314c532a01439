"""Validate skill directories and their SKILL.md front-matter."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

import aiofiles.os

from config import Config
from descriptors.errors import FrontmatterError
from descriptors.parser import parse_frontmatter_strict, read_text
from utils import get_logger

from .report import ValidationReport, require_plugin_dirs

logger = get_logger(__name__)

KEBAB_CASE_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
RESERVED_WORDS = ("claude", "anthropic")
TRIGGER_PHRASES = ("use when", "use proactively when")


def check_skill_frontmatter(frontmatter: dict[str, Any], folder: str) -> list[str]:
    """Return problems with a skill's front-matter, in a stable order."""
    problems: list[str] = []

    name = str(frontmatter.get("name") or "")
    if not name:
        problems.append("Missing required frontmatter field: name")
    else:
        if not KEBAB_CASE_RE.match(name):
            problems.append(f'name must be kebab-case (got "{name}")')
        if "<" in name or ">" in name:
            problems.append("name must not contain XML angle brackets (< or >)")
        if any(word in name.lower() for word in RESERVED_WORDS):
            problems.append('name must not contain "claude" or "anthropic"')
        if name != folder:
            problems.append(f'name "{name}" must match folder name "{folder}"')

    description = str(frontmatter.get("description") or "")
    if not description:
        problems.append("Missing required frontmatter field: description")
    else:
        limit = Config.SKILL_DESCRIPTION_MAX_LENGTH
        if len(description) > limit:
            problems.append(
                f"description must be under {limit} characters (got {len(description)})"
            )
        if "<" in description or ">" in description:
            problems.append("description must not contain XML tags (< or >)")
        lowered = description.lower()
        if not any(phrase in lowered for phrase in TRIGGER_PHRASES):
            problems.append('description must include "use when" or "use proactively when"')

    return problems


async def validate_skills(plugins_dir: Path) -> ValidationReport:
    plugins = await require_plugin_dirs(plugins_dir)
    report = ValidationReport(kind="skills", noun="skill directories", plugins=len(plugins))

    for plugin in plugins:
        skills_dir = plugin / "skills"
        if not await aiofiles.os.path.isdir(skills_dir):
            continue

        folders = await asyncio.to_thread(
            lambda d=skills_dir: sorted(p.name for p in d.iterdir() if p.is_dir())
        )
        for folder in folders:
            prefix = f"{plugin.name}/skills/{folder}"
            if not KEBAB_CASE_RE.match(folder):
                report.error(
                    f"{prefix}/",
                    "Folder name must be kebab-case (no spaces, no underscores, no capitals)",
                )
                continue

            skill_md = skills_dir / folder / "SKILL.md"
            if not await aiofiles.os.path.isfile(skill_md):
                report.error(f"{prefix}/", "Missing SKILL.md")
                continue

            location = f"{prefix}/SKILL.md"
            try:
                content = await read_text(skill_md)
            except (OSError, UnicodeDecodeError) as e:
                report.error(location, str(e))
                continue
            if not content.strip():
                report.error(location, "Empty file")
                continue

            try:
                frontmatter, _ = parse_frontmatter_strict(content, skill_md)
            except FrontmatterError as e:
                report.error(location, e.message)
                continue
            if frontmatter is None:
                report.error(location, "Missing YAML frontmatter")
                continue

            for problem in check_skill_frontmatter(frontmatter, folder):
                report.error(location, problem)

            report.checked += 1

    logger.debug(report.summary)
    return report
