"""Validators for plugin component files."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Callable, Iterable

from .agents import validate_agents
from .commands import validate_commands
from .hooks import validate_hooks
from .manifest import validate_manifests
from .report import ERROR, WARNING, ValidationIssue, ValidationReport
from .rules import validate_rules
from .skills import validate_skills
from .symlinks import validate_symlinks

Validator = Callable[[Path], Awaitable[ValidationReport]]

# Run order for `validate_all`
VALIDATORS: dict[str, Validator] = {
    "manifest": validate_manifests,
    "commands": validate_commands,
    "skills": validate_skills,
    "agents": validate_agents,
    "rules": validate_rules,
    "hooks": validate_hooks,
    "symlinks": validate_symlinks,
}


async def validate_all(
    plugins_dir: Path, kinds: Iterable[str] | None = None
) -> list[ValidationReport]:
    """Run the selected validators (all by default) in a fixed order.

    Raises:
        ValueError: If an unknown validator kind is requested
        PluginsDirNotFoundError: If plugins_dir does not exist
    """
    selected = set(kinds) if kinds is not None else set(VALIDATORS)
    unknown = selected - set(VALIDATORS)
    if unknown:
        raise ValueError(f"Unknown validator(s): {', '.join(sorted(unknown))}")

    reports: list[ValidationReport] = []
    for kind, validator in VALIDATORS.items():
        if kind in selected:
            reports.append(await validator(plugins_dir))
    return reports


__all__ = [
    "ERROR",
    "VALIDATORS",
    "WARNING",
    "ValidationIssue",
    "ValidationReport",
    "validate_agents",
    "validate_all",
    "validate_commands",
    "validate_hooks",
    "validate_manifests",
    "validate_rules",
    "validate_skills",
    "validate_symlinks",
]
