"""Validation result types shared by all validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import aiofiles.os

from descriptors.errors import PluginsDirNotFoundError
from descriptors.parser import list_plugin_dirs

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    severity: str
    location: str
    message: str


@dataclass
class ValidationReport:
    """Outcome of one validator run over a plugins directory."""

    kind: str
    noun: str
    checked: int = 0
    plugins: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)

    def error(self, location: str, message: str) -> None:
        self.issues.append(ValidationIssue(ERROR, location, message))

    def warning(self, location: str, message: str) -> None:
        self.issues.append(ValidationIssue(WARNING, location, message))

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def summary(self) -> str:
        return f"Validated {self.checked} {self.noun} across {self.plugins} plugins"


async def require_plugin_dirs(plugins_dir: Path) -> list[Path]:
    """List plugin directories, failing when the plugins directory is absent.

    Raises:
        PluginsDirNotFoundError: If plugins_dir does not exist
    """
    if not await aiofiles.os.path.isdir(plugins_dir):
        raise PluginsDirNotFoundError(plugins_dir)
    return await list_plugin_dirs(plugins_dir)
