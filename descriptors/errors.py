"""Exceptions raised while loading and resolving descriptors."""

from __future__ import annotations

from pathlib import Path


class DescriptorError(Exception):
    """Base class for descriptor loading errors."""


class FrontmatterError(DescriptorError):
    """Front-matter block is missing, malformed, or lacks required keys."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class UnknownReferenceError(DescriptorError):
    """A command names a skill or agent that no descriptor provides."""

    def __init__(self, kind: str, name: str, command: str) -> None:
        self.kind = kind
        self.name = name
        self.command = command
        super().__init__(f"/{command} requires unknown {kind} '{name}'")


class PluginsDirNotFoundError(DescriptorError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"plugins directory not found: {path}")
