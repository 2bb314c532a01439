"""Data models for command, skill and agent descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    description: str
    user_invocable: bool = True
    argument_hint: str = ""
    required_skill: str | None = None
    required_agent: str | None = None
    body: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)
    path: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Read-only view so the frozen descriptor cannot be changed through `extra`
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def invocation(self) -> str:
        return f"/{self.name}"

    @property
    def usage(self) -> str:
        if self.argument_hint:
            return f"{self.invocation} {self.argument_hint}"
        return self.invocation


@dataclass(frozen=True)
class SkillInfo:
    name: str
    description: str
    path: Path


@dataclass(frozen=True)
class AgentInfo:
    name: str
    description: str
    model: str
    tools: tuple[str, ...]
    path: Path


@dataclass(frozen=True)
class ResolvedInput:
    original: str
    rendered: str
    invoked_command: str | None
    arguments: str
