"""Shared fixtures for plugkit tests."""

import textwrap
from pathlib import Path

import pytest

from config import Config


@pytest.fixture
def set_config(monkeypatch):
    """Temporarily override Config values.

    Usage:
        def test_something(set_config):
            set_config(SKILL_DESCRIPTION_MAX_LENGTH=20)
    """

    def _set_config(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setattr(Config, key, value)

    return _set_config


@pytest.fixture
def plugins_dir(tmp_path) -> Path:
    path = tmp_path / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def write(tmp_path):
    """Write a dedented file below tmp_path, creating parent directories."""

    def _write(relpath: str, content: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write
