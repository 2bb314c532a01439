"""Tests for the plugkit command line."""

import json
import textwrap

import pytest
from rich.console import Console

import config
import main
from utils import terminal_ui
from utils.theme import LIGHT_THEME, Theme


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep rich from wrapping long lines in captured output
    monkeypatch.setattr(terminal_ui, "console", Console(width=200, no_color=True))


def _write(path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")


@pytest.fixture
def repo(tmp_path):
    plugin = tmp_path / "plugins" / "core"
    _write(
        plugin / ".claude-plugin" / "plugin.json",
        json.dumps(
            {"name": "core", "version": "1.0.0", "description": "Core", "license": "MIT"}
        ),
    )
    _write(
        plugin / "commands" / "tdd.md",
        """
        ---
        description: Test-driven development loop
        argument-hint: "[behavior]"
        ---
        Write the test first, then /plan the next step.
        """,
    )
    _write(
        plugin / "commands" / "secret.md",
        """
        ---
        description: Internal maintenance
        user-invocable: false
        ---
        """,
    )
    _write(
        plugin / "commands" / "orphan.md",
        """
        ---
        description: Needs a missing skill
        ---
        Use the `ghost` skill.
        """,
    )
    return tmp_path


def test_validate_ok(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "validate"]) == 0
    out = capsys.readouterr().out
    assert "Validated 3 command files across 1 plugins" in out
    assert "Validated 1 plugin.json manifests across 1 plugins" in out


def test_validate_only_selected(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "validate", "--only", "skills", "hooks"]) == 0
    out = capsys.readouterr().out
    assert "skill directories" in out
    assert "command files" not in out


def test_validate_reports_errors(repo, capsys) -> None:
    _write(repo / "plugins" / "core" / "commands" / "empty.md", "\n")
    assert main.run(["--root", str(repo), "validate", "--only", "commands"]) == 1
    out = capsys.readouterr().out
    assert "core/commands/empty.md - Empty command file" in out


def test_validate_missing_plugins_dir(tmp_path, capsys) -> None:
    assert main.run(["--root", str(tmp_path), "validate"]) == 1
    assert "plugins directory not found" in capsys.readouterr().out


def test_list_hides_non_invocable(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "list"]) == 0
    out = capsys.readouterr().out
    assert "/plan [feature or task]" in out
    assert "/tdd [behavior]" in out
    assert "/secret" not in out


def test_show(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "show", "/plan"]) == 0
    out = capsys.readouterr().out
    assert "Usage: /plan [feature or task]" in out
    assert "Uses skill: planning, agent: planner" in out


def test_show_refuses_non_invocable(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "show", "secret"]) == 1
    assert "Unknown command: /secret" in capsys.readouterr().out


def test_refs(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "refs", "plan"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "/build-and-fix  (not installed)",
        "/code-review  (not installed)",
        "/plan",
        "/tdd",
    ]


def test_resolve(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "resolve", "plan"]) == 0
    out = capsys.readouterr().out
    assert "planning" in out
    assert "planner" in out


def test_resolve_unknown_skill(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "resolve", "orphan"]) == 1
    assert "/orphan requires unknown skill 'ghost'" in capsys.readouterr().out


def test_no_builtin(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "--no-builtin", "show", "plan"]) == 1


def test_init(tmp_path, capsys) -> None:
    assert main.run(["--root", str(tmp_path), "init", "fresh-plugin"]) == 0
    assert (tmp_path / "plugins" / "fresh-plugin" / ".claude-plugin" / "plugin.json").exists()
    assert main.run(["--root", str(tmp_path), "init", "fresh-plugin"]) == 1
    assert "already exists" in capsys.readouterr().out


def test_invalid_config(repo, set_config, capsys) -> None:
    set_config(TUI_THEME="neon")
    assert main.run(["--root", str(repo), "list"]) == 1
    assert "TUI_THEME" in capsys.readouterr().out


def test_unknown_theme_is_a_configuration_error(repo, set_config, capsys) -> None:
    set_config(TUI_THEME="blue")
    assert main.run(["--root", str(repo), "list"]) == 1
    out = capsys.readouterr().out
    assert "Configuration Error" in out
    assert "TUI_THEME" in out


def test_non_integer_setting_is_a_configuration_error(repo, monkeypatch, capsys) -> None:
    monkeypatch.setattr(config, "_cfg", {"SKILL_DESCRIPTION_MAX_LENGTH": "abc"})
    monkeypatch.setattr(config, "_invalid_values", {})

    assert config._int_setting("SKILL_DESCRIPTION_MAX_LENGTH", 1024) == 1024
    assert main.run(["--root", str(repo), "list"]) == 1
    out = capsys.readouterr().out
    assert "Configuration Error" in out
    assert "SKILL_DESCRIPTION_MAX_LENGTH=abc" in out


def test_theme_applied_after_validation(repo, set_config, monkeypatch) -> None:
    monkeypatch.setattr(Theme, "_current_theme", "dark")
    set_config(TUI_THEME="light")
    assert main.run(["--root", str(repo), "list"]) == 0
    assert Theme.get_colors() == LIGHT_THEME


def test_list_markdown(repo, capsys) -> None:
    assert main.run(["--root", str(repo), "list", "--markdown"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "## Commands",
        "- `/orphan`: Needs a missing skill",
        "- `/plan [feature or task]`: Create a structured implementation plan for a feature or task",
        "- `/tdd [behavior]`: Test-driven development loop",
    ]


def test_init_with_broken_marketplace(tmp_path, capsys) -> None:
    marketplace = tmp_path / ".claude-plugin" / "marketplace.json"
    marketplace.parent.mkdir()
    marketplace.write_text("[]")

    assert main.run(["--root", str(tmp_path), "init", "fresh-plugin"]) == 0
    assert "Could not auto-register plugin" in capsys.readouterr().out
