"""Main entry point for plugkit."""

import argparse
import asyncio
import importlib.metadata
import sys
from pathlib import Path
from typing import Optional, Sequence

from config import Config
from descriptors import (
    CommandRegistry,
    DescriptorError,
    PluginsDirNotFoundError,
    UnknownReferenceError,
    find_command_references,
    render_command_help,
    render_commands_section,
)
from scaffold import init_plugin
from utils import get_log_file_path, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs
from validation import VALIDATORS, validate_all


def _plugins_dir(args: argparse.Namespace) -> Path:
    return Path(args.root) / Config.PLUGINS_DIR


async def _load_registry(args: argparse.Namespace) -> CommandRegistry:
    registry = CommandRegistry(_plugins_dir(args), include_builtin=not args.no_builtin)
    await registry.load()
    for error in registry.errors:
        terminal_ui.print_warning(f"Skipped: {error}")
    return registry


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        reports = asyncio.run(validate_all(_plugins_dir(args), args.only))
    except PluginsDirNotFoundError as e:
        terminal_ui.print_error(str(e), title="Validation Error")
        return 1

    failed = False
    for report in reports:
        for issue in report.issues:
            terminal_ui.print_issue(issue.severity, issue.location, issue.message)
        if report.ok:
            terminal_ui.print_success(report.summary)
        else:
            failed = True
            terminal_ui.print_warning(f"{report.summary} ({len(report.errors)} errors)")
    return 1 if failed else 0


def cmd_list(args: argparse.Namespace) -> int:
    registry = asyncio.run(_load_registry(args))
    commands = registry.user_commands()
    if args.markdown:
        section = render_commands_section(commands)
        if section:
            terminal_ui.console.print(section, markup=False)
        return 0
    if not commands:
        terminal_ui.print_info("No user-invocable commands found")
        return 0

    rows = [(c.usage, c.description) for c in commands]
    terminal_ui.print_table("Commands", ["Command", "Description"], rows)
    return 0


def _find_command(registry: CommandRegistry, name: str):
    command = registry.get_command(name)
    if command is None or not command.user_invocable:
        terminal_ui.print_error(f"Unknown command: /{name.removeprefix('/')}")
        return None
    return command


def cmd_show(args: argparse.Namespace) -> int:
    registry = asyncio.run(_load_registry(args))
    command = _find_command(registry, args.name)
    if command is None:
        return 1
    terminal_ui.console.print(render_command_help(command), markup=False)
    return 0


def cmd_refs(args: argparse.Namespace) -> int:
    registry = asyncio.run(_load_registry(args))
    command = _find_command(registry, args.name)
    if command is None:
        return 1
    for ref in sorted(find_command_references(command.body)):
        marker = "" if registry.get_command(ref) else "  (not installed)"
        terminal_ui.console.print(f"{ref}{marker}", markup=False)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    registry = asyncio.run(_load_registry(args))
    command = _find_command(registry, args.name)
    if command is None:
        return 1
    try:
        skill, agent = registry.resolve_references(command)
    except UnknownReferenceError as e:
        terminal_ui.print_error(str(e), title="Resolution Error")
        return 1

    rows = []
    if skill:
        rows.append(("skill", skill.name, str(skill.path / "SKILL.md")))
    if agent:
        rows.append(("agent", agent.name, str(agent.path)))
    if not rows:
        terminal_ui.print_info(f"{command.invocation} names no skill or agent")
        return 0
    terminal_ui.print_table(command.invocation, ["Kind", "Name", "Path"], rows)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    try:
        result = init_plugin(Path(args.root), args.name)
    except (ValueError, FileExistsError) as e:
        terminal_ui.print_error(str(e), title="Init Error")
        return 1

    terminal_ui.print_success(f"Plugin template created at {result.plugin_dir}")
    if result.registered:
        terminal_ui.print_success("Plugin registered in marketplace.json")
    else:
        terminal_ui.print_warning(f"{result.note}; add the plugin to it manually")
    terminal_ui.console.print("\nNext steps:")
    terminal_ui.console.print(
        f"  1. Edit {result.plugin_dir}/.claude-plugin/plugin.json", markup=False
    )
    terminal_ui.console.print("  2. Update the plugin description in marketplace.json")
    terminal_ui.console.print("  3. Add skills, commands, agents, or rules to the plugin")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugkit", description="Load, validate and scaffold command plugins"
    )

    try:
        version = importlib.metadata.version("plugkit")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"plugkit {version}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.plugkit/logs/",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Repository root containing the plugins directory (default: current directory)",
    )
    parser.add_argument(
        "--no-builtin",
        action="store_true",
        help="Do not load the bundled /plan command and its skill and agent",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate plugin components")
    validate.add_argument(
        "--only",
        nargs="+",
        choices=list(VALIDATORS),
        help="Run only these validators",
    )
    validate.set_defaults(func=cmd_validate)

    list_cmd = sub.add_parser("list", help="List user-invocable commands")
    list_cmd.add_argument(
        "--markdown", action="store_true", help="Print the listing as a markdown section"
    )
    list_cmd.set_defaults(func=cmd_list)

    show = sub.add_parser("show", help="Show help for a command")
    show.add_argument("name", help="Command name, with or without the leading /")
    show.set_defaults(func=cmd_show)

    refs = sub.add_parser("refs", help="List commands referenced by a command's body")
    refs.add_argument("name")
    refs.set_defaults(func=cmd_refs)

    resolve = sub.add_parser("resolve", help="Resolve the skill and agent a command uses")
    resolve.add_argument("name")
    resolve.set_defaults(func=cmd_resolve)

    init = sub.add_parser("init", help="Create a new plugin skeleton")
    init.add_argument("name", help="Plugin name (kebab-case)")
    init.set_defaults(func=cmd_init)

    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Initialize logging only in verbose mode
    if args.verbose:
        ensure_runtime_dirs(create_logs=True)
        setup_logger()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        return 1
    terminal_ui.apply_theme(Config.TUI_THEME)

    try:
        code = args.func(args)
    except DescriptorError as e:
        terminal_ui.print_error(str(e))
        code = 1

    if args.verbose and get_log_file_path():
        terminal_ui.print_log_location(get_log_file_path())
    return code


def main():
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
