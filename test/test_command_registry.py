import pytest

from descriptors import CommandRegistry, UnknownReferenceError


@pytest.fixture
def core_plugin(write):
    write(
        "plugins/core/commands/review.md",
        """
        ---
        description: Review the current change
        argument-hint: "[path]"
        ---

        Use the `reviewing` skill and the `reviewer` agent on: $ARGUMENTS
        """,
    )
    write(
        "plugins/core/commands/internal/sync.md",
        """
        ---
        description: Sync generated files
        user-invocable: false
        ---

        Regenerate everything.
        """,
    )
    write(
        "plugins/core/skills/reviewing/SKILL.md",
        """
        ---
        name: reviewing
        description: Review code. Use when asked for a review.
        ---

        Look for bugs.
        """,
    )
    write(
        "plugins/core/agents/reviewer.md",
        """
        ---
        name: reviewer
        description: Reviews code
        model: sonnet
        tools: Read, Grep
        ---
        """,
    )


@pytest.mark.asyncio
async def test_load_indexes_plugins_and_builtin(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()

    assert set(registry.commands) == {"review", "sync", "plan"}
    assert "reviewing" in registry.skills
    assert "planning" in registry.skills
    assert set(registry.agents) == {"reviewer", "planner"}
    assert registry.errors == []


@pytest.mark.asyncio
async def test_load_without_builtin(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()
    assert "plan" not in registry.commands


@pytest.mark.asyncio
async def test_missing_plugins_dir_loads_builtin_only(tmp_path) -> None:
    registry = CommandRegistry(tmp_path / "nope")
    await registry.load()
    assert list(registry.commands) == ["plan"]


@pytest.mark.asyncio
async def test_get_command_accepts_leading_slash(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()
    assert registry.get_command("/review") is registry.get_command("review")
    assert registry.get_command("missing") is None


@pytest.mark.asyncio
async def test_user_commands_hide_non_invocable(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()

    names = [c.name for c in registry.user_commands()]
    assert names == ["plan", "review"]
    assert "sync" not in names


@pytest.mark.asyncio
async def test_plugin_command_overrides_builtin(plugins_dir, write) -> None:
    write(
        "plugins/custom/commands/plan.md",
        """
        ---
        description: Custom planning
        ---
        Plan differently.
        """,
    )
    registry = CommandRegistry(plugins_dir)
    await registry.load()
    assert registry.get_command("plan").description == "Custom planning"


@pytest.mark.asyncio
async def test_first_plugin_wins_on_duplicates(plugins_dir, write) -> None:
    for plugin in ("alpha", "beta"):
        write(
            f"plugins/{plugin}/commands/dup.md",
            f"""
            ---
            description: From {plugin}
            ---
            """,
        )
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()
    assert registry.get_command("dup").description == "From alpha"


@pytest.mark.asyncio
async def test_broken_descriptors_are_skipped(plugins_dir, write) -> None:
    write("plugins/core/commands/broken.md", "no front-matter at all\n")
    write(
        "plugins/core/commands/ok.md",
        """
        ---
        description: Fine
        ---
        """,
    )
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()

    assert list(registry.commands) == ["ok"]
    assert len(registry.errors) == 1
    assert "broken.md" in str(registry.errors[0])


@pytest.mark.asyncio
async def test_non_utf8_descriptor_is_skipped(plugins_dir, write) -> None:
    bad = plugins_dir / "core" / "commands" / "bad.md"
    bad.parent.mkdir(parents=True)
    bad.write_bytes(b"---\ndescription: \xff\xfe\n---\n")
    write(
        "plugins/core/commands/ok.md",
        """
        ---
        description: Fine
        ---
        """,
    )
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()

    assert list(registry.commands) == ["ok"]
    assert len(registry.errors) == 1
    assert registry.errors[0].path == bad
    assert "Cannot read file" in str(registry.errors[0])


@pytest.mark.asyncio
async def test_resolve_references(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()

    skill, agent = registry.resolve_references(registry.get_command("review"))
    assert skill.name == "reviewing"
    assert agent.name == "reviewer"

    skill, agent = registry.resolve_references(registry.get_command("plan"))
    assert skill.name == "planning"
    assert agent.model == "opus"

    assert registry.resolve_references(registry.get_command("sync")) == (None, None)


@pytest.mark.asyncio
async def test_resolve_unknown_agent_raises(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()
    del registry.agents["reviewer"]

    with pytest.raises(UnknownReferenceError) as exc_info:
        registry.resolve_references(registry.get_command("review"))
    assert exc_info.value.kind == "agent"
    assert exc_info.value.name == "reviewer"
    assert str(exc_info.value) == "/review requires unknown agent 'reviewer'"


@pytest.mark.asyncio
async def test_resolve_unknown_skill_raises(plugins_dir, write) -> None:
    write(
        "plugins/core/commands/ship.md",
        """
        ---
        description: Ship
        ---
        Invoke the `shipping` skill.
        """,
    )
    registry = CommandRegistry(plugins_dir, include_builtin=False)
    await registry.load()

    with pytest.raises(UnknownReferenceError) as exc_info:
        registry.resolve_references(registry.get_command("ship"))
    assert exc_info.value.kind == "skill"


@pytest.mark.asyncio
async def test_resolve_user_input(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()

    resolved = registry.resolve_user_input("/review src/app.py")
    assert resolved.invoked_command == "review"
    assert resolved.arguments == "src/app.py"
    assert resolved.rendered.endswith("agent on: src/app.py")

    plan = registry.resolve_user_input("/plan add login page")
    assert "add login page" in plan.rendered
    assert "$ARGUMENTS" not in plan.rendered


@pytest.mark.asyncio
async def test_resolve_user_input_passthrough(plugins_dir, core_plugin) -> None:
    registry = CommandRegistry(plugins_dir)
    await registry.load()

    for text in ("/unknown thing", "/sync now", "plain request"):
        resolved = registry.resolve_user_input(text)
        assert resolved.rendered == text
        assert resolved.invoked_command is None
