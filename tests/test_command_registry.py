"""Tests for command descriptors and registry lookup."""

from unittest.mock import AsyncMock

import pytest

from commands.command_registry import Command, CommandCategory, CommandDefinition, CommandRegistry, build_registry


def _named(name, aliases=(), category=CommandCategory.GENERAL):
    return Command(CommandDefinition(name, category=category, aliases=aliases), AsyncMock())


@pytest.fixture
def registry():
    return build_registry()


def test_registration_order(registry):
    assert [c.name for c in registry] == ["shutdown", "help", "ping", "uptime", "weather"]


def test_names_are_unique_and_lowercase(registry):
    names = [c.name for c in registry]
    assert len(names) == len(set(names))
    assert all(name == name.lower() for name in names)


def test_lookup_by_name_returns_descriptor(registry):
    for command in registry:
        assert registry.get(command.name) is command


def test_lookup_by_alias_matches_name(registry):
    for command in registry:
        for alias in command.aliases:
            assert registry.get(alias) is registry.get(command.name)


def test_lookup_is_case_insensitive(registry):
    assert registry.get("PING") is registry.get("ping")
    assert registry.get("LaTeNcY") is registry.get("ping")


def test_unknown_token_yields_nothing(registry):
    assert registry.get("nope") is None
    assert registry.get("") is None


def test_privileged_is_exactly_developer_category(registry):
    for command in registry:
        assert command.is_developer == (command.category is CommandCategory.DEVELOPER)
    assert [c.name for c in registry if c.is_developer] == ["shutdown"]


def test_first_registered_wins_on_shared_alias():
    first = _named("alpha", aliases=["x"])
    second = _named("beta", aliases=["x"])
    registry = CommandRegistry([first, second])
    assert registry.get("x") is first


def test_duplicate_names_are_rejected():
    with pytest.raises(ValueError):
        CommandRegistry([_named("same"), _named("same")])


def test_uppercase_names_and_aliases_are_rejected():
    with pytest.raises(ValueError):
        CommandRegistry([_named("Loud")])
    with pytest.raises(ValueError):
        CommandRegistry([_named("quiet", aliases=["LOUD"])])


def test_grouped_sorts_categories_and_names(registry):
    grouped = registry.grouped()
    assert [str(c) for c in grouped] == ["Developer", "General", "Utility"]
    assert grouped[CommandCategory.GENERAL] == ["help", "ping", "uptime"]


def test_registry_is_read_only(registry):
    commands = list(registry)
    commands.clear()
    assert len(registry) == 5


def test_from_config_fills_defaults():
    command = Command.from_config({"name": "echo"}, AsyncMock())
    assert command.description == ""
    assert command.category is CommandCategory.GENERAL
    assert command.aliases == ()
    assert command.usages == ()
    assert not command.is_developer


@pytest.mark.asyncio
async def test_invoke_passes_message_args_and_handler():
    callback = AsyncMock()
    command = Command.from_config({"name": "echo", "usages": [["text"]]}, callback)

    await command.invoke("message", ["a", "b"], "handler")

    callback.assert_awaited_once_with("message", ["a", "b"], "handler")
    assert command.usages == (("text",),)
