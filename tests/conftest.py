import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before any project module is imported
os.environ["DISCORD_TOKEN"] = "MTIzNDU2Nzg5MDEyMzQ1Njc4.GhIjKl.test-token"
os.environ["WEATHER_API_KEY"] = "test-weather-key"
os.environ["BOT_PREFIX"] = "<"
os.environ["KEEP_ALIVE"] = "false"
os.environ["DEBUG"] = "false"

import discord  # noqa: E402

from commands.authorization import DeveloperRegistry  # noqa: E402
from commands.command_handler import CommandHandler  # noqa: E402
from commands.command_registry import build_registry  # noqa: E402
from utils.error_handler import ErrorHandler  # noqa: E402

OWNER_ID = 42
USER_ID = 7


@pytest.fixture
def client():
    """A mock Discord client."""
    mock = MagicMock()
    mock.user.name = "UtilityBot"
    mock.user.display_avatar.url = "https://cdn.example/avatar.png"
    mock.close = AsyncMock()
    mock.wait_for = AsyncMock()
    return mock


@pytest.fixture
def channel():
    """A mock text channel whose sends return a mock message."""
    mock = MagicMock()
    sent = MagicMock()
    sent.id = 999
    sent.edit = AsyncMock()
    sent.delete = AsyncMock()
    sent.add_reaction = AsyncMock()
    mock.send = AsyncMock(return_value=sent)
    return mock


@pytest.fixture
def make_message(channel):
    """Factory for inbound guild messages."""

    def factory(
        content: str,
        author_id: int = USER_ID,
        bot: bool = False,
        guild: bool = True,
        kind: discord.MessageType = discord.MessageType.default,
    ):
        message = MagicMock()
        message.content = content
        message.author.id = author_id
        message.author.bot = bot
        message.guild = MagicMock() if guild else None
        message.type = kind
        message.channel = channel
        return message

    return factory


@pytest.fixture
def developers():
    registry = DeveloperRegistry()
    registry.seed_once(OWNER_ID)
    return registry


@pytest.fixture
def weather_client():
    return MagicMock(get_by_city=AsyncMock())


@pytest.fixture
def handler(client, developers, weather_client):
    return CommandHandler(
        client,
        registry=build_registry(),
        developers=developers,
        prefix="<",
        weather_client=weather_client,
        error_handler=ErrorHandler(),
    )


def sent_embeds(channel):
    """Embeds passed to every channel.send call, in order."""
    return [call.kwargs.get("embed") for call in channel.send.call_args_list]


def field_map(embed):
    return {field.name: field.value for field in embed.fields}
