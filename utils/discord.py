"""
Discord Utilities
Styled replies and best-effort message helpers
"""

import asyncio
from enum import Enum
from typing import Any, Optional

import aiohttp
import discord

from bot.config import CONFIRMATION_COLOR, FAILURE_COLOR, SUCCESS_COLOR, WARNING_COLOR
from utils.logger import get_logger

logger = get_logger("DiscordUtils")

# Errors a send can fail with: API rejections and transport failures
SEND_ERRORS = (discord.DiscordException, aiohttp.ClientError, asyncio.TimeoutError)


class EmbedType(Enum):
    """Visual treatment of a default reply."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    CONFIRMATION = "Confirmation"
    WARNING = "Warning"

    @property
    def title(self) -> str:
        return self.value

    @property
    def color(self) -> discord.Color:
        return {
            EmbedType.SUCCESS: SUCCESS_COLOR,
            EmbedType.FAILURE: FAILURE_COLOR,
            EmbedType.CONFIRMATION: CONFIRMATION_COLOR,
            EmbedType.WARNING: WARNING_COLOR,
        }[self]


def build_embed(description: Any, embed_type: EmbedType) -> discord.Embed:
    """Build the embed used for every default reply."""
    embed = discord.Embed(description=str(description), color=embed_type.color)
    embed.set_author(name=f"{embed_type.title}!")
    return embed


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    async def send_default_reply(channel: Any, description: Any, embed_type: EmbedType) -> discord.Message:
        """
        Send a styled reply. Errors propagate to the caller.

        Args:
            channel: Discord channel (anything with ``send``)
            description: Reply text
            embed_type: Visual treatment

        Returns:
            The sent message
        """
        return await channel.send(embed=build_embed(description, embed_type))

    @staticmethod
    async def safe_send(
        channel: Any,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
    ) -> Optional[discord.Message]:
        """
        Send a message, best-effort.

        A failed send is logged and reported as None; callers that only
        notify the user discard the result.

        Args:
            channel: Discord channel
            content: Message content
            embed: Optional embed

        Returns:
            Sent message or None if failed
        """
        if not channel or not hasattr(channel, "send"):
            return None
        try:
            return await channel.send(content=content, embed=embed)
        except SEND_ERRORS as e:
            logger.debug(f"Reply could not be sent: {e}")
            return None

    @staticmethod
    async def safe_reply(channel: Any, description: Any, embed_type: EmbedType) -> Optional[discord.Message]:
        """Best-effort variant of ``send_default_reply``."""
        return await DiscordUtils.safe_send(channel, embed=build_embed(description, embed_type))
