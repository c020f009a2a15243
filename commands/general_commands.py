"""
General Commands
help, ping and uptime
"""

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional

import discord

from bot.config import SUCCESS_COLOR
from utils.error_handler import CommandError
from utils.text import as_text

if TYPE_CHECKING:
    from commands.command_handler import CommandHandler

MEASURING = "*Measuring…*"


def _avatar_url(user: Any) -> Optional[str]:
    if user is None:
        return None
    return user.display_avatar.url


async def cmd_help(message: Any, args: List[str], handler: "CommandHandler") -> None:
    """Handle the help command."""
    if args:
        embed = command_help_embed(args[0], handler)
    else:
        embed = help_overview_embed(handler)

    await message.channel.send(embed=embed)


def help_overview_embed(handler: "CommandHandler") -> discord.Embed:
    """One field per category listing its command names."""
    bot_user = handler.client.user
    bot_name = bot_user.name if bot_user else "Bot"

    embed = discord.Embed(color=SUCCESS_COLOR)
    embed.set_author(name=f"{bot_name} Help", icon_url=_avatar_url(bot_user))

    for category, names in handler.registry.grouped().items():
        embed.add_field(name=f"{category} Commands", value=", ".join(names), inline=False)

    return embed


def command_help_embed(query: str, handler: "CommandHandler") -> discord.Embed:
    """
    Detailed help for one command.

    Raises:
        CommandError: If no command matches the query
    """
    command = handler.registry.get(query)
    if command is None:
        raise CommandError("No command has been found by the query!")

    title = f"{handler.prefix}{command.name}"
    if command.is_developer:
        title += " (developer-only)"

    embed = discord.Embed(color=SUCCESS_COLOR, description=command.description)
    embed.set_author(name=title, icon_url=_avatar_url(handler.client.user))
    embed.add_field(name="Category", value=str(command.category), inline=False)

    if command.aliases:
        embed.add_field(name="Aliases", value=", ".join(sorted(command.aliases)), inline=False)

    if command.usages:
        lines = []
        for usage in command.usages:
            placeholders = " ".join(f"<{label}>" for label in usage)
            lines.append(f"{handler.prefix}{command.name} {placeholders}")
        embed.add_field(name="Usages", value="\n".join(lines), inline=False)

    return embed


async def cmd_ping(message: Any, args: List[str], handler: "CommandHandler") -> None:
    """Handle the ping command."""
    started = time.monotonic()
    placeholder = await message.channel.send(MEASURING)
    ping = int((time.monotonic() - started) * 1000)

    embed = discord.Embed(color=SUCCESS_COLOR, description=f"{ping} ms")
    embed.set_author(name="Rest Ping")

    await placeholder.edit(content=None, embed=embed)


async def cmd_uptime(message: Any, args: List[str], handler: "CommandHandler") -> None:
    """Handle the uptime command."""
    start_time = handler.start_time
    elapsed = datetime.now(timezone.utc) - start_time
    millis = max(0, int(elapsed.total_seconds() * 1000))

    embed = discord.Embed(
        color=SUCCESS_COLOR,
        description=as_text(millis),
        timestamp=start_time,
    )
    embed.set_author(name="Uptime")
    embed.set_footer(text="Last Reboot")

    await message.channel.send(embed=embed)
