"""
Command Handler
Decides whether a message is a command, authorizes it and runs it
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

import discord

from bot.config import CONFIRMATION_TIMEOUT, MAX_REPLY_LENGTH
from commands.authorization import DeveloperRegistry
from commands.command_registry import Command, CommandRegistry
from utils.discord import DiscordUtils, EmbedType
from utils.error_handler import ErrorHandler, get_error_handler
from utils.logger import get_logger
from utils.monitoring import Monitoring
from utils.text import strip_str

PERMISSION_DENIED = "You do not have permissions to execute the command!"


class CommandHandler:
    """Handles command parsing, authorization and execution."""

    def __init__(
        self,
        client: Any,
        registry: CommandRegistry,
        developers: DeveloperRegistry,
        prefix: str,
        weather_client: Any = None,
        monitoring: Optional[Monitoring] = None,
        error_handler: Optional[ErrorHandler] = None,
        start_time: Optional[datetime] = None,
        max_reply_length: int = MAX_REPLY_LENGTH,
        confirmation_timeout: float = CONFIRMATION_TIMEOUT,
    ):
        self.logger = get_logger("Command")
        self.client = client
        self.registry = registry
        self.developers = developers
        self.prefix = prefix
        self.weather_client = weather_client
        self.monitoring = monitoring
        self.error_handler = error_handler or get_error_handler()
        self.start_time = start_time or datetime.now(timezone.utc)
        self.max_reply_length = max_reply_length
        self.confirmation_timeout = confirmation_timeout

    def is_eligible(self, message: Any) -> bool:
        """
        Check whether a message may be a command invocation.

        It must start with the prefix, come from a human in a guild
        channel and be a regular message (not a system notice).
        """
        return (
            message.content.startswith(self.prefix)
            and not message.author.bot
            and message.guild is not None
            and message.type == discord.MessageType.default
        )

    def parse_command(self, content: str) -> Tuple[Optional[str], List[str]]:
        """
        Split message content into a command name and arguments.

        Content is split on single spaces with no quoting, so repeated
        spaces produce empty arguments. The name has the prefix removed
        and is lowercased.

        Returns:
            (command_name, args); command_name is None when the first
            token does not carry the prefix
        """
        tokens = content.split(" ")
        first = tokens[0].lower()
        prefix = self.prefix.lower()

        if not first.startswith(prefix):
            return None, tokens[1:]
        return first[len(prefix):], tokens[1:]

    def resolve(self, content: str) -> Tuple[Optional[Command], List[str]]:
        name, args = self.parse_command(content)
        if not name:
            return None, args
        return self.registry.get(name), args

    def is_authorized(self, command: Command, author_id: Any) -> bool:
        return not command.is_developer or author_id in self.developers

    async def handle(self, message: Any) -> None:
        """
        Handle an incoming message.

        Ineligible messages and unknown commands are ignored without a
        reply. Every other outcome is reported in the channel.

        Args:
            message: Discord message object
        """
        if not self.is_eligible(message):
            return

        command, args = self.resolve(message.content)
        if command is None:
            return

        if not self.is_authorized(command, message.author.id):
            self.logger.info(f"Denied {command.name} to {message.author.id}")
            await DiscordUtils.safe_reply(message.channel, PERMISSION_DENIED, EmbedType.FAILURE)
            return

        self.logger.debug(f"Executing: {command.name} {args}")
        if self.monitoring:
            self.monitoring.record_command()

        try:
            await command.invoke(message, args, self)
        except Exception as error:
            self.error_handler.handle_exception(error, command.name)
            if self.monitoring:
                self.monitoring.record_error()
            await self.report_failure(message.channel, error)

    async def report_failure(self, channel: Any, error: Exception) -> None:
        """
        Send the error text as a failure reply, capped to the reply length.

        Nothing is sent when the cap is too small to truncate safely. The
        send is best-effort: a failure to deliver is logged and dropped.
        """
        text = strip_str(str(error) or type(error).__name__, self.max_reply_length, ellipsis=True)
        if text is None:
            return
        await DiscordUtils.safe_reply(channel, text, EmbedType.FAILURE)
