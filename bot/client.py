"""
Discord client setup using discord.py.
"""

import asyncio
import signal
from datetime import datetime, timezone
from typing import Optional

import discord

from bot.config import Config, config
from bot.keep_alive import attach_monitoring, run_server, update_bot_status
from commands.authorization import DeveloperRegistry
from commands.command_handler import CommandHandler
from commands.command_registry import CommandRegistry, build_registry
from utils.error_handler import setup_error_handler
from utils.logger import get_logger
from utils.monitoring import Monitoring
from utils.weather import WeatherClient

logger = get_logger("Client")


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.guild_messages = True
    intents.guild_reactions = True
    return intents


class UtilityBot(discord.Client):
    """Discord client that dispatches prefixed text commands."""

    def __init__(
        self,
        settings: Config = config,
        registry: Optional[CommandRegistry] = None,
        developers: Optional[DeveloperRegistry] = None,
        weather_client: Optional[WeatherClient] = None,
    ):
        super().__init__(intents=build_intents())

        self.settings = settings
        self.start_time = datetime.now(timezone.utc)

        self.registry = registry or build_registry()
        self.developers = developers or DeveloperRegistry()
        self.weather_client = weather_client or WeatherClient(settings.WEATHER_API_KEY)
        self.monitoring = Monitoring()

        self.handler = CommandHandler(
            self,
            registry=self.registry,
            developers=self.developers,
            prefix=settings.PREFIX,
            weather_client=self.weather_client,
            monitoring=self.monitoring,
            start_time=self.start_time,
        )

    async def on_ready(self):
        """Called on every successful (re)connection."""
        count = self.developers.record_connection()
        if not self.developers.is_seeded:
            await self.seed_developers()

        await self.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name=f"{self.settings.PREFIX}help"),
            status=discord.Status.dnd,
        )

        update_bot_status(status="ready", discord_connected=True)
        logger.info(f"Connected to Discord as {self.user} (connection #{count})")

    async def seed_developers(self) -> bool:
        """
        Grant developer access to the application owner.

        A failed lookup leaves the registry unseeded; the next
        connection tries again.
        """
        try:
            info = await self.application_info()
        except discord.HTTPException as e:
            logger.warning(f"Could not fetch application owner: {e}")
            return False

        owner_id = info.team.owner_id if info.team else info.owner.id
        return self.developers.seed_once(owner_id)

    async def on_message(self, message: discord.Message):
        """Handle incoming messages."""
        self.monitoring.record_message()
        await self.handler.handle(message)

    async def on_disconnect(self):
        update_bot_status(discord_connected=False)

    async def close(self):
        """Clean shutdown."""
        logger.info("Shutting down bot...")

        await self.weather_client.close()
        update_bot_status(status="offline", discord_connected=False)
        await super().close()


# Global bot instance
bot: Optional[UtilityBot] = None


def create_bot() -> UtilityBot:
    """Create and return bot instance."""
    global bot
    bot = UtilityBot()
    return bot


async def run_bot():
    """Run the bot."""
    global bot

    config.validate()
    logger.info(f"Application id: {config.application_id}")

    bot = create_bot()
    setup_error_handler()
    attach_monitoring(bot.monitoring)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda s=sig: _on_signal(s))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    if config.KEEP_ALIVE:
        run_server()

    try:
        async with bot:
            await bot.start(config.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Bot error: {e}")
        raise


def _on_signal(sig: signal.Signals) -> None:
    logger.info(f"Received {sig.name}, shutting down...")
    if bot is not None:
        asyncio.create_task(bot.close())
