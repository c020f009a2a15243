"""
Configuration management for the Discord utility bot.
Loads environment variables and provides configuration settings.
"""

import base64
import binascii
import os
from dataclasses import dataclass
from pathlib import Path

import discord
from dotenv import load_dotenv

from utils.error_handler import ConfigurationError

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Discord rejects messages longer than this
MAX_REPLY_LENGTH = 2000

# Seconds to wait for a reaction on a confirmation prompt
CONFIRMATION_TIMEOUT = 60

SUCCESS_COLOR = discord.Color.from_rgb(0x70, 0x55, 0x44)
FAILURE_COLOR = discord.Color.from_rgb(0xEF, 0x43, 0x3F)
CONFIRMATION_COLOR = discord.Color.from_rgb(0x78, 0xB4, 0x54)
WARNING_COLOR = discord.Color.from_rgb(0xFF, 0xF2, 0x36)


def application_id_from_token(token: str) -> int:
    """
    Extract the application id encoded in a bot token.

    The first dot-separated segment of a bot token is the base64 encoded
    application id.

    Raises:
        ConfigurationError: If the token does not have that shape
    """
    segment = token.split(".")[0]
    padded = segment + "=" * (-len(segment) % 4)
    try:
        decoded = base64.b64decode(padded, validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError("DISCORD_TOKEN is malformed") from e

    if not decoded.isdigit():
        raise ConfigurationError("DISCORD_TOKEN is malformed")
    return int(decoded)


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Secrets
    DISCORD_TOKEN: str
    WEATHER_API_KEY: str

    # Command prefix
    PREFIX: str = "<"

    # Web Server (keep-alive health endpoint)
    KEEP_ALIVE: bool = False
    PORT: int = 11186
    HOST: str = "0.0.0.0"

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            WEATHER_API_KEY=os.getenv("WEATHER_API_KEY", ""),
            PREFIX=os.getenv("BOT_PREFIX", "<"),
            KEEP_ALIVE=os.getenv("KEEP_ALIVE", "false").lower() == "true",
            PORT=int(os.getenv("PORT", "11186")),
            HOST=os.getenv("HOST", "0.0.0.0"),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
        )

    @property
    def application_id(self) -> int:
        return application_id_from_token(self.DISCORD_TOKEN)

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ConfigurationError("DISCORD_TOKEN is required")
        if not self.WEATHER_API_KEY:
            raise ConfigurationError("WEATHER_API_KEY is required")
        if not self.PREFIX:
            raise ConfigurationError("BOT_PREFIX must not be empty")

        # Raises on a malformed token
        application_id_from_token(self.DISCORD_TOKEN)


# Global config instance
config = Config.from_env()
