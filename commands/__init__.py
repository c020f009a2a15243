"""
Command system for the Discord utility bot.
"""

from .command_registry import Command, CommandCategory, CommandDefinition, CommandRegistry, build_registry
from .authorization import DeveloperRegistry
from .command_handler import CommandHandler

__all__ = [
    "Command",
    "CommandCategory",
    "CommandDefinition",
    "CommandRegistry",
    "build_registry",
    "DeveloperRegistry",
    "CommandHandler",
]
