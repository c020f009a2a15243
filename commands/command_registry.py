"""
Command Registry
Command definitions and the immutable registry they are looked up in
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from utils.logger import get_logger

if TYPE_CHECKING:
    from commands.command_handler import CommandHandler

# Command handler type alias: (message, args, handler)
CommandCallback = Callable[[Any, List[str], "CommandHandler"], Awaitable[None]]


class CommandCategory(Enum):
    """Grouping used by help. Developer commands are privileged."""

    DEVELOPER = "Developer"
    GENERAL = "General"
    UTILITY = "Utility"

    def __str__(self) -> str:
        return self.value


class CommandDefinition:
    """Definition of a command."""

    def __init__(
        self,
        name: str,
        description: str = "",
        category: CommandCategory = CommandCategory.GENERAL,
        aliases: Optional[Sequence[str]] = None,
        usages: Optional[Sequence[Sequence[str]]] = None,
    ):
        self.name = name
        self.description = description
        self.category = category
        self.aliases: Tuple[str, ...] = tuple(aliases or ())
        # Argument-shape templates, e.g. [["location"]]
        self.usages: Tuple[Tuple[str, ...], ...] = tuple(tuple(usage) for usage in usages or ())


class Command:
    """
    Registered command with definition and handler.

    The handler reports failure by raising; the command handler turns
    the exception text into a failure reply.
    """

    def __init__(self, definition: CommandDefinition, handler: CommandCallback):
        self.definition = definition
        self.handler = handler

    @classmethod
    def from_config(cls, config: Dict[str, Any], handler: CommandCallback) -> "Command":
        """
        Build a command from a configuration dict.

        Args:
            config: Command configuration dict with keys:
                - name: Command name (required)
                - description: Command description
                - category: CommandCategory
                - aliases: List of aliases
                - usages: List of argument-shape templates
            handler: Async function to handle the command
        """
        definition = CommandDefinition(
            name=config["name"],
            description=config.get("description", ""),
            category=config.get("category", CommandCategory.GENERAL),
            aliases=config.get("aliases", []),
            usages=config.get("usages", []),
        )
        return cls(definition, handler)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def category(self) -> CommandCategory:
        return self.definition.category

    @property
    def aliases(self) -> Tuple[str, ...]:
        return self.definition.aliases

    @property
    def usages(self) -> Tuple[Tuple[str, ...], ...]:
        return self.definition.usages

    @property
    def is_developer(self) -> bool:
        return self.category is CommandCategory.DEVELOPER

    def matches(self, token: str) -> bool:
        """Check a lowercased token against the name and aliases."""
        return token == self.name or token in self.aliases

    async def invoke(self, message: Any, args: List[str], handler: "CommandHandler") -> None:
        await self.handler(message, args, handler)

    def __repr__(self) -> str:
        return f"<Command name={self.name!r}>"


class CommandRegistry:
    """Ordered, read-only collection of commands."""

    def __init__(self, commands: Iterable[Command]):
        self.logger = get_logger("CommandRegistry")
        self._commands: Tuple[Command, ...] = tuple(commands)

        seen = set()
        for command in self._commands:
            if not command.name or command.name != command.name.lower():
                raise ValueError(f"Command name must be non-empty lowercase: {command.name!r}")
            if any(alias != alias.lower() for alias in command.aliases):
                raise ValueError(f"Aliases of {command.name!r} must be lowercase")
            if command.name in seen:
                raise ValueError(f"Duplicate command name: {command.name!r}")
            seen.add(command.name)
            self.logger.debug(f"Registered command: {command.name}")

    def get(self, name: str) -> Optional[Command]:
        """
        Get a command by name or alias.

        Args:
            name: Command name or alias, any case

        Returns:
            First command in registration order that matches, or None
        """
        normalized = name.lower()
        for command in self._commands:
            if command.matches(normalized):
                return command
        return None

    def get_by_category(self, category: CommandCategory) -> List[Command]:
        return [command for command in self._commands if command.category is category]

    def get_categories(self) -> List[CommandCategory]:
        """Categories that have at least one command, sorted by name."""
        return sorted({command.category for command in self._commands}, key=str)

    def grouped(self) -> Dict[CommandCategory, List[str]]:
        """
        Command names grouped by category.

        Categories are ordered by name and the names within each
        category are sorted.
        """
        return {
            category: sorted(command.name for command in self.get_by_category(category))
            for category in self.get_categories()
        }

    def __iter__(self):
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


def build_registry() -> CommandRegistry:
    """Create the registry with every built-in command, in lookup order."""
    from commands.developer_commands import cmd_shutdown
    from commands.general_commands import cmd_help, cmd_ping, cmd_uptime
    from commands.utility_commands import cmd_weather

    return CommandRegistry([
        # Developer Commands
        Command.from_config(
            {
                "name": "shutdown",
                "description": "Shuts the bot down",
                "category": CommandCategory.DEVELOPER,
            },
            cmd_shutdown,
        ),
        # General Commands
        Command.from_config(
            {
                "name": "help",
                "description": "Sends a list of the bot's commands or provides help for the specified command",
                "category": CommandCategory.GENERAL,
                "usages": [["command name (optional)"]],
            },
            cmd_help,
        ),
        Command.from_config(
            {
                "name": "ping",
                "description": "Sends the bot's current response latency",
                "category": CommandCategory.GENERAL,
                "aliases": ["latency"],
            },
            cmd_ping,
        ),
        Command.from_config(
            {
                "name": "uptime",
                "description": "Sends the bot's current uptime",
                "category": CommandCategory.GENERAL,
            },
            cmd_uptime,
        ),
        # Utility Commands
        Command.from_config(
            {
                "name": "weather",
                "description": "Sends the weather in the specified location",
                "category": CommandCategory.UTILITY,
                "usages": [["location"]],
            },
            cmd_weather,
        ),
    ])
