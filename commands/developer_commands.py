"""
Developer Commands
Privileged commands, available only to developer ids
"""

import asyncio
from enum import Enum
from typing import TYPE_CHECKING, Any, List

from utils.discord import DiscordUtils, EmbedType
from utils.logger import get_logger

if TYPE_CHECKING:
    from commands.command_handler import CommandHandler

CHECK_MARK = "✅"
CROSS_MARK = "❎"

logger = get_logger("Developer")


class ConfirmationOutcome(Enum):
    AFFIRMATIVE = "affirmative"
    NEGATIVE = "negative"
    TIMEOUT = "timeout"


async def await_confirmation(client: Any, prompt: Any, author_id: Any, timeout: float) -> ConfirmationOutcome:
    """
    Wait for the author to react to a prompt with a check or cross mark.

    Reactions from other users, on other messages, or with other emoji
    are ignored.

    Args:
        client: Discord client providing ``wait_for``
        prompt: The message carrying the two reactions
        author_id: Only this user's reaction counts
        timeout: Seconds to wait

    Returns:
        The outcome; TIMEOUT when nothing qualifying arrived in time
    """

    def check(reaction: Any, user: Any) -> bool:
        return (
            reaction.message.id == prompt.id
            and user.id == author_id
            and str(reaction.emoji) in (CHECK_MARK, CROSS_MARK)
        )

    try:
        reaction, _user = await client.wait_for("reaction_add", check=check, timeout=timeout)
    except asyncio.TimeoutError:
        return ConfirmationOutcome.TIMEOUT

    if str(reaction.emoji) == CHECK_MARK:
        return ConfirmationOutcome.AFFIRMATIVE
    return ConfirmationOutcome.NEGATIVE


async def cmd_shutdown(message: Any, args: List[str], handler: "CommandHandler") -> None:
    """Ask for confirmation, then close the client on a check mark."""
    prompt = await DiscordUtils.send_default_reply(message.channel, "Are you sure?", EmbedType.CONFIRMATION)

    await prompt.add_reaction(CHECK_MARK)
    await prompt.add_reaction(CROSS_MARK)

    outcome = await await_confirmation(handler.client, prompt, message.author.id, handler.confirmation_timeout)

    await prompt.delete()

    if outcome is ConfirmationOutcome.AFFIRMATIVE:
        logger.info(f"Shutdown confirmed by {message.author.id}")
        await handler.client.close()
    else:
        logger.debug(f"Shutdown not confirmed ({outcome.value})")
