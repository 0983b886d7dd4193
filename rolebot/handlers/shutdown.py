"""
Reaction Role Bot - Shutdown Handler
=====================================

Session summary logged when the client closes.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from rolebot.core.logger import logger

if TYPE_CHECKING:
    from rolebot.bot import RoleBot


def _format_uptime(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


async def shutdown_handler(bot: "RoleBot") -> None:
    """
    Log the shutdown and the session's totals.

    Args:
        bot: The RoleBot instance
    """
    logger.info("Shutting Down Role Bot")

    uptime = (datetime.now(timezone.utc) - bot.started_at).total_seconds()

    logger.tree("Bot Shutdown Complete", [
        ("Uptime", _format_uptime(uptime)),
        ("Roles Granted", str(bot.roles_granted)),
        ("Run ID", logger.run_id),
    ], emoji="👋")


__all__ = ["shutdown_handler"]
