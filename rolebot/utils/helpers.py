"""
Reaction Role Bot - Helper Functions
=====================================

Fetch helpers that turn Discord lookups into Optional results.
"""

from typing import Optional

import discord

from rolebot.core.logger import logger


# =============================================================================
# Message Helpers
# =============================================================================

async def safe_fetch_message(
    channel: discord.abc.Messageable,
    message_id: int
) -> Optional[discord.Message]:
    """
    Safely fetch a message with proper error handling.

    Args:
        channel: The channel/thread to fetch from
        message_id: The message ID to fetch

    Returns:
        The message if found, None otherwise
    """
    try:
        return await channel.fetch_message(message_id)
    except discord.NotFound:
        logger.warning("Message Not Found", [
            ("Message ID", str(message_id)),
        ])
        return None
    except discord.Forbidden:
        logger.warning("No Permission To Fetch Message", [
            ("Message ID", str(message_id)),
        ])
        return None
    except discord.HTTPException as e:
        logger.warning("HTTP Error Fetching Message", [
            ("Message ID", str(message_id)),
            ("Error", str(e)),
        ])
        return None


# =============================================================================
# Member Helpers
# =============================================================================

async def resolve_member(
    guild: discord.Guild,
    user_id: int,
    member: Optional[discord.Member] = None
) -> Optional[discord.Member]:
    """
    Resolve a guild member from the event, the member cache, or the API.

    Returns:
        The member, or None if the user is not in the guild.
    """
    if member is not None:
        return member

    cached = guild.get_member(user_id)
    if cached is not None:
        return cached

    try:
        return await guild.fetch_member(user_id)
    except discord.NotFound:
        logger.debug("Member Not Found", [
            ("User ID", str(user_id)),
            ("Guild ID", str(guild.id)),
        ])
        return None


__all__ = ["safe_fetch_message", "resolve_member"]
