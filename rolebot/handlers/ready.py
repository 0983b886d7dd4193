"""
Reaction Role Bot - Ready Handler
==================================

Startup handshake: log the connection and cache the watched message.
"""

import asyncio
from typing import TYPE_CHECKING, Optional

import discord

from rolebot.core.config import MESSAGE_CACHE_TIMEOUT
from rolebot.core.logger import logger
from rolebot.utils import safe_fetch_message

if TYPE_CHECKING:
    from rolebot.bot import RoleBot


# =============================================================================
# Message Handshake
# =============================================================================

async def load_target_message(bot: "RoleBot") -> Optional[discord.Message]:
    """
    Resolve guild -> channel -> message for the watched message.

    Args:
        bot: The RoleBot instance

    Returns:
        The fetched message, or None if any step could not be resolved.
    """
    config = bot.config

    guild = bot.get_guild(config.guild_id)
    if guild is None:
        logger.warning("Configured Guild Not Available", [
            ("Guild ID", str(config.guild_id)),
            ("Action", "Invite the bot to the server"),
        ])
        return None

    channel = guild.get_channel_or_thread(config.channel_id)
    if channel is None:
        try:
            channel = await guild.fetch_channel(config.channel_id)
        except discord.NotFound:
            logger.warning("Configured Channel Not Found", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Channel ID", str(config.channel_id)),
            ])
            return None
        except discord.Forbidden:
            logger.warning("No Permission To View Configured Channel", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Channel ID", str(config.channel_id)),
            ])
            return None
        except discord.HTTPException as e:
            logger.warning("HTTP Error Fetching Configured Channel", [
                ("Channel ID", str(config.channel_id)),
                ("Error", str(e)),
            ])
            return None

    if not isinstance(channel, discord.abc.Messageable):
        logger.warning("Configured Channel Is Not A Text Channel", [
            ("Channel ID", str(config.channel_id)),
            ("Type", type(channel).__name__),
        ])
        return None

    return await safe_fetch_message(channel, config.message_id)


# =============================================================================
# Ready Handler
# =============================================================================

async def on_ready_handler(bot: "RoleBot") -> None:
    """
    Log startup details and cache the watched message.

    Failures are logged and swallowed; the reaction handler does not
    depend on the cached message.
    """
    config = bot.config

    logger.startup_tree(
        bot_name=str(bot.user),
        bot_id=bot.user.id,
        guilds=len(bot.guilds),
        latency=bot.latency * 1000,
        extra=[
            ("Guild ID", str(config.guild_id)),
            ("Channel ID", str(config.channel_id)),
            ("Message ID", str(config.message_id)),
        ],
    )

    try:
        async with asyncio.timeout(MESSAGE_CACHE_TIMEOUT):
            bot.target_message = await load_target_message(bot)
    except asyncio.TimeoutError:
        logger.error("Timeout Caching Target Message", [
            ("Timeout", f"{MESSAGE_CACHE_TIMEOUT}s"),
        ])
        return
    except Exception as e:
        logger.exception("Something Went Wrong When Caching The Message", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)),
        ])
        return

    if bot.target_message is None:
        logger.warning("Target Message Not Cached", [
            ("Message ID", str(config.message_id)),
            ("Note", "Reactions are still handled from raw events"),
        ])
        return

    logger.info("Target Message Cached", [
        ("Message ID", str(bot.target_message.id)),
        ("Channel", str(bot.target_message.channel)),
        ("Jump URL", bot.target_message.jump_url),
    ])


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["load_target_message", "on_ready_handler"]
