"""
Reaction Role Bot - Reaction Handler
=====================================

Grant the configured role when the configured reaction is added to the
watched message.

Only additions are handled. Removing a reaction never removes the role,
because another bot manages the same role and toggling races with it.
"""

from typing import TYPE_CHECKING, Optional

import discord

from rolebot.core.logger import logger
from rolebot.utils import log_http_error, resolve_member

if TYPE_CHECKING:
    from rolebot.bot import RoleBot


class RoleGrantError(Exception):
    """Raised when a matching reaction cannot be turned into a role grant."""
    pass


# =============================================================================
# Role Grant
# =============================================================================

async def grant_role_from_reaction(
    bot: "RoleBot",
    payload: discord.RawReactionActionEvent
) -> Optional[discord.Role]:
    """
    Add the configured role to the member who reacted.

    Args:
        bot: The RoleBot instance
        payload: Raw reaction event from the gateway

    Returns:
        The role that was added, or None when the reaction is not ours
        or the member already has the role.

    Raises:
        RoleGrantError: If the guild, role or member cannot be resolved.
        discord.HTTPException: If adding the role fails.
    """
    config = bot.config

    if bot.user is not None and payload.user_id == bot.user.id:
        return None

    if payload.guild_id is None or payload.guild_id != config.guild_id:
        return None

    if payload.message_id != config.message_id:
        return None

    role_id = config.role_for(payload.emoji)
    if role_id is None:
        return None

    guild = bot.get_guild(payload.guild_id)
    if guild is None:
        raise RoleGrantError("guild not found")

    role = guild.get_role(role_id)
    if role is None:
        raise RoleGrantError("role not found")

    member = await resolve_member(guild, payload.user_id, payload.member)
    if member is None:
        raise RoleGrantError(f"member not found with id: {payload.user_id}")

    if member.get_role(role.id) is not None:
        logger.debug("Member Already Has Role", [
            ("Role", role.name),
            ("Member", f"{member.display_name} ({member.id})"),
        ])
        return None

    await member.add_roles(role, reason=f"Reacted with {payload.emoji} on message {payload.message_id}")
    bot.roles_granted += 1

    logger.success(f"Added {role.name} role for user {member.display_name}", [
        ("Role ID", str(role.id)),
        ("Member ID", str(member.id)),
        ("Emoji", str(payload.emoji)),
    ])
    return role


# =============================================================================
# Reaction Handler
# =============================================================================

async def on_reaction_add_handler(
    bot: "RoleBot",
    payload: discord.RawReactionActionEvent
) -> None:
    """
    Event handler for when a reaction is added to any message.

    Errors are logged here and never reach the client's event loop.
    """
    context = [
        ("User ID", str(payload.user_id)),
        ("Message ID", str(payload.message_id)),
        ("Emoji", str(payload.emoji)),
    ]

    try:
        await grant_role_from_reaction(bot, payload)
    except discord.HTTPException as e:
        log_http_error(e, "Add Role", context)
    except RoleGrantError as e:
        logger.error_tree("Role Grant Failed", e, context)
    except Exception as e:
        logger.exception("Error While Processing Reaction Add", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)),
            *context,
        ])


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["RoleGrantError", "grant_role_from_reaction", "on_reaction_add_handler"]
