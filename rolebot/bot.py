"""
Reaction Role Bot - Main Bot Class
===================================

Discord client that grants a role to anyone who adds the configured
reaction to the configured message.

┌──────────────────────────────────────────────┐
│                  bot.py                      │
│  - intents and event routing                 │
│  - read-only ReactionRoleConfig              │
└──────────────────────────────────────────────┘
          │              │              │
          ▼              ▼              ▼
     ready.py      reactions.py    shutdown.py
   (cache msg)     (grant role)    (summary)
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import discord

from rolebot.core.config import SHUTDOWN_TIMEOUT, ReactionRoleConfig
from rolebot.core.logger import logger
from rolebot.handlers import on_ready_handler, on_reaction_add_handler, shutdown_handler


# =============================================================================
# RoleBot Class
# =============================================================================

class RoleBot(discord.Client):
    """
    Reaction role client.

    INTENTS REQUIRED:
    - guilds: Guild, channel and role cache
    - guild_messages: Fetch the watched message
    - guild_reactions: Reaction add events
    - members: Member cache for role assignment
    """

    def __init__(self, config: ReactionRoleConfig) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        intents.guild_reactions = True
        intents.members = True

        super().__init__(intents=intents)

        self.config = config
        self.target_message: Optional[discord.Message] = None

        self.started_at: datetime = datetime.now(timezone.utc)
        self.roles_granted: int = 0

        # on_ready fires again after reconnects
        self._ready_initialized: bool = False

    # =========================================================================
    # Event Handlers
    # =========================================================================

    async def on_ready(self) -> None:
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True
        await on_ready_handler(self)

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        """Raw event so reactions on uncached messages are seen too."""
        await on_reaction_add_handler(self, payload)

    async def on_resumed(self) -> None:
        logger.info("Bot Connection Resumed")

    async def close(self) -> None:
        """Cleanup when bot is shutting down."""
        if not self.is_closed():
            try:
                async with asyncio.timeout(SHUTDOWN_TIMEOUT):
                    await shutdown_handler(self)
            except asyncio.TimeoutError:
                logger.warning("Shutdown Handler Timed Out", [
                    ("Timeout", f"{SHUTDOWN_TIMEOUT}s"),
                ])
        await super().close()


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["RoleBot"]
