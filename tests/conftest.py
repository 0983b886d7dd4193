"""Shared fixtures for the reaction role bot tests."""

import os
import tempfile
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# The logger is created at import time; keep its files out of the repo
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="rolebot-logs-"))

import discord
import pytest

from rolebot.core.config import ReactionRoleConfig

GUILD_ID = 1000
CHANNEL_ID = 2000
MESSAGE_ID = 3000
EMOJI_ID = 4000
ROLE_ID = 5000
BOT_USER_ID = 9000
USER_ID = 7000


@pytest.fixture
def config():
    return ReactionRoleConfig(
        guild_id=GUILD_ID,
        channel_id=CHANNEL_ID,
        message_id=MESSAGE_ID,
        reaction_to_role={EMOJI_ID: ROLE_ID},
    )


@pytest.fixture
def role():
    role = MagicMock()
    role.id = ROLE_ID
    role.name = "Verified"
    return role


@pytest.fixture
def member():
    member = MagicMock()
    member.id = USER_ID
    member.display_name = "someone"
    member.get_role.return_value = None
    member.add_roles = AsyncMock()
    return member


@pytest.fixture
def guild(role, member):
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.get_role.side_effect = lambda role_id: role if role_id == ROLE_ID else None
    guild.get_member.return_value = None
    guild.fetch_member = AsyncMock(return_value=member)
    return guild


@pytest.fixture
def bot(config, guild):
    bot = MagicMock()
    bot.config = config
    bot.user.id = BOT_USER_ID
    bot.roles_granted = 0
    bot.target_message = None
    bot.get_guild.side_effect = lambda guild_id: guild if guild_id == GUILD_ID else None
    return bot


@pytest.fixture
def make_payload(member):
    """Build a raw reaction event; defaults match the configured reaction."""
    def _make(
        emoji=None,
        user_id=USER_ID,
        guild_id=GUILD_ID,
        message_id=MESSAGE_ID,
        with_member=True,
    ):
        return SimpleNamespace(
            emoji=emoji or discord.PartialEmoji(name="verify", id=EMOJI_ID),
            user_id=user_id,
            guild_id=guild_id,
            message_id=message_id,
            channel_id=CHANNEL_ID,
            member=member if with_member else None,
        )
    return _make


def http_error(cls=discord.HTTPException, status=500, text="boom"):
    """Instantiate a discord.py HTTP exception without a real response."""
    response = MagicMock()
    response.status = status
    response.reason = "Error"
    return cls(response, text)
