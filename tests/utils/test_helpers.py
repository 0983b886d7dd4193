"""Tests for the Discord fetch helpers."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from rolebot.utils import helpers
from rolebot.utils.helpers import resolve_member, safe_fetch_message
from tests.conftest import USER_ID, http_error


@pytest.fixture
def fake_logger(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(helpers, "logger", fake)
    return fake


class TestSafeFetchMessage:
    @pytest.mark.asyncio
    async def test_returns_message(self):
        message = MagicMock()
        channel = MagicMock()
        channel.fetch_message = AsyncMock(return_value=message)

        assert await safe_fetch_message(channel, 1) is message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error, title", [
        (http_error(discord.NotFound, 404), "Message Not Found"),
        (http_error(discord.Forbidden, 403), "No Permission To Fetch Message"),
        (http_error(discord.HTTPException, 500), "HTTP Error Fetching Message"),
    ])
    async def test_errors_return_none(self, fake_logger, error, title):
        channel = MagicMock()
        channel.fetch_message = AsyncMock(side_effect=error)

        assert await safe_fetch_message(channel, 1) is None
        assert fake_logger.warning.call_args.args[0] == title


class TestResolveMember:
    @pytest.mark.asyncio
    async def test_prefers_event_member(self, guild, member):
        assert await resolve_member(guild, USER_ID, member) is member
        guild.get_member.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_member_returns_none(self, guild, fake_logger):
        guild.fetch_member = AsyncMock(side_effect=http_error(discord.NotFound, 404))

        assert await resolve_member(guild, USER_ID) is None
