"""Tests for environment loading and the reaction -> role mapping."""

import discord
import pytest

from rolebot.core import config as config_module
from rolebot.core.config import (
    ConfigValidationError,
    ReactionRoleConfig,
    load_reaction_role_config,
    parse_reaction_key,
    validate_and_log_config,
    validate_config,
)

VALID_ENV = {
    "DISCORD_TOKEN": "token",
    "GUILD_ID": "111",
    "CHANNEL_ID": "222",
    "MESSAGE_ID": "333",
    "REACTION_ID": "444",
    "ROLE_ID": "555",
}


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch):
    for var, value in VALID_ENV.items():
        monkeypatch.setenv(var, value)
    return monkeypatch


class TestParseReactionKey:
    def test_numeric_id(self):
        assert parse_reaction_key("123456") == 123456

    def test_custom_emoji_markup(self):
        assert parse_reaction_key("<:verify:987654>") == 987654

    def test_animated_custom_emoji_markup(self):
        assert parse_reaction_key("<a:party_blob:42>") == 42

    def test_unicode_emoji(self):
        assert parse_reaction_key(" ✅ ") == "✅"

    def test_blank_raises(self):
        with pytest.raises(ConfigValidationError):
            parse_reaction_key("   ")


class TestReactionRoleConfig:
    def test_custom_emoji_matches_by_id(self, config):
        emoji = discord.PartialEmoji(name="renamed", id=4000)
        assert config.role_for(emoji) == 5000

    def test_unicode_emoji_matches_by_name(self):
        config = ReactionRoleConfig(1, 2, 3, {"✅": 9})
        assert config.role_for(discord.PartialEmoji(name="✅")) == 9

    def test_other_emoji_has_no_role(self, config):
        assert config.role_for(discord.PartialEmoji(name="other", id=1)) is None
        assert config.role_for(discord.PartialEmoji(name="👍")) is None

    def test_custom_emoji_does_not_match_unicode_key_by_name(self):
        config = ReactionRoleConfig(1, 2, 3, {"verify": 9})
        assert config.role_for(discord.PartialEmoji(name="verify", id=77)) is None

    def test_mapping_is_read_only(self, config):
        with pytest.raises(TypeError):
            config.reaction_to_role[1] = 2

    def test_fields_are_frozen(self, config):
        with pytest.raises(AttributeError):
            config.message_id = 1


class TestLoadReactionRoleConfig:
    def test_loads_all_values(self, env):
        config = load_reaction_role_config()

        assert config.guild_id == 111
        assert config.channel_id == 222
        assert config.message_id == 333
        assert dict(config.reaction_to_role) == {444: 555}

    def test_missing_variable_is_named(self, env):
        env.delenv("ROLE_ID")

        with pytest.raises(ConfigValidationError, match="ROLE_ID is missing from environment"):
            load_reaction_role_config()

    def test_non_numeric_snowflake_raises(self, env):
        env.setenv("GUILD_ID", "my-guild")

        with pytest.raises(ConfigValidationError, match="GUILD_ID"):
            load_reaction_role_config()


class TestValidateConfig:
    def test_valid_environment(self, env):
        result = validate_config()

        assert result.valid
        assert result.missing_required == []
        assert result.invalid_format == []

    def test_reports_missing_required(self, env):
        env.delenv("DISCORD_TOKEN")
        env.setenv("MESSAGE_ID", "  ")

        result = validate_config()

        assert not result.valid
        assert result.missing_required == ["DISCORD_TOKEN", "MESSAGE_ID"]

    def test_reports_invalid_format(self, env):
        env.setenv("CHANNEL_ID", "general")

        result = validate_config()

        assert not result.valid
        assert [var for var, _ in result.invalid_format] == ["CHANNEL_ID"]

    def test_reaction_id_may_be_unicode(self, env):
        env.setenv("REACTION_ID", "✅")

        assert validate_config().valid

    def test_validate_and_log_returns_config(self, env, monkeypatch):
        monkeypatch.setattr(config_module, "logger", _SilentLogger())

        config = validate_and_log_config()

        assert config.message_id == 333

    def test_validate_and_log_raises_on_invalid(self, env, monkeypatch):
        silent = _SilentLogger()
        monkeypatch.setattr(config_module, "logger", silent)
        env.delenv("REACTION_ID")

        with pytest.raises(ConfigValidationError, match="REACTION_ID"):
            validate_and_log_config()
        assert ("Missing Required Configuration", "REACTION_ID") in silent.errors


class _SilentLogger:
    def __init__(self):
        self.errors = []

    def error(self, msg, details=None):
        self.errors.append((msg, dict(details or [])["Variable"]))

    def info(self, msg, details=None):
        pass

    def debug(self, msg, details=None):
        pass


class TestNonAsciiDigits:
    @pytest.mark.parametrize("value", ["²", "١٢٣", "12³"])
    def test_snowflake_rejects_non_ascii_digits(self, env, value):
        env.setenv("GUILD_ID", value)

        with pytest.raises(ConfigValidationError, match="GUILD_ID must be a numeric Discord ID"):
            load_reaction_role_config()
        assert [var for var, _ in validate_config().invalid_format] == ["GUILD_ID"]

    def test_reaction_key_with_superscript_stays_unicode(self):
        assert parse_reaction_key("²") == "²"

    def test_reaction_key_strips_variation_selector(self):
        assert parse_reaction_key("\u2764\ufe0f") == "\u2764"

    def test_config_keys_strip_variation_selector(self):
        config = ReactionRoleConfig(1, 2, 3, {"\u2764\ufe0f": 9})

        assert dict(config.reaction_to_role) == {"\u2764": 9}
        assert config.role_for(discord.PartialEmoji(name="\u2764")) == 9
