"""
Reaction Role Bot - Configuration Module
=========================================

Environment loading and validation for the reaction -> role mapping.

The bot watches exactly one message and maps exactly one reaction to one
role. All of it comes from the environment (a .env file is honored by the
entry point) and is read once at startup.
"""

import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

import discord

from rolebot.core.logger import logger


# =============================================================================
# Types
# =============================================================================

ReactionKey = Union[int, str]
"""Custom emoji ID (int) or unicode emoji (str)."""


# =============================================================================
# Configuration Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass
class ConfigValidationResult:
    """Result of configuration validation."""
    valid: bool
    missing_required: list[str] = field(default_factory=list)
    missing_optional: list[str] = field(default_factory=list)
    invalid_format: list[tuple[str, str]] = field(default_factory=list)  # (var_name, reason)


# Required environment variables (bot won't start without these)
REQUIRED_ENV_VARS: list[str] = [
    "DISCORD_TOKEN",
    "GUILD_ID",
    "CHANNEL_ID",
    "MESSAGE_ID",
    "REACTION_ID",
    "ROLE_ID",
]

# Variables that must hold a Discord snowflake
SNOWFLAKE_ENV_VARS: list[str] = [
    "GUILD_ID",
    "CHANNEL_ID",
    "MESSAGE_ID",
    "ROLE_ID",
]

OPTIONAL_ENV_VARS: dict[str, str] = {
    "DEBUG": "Verbose debug logging",
    "LOG_DIR": "Log folder location (defaults to ./logs)",
    "LOG_TIMEZONE": "Timezone for log timestamps (defaults to UTC)",
}

# <:name:id> or <a:name:id>
CUSTOM_EMOJI_PATTERN = re.compile(r"^<a?:[A-Za-z0-9_~]+:([0-9]+)>$")

# Emoji presentation selector, often dropped when an emoji is copy-pasted
VARIATION_SELECTOR = "\ufe0f"


# =============================================================================
# Timeouts
# =============================================================================

MESSAGE_CACHE_TIMEOUT: float = 15.0  # Startup guild -> channel -> message lookup (seconds)
SHUTDOWN_TIMEOUT: float = 10.0


# =============================================================================
# Reaction Role Configuration
# =============================================================================

def is_snowflake(value: str) -> bool:
    """True for a plain ASCII run of digits, the only form int() and Discord both accept."""
    return value.isascii() and value.isdigit()


def _strip_variation_selectors(name: str) -> str:
    return name.replace(VARIATION_SELECTOR, "")


def parse_reaction_key(value: str) -> ReactionKey:
    """
    Normalize a REACTION_ID value.

    Accepts a bare custom emoji ID ("123"), custom emoji markup
    ("<:name:123>", "<a:name:123>") or a unicode emoji ("👍").

    Raises:
        ConfigValidationError: If the value is blank.
    """
    value = value.strip()
    if not value:
        raise ConfigValidationError("REACTION_ID is empty")

    if is_snowflake(value):
        return int(value)

    match = CUSTOM_EMOJI_PATTERN.match(value)
    if match:
        return int(match.group(1))

    return _strip_variation_selectors(value)


@dataclass(frozen=True)
class ReactionRoleConfig:
    """Read-only mapping from the watched message's reaction to a role."""
    guild_id: int
    channel_id: int
    message_id: int
    reaction_to_role: Mapping[ReactionKey, int]

    def __post_init__(self) -> None:
        # Freeze the mapping so nothing can mutate it after startup
        object.__setattr__(self, "reaction_to_role", MappingProxyType({
            _strip_variation_selectors(key) if isinstance(key, str) else key: role_id
            for key, role_id in self.reaction_to_role.items()
        }))

    def role_for(self, emoji: discord.PartialEmoji) -> Optional[int]:
        """
        Return the role ID mapped to an emoji, or None.

        Custom emoji are matched by ID, unicode emoji by name with
        variation selectors ignored.
        """
        if emoji.id is not None:
            return self.reaction_to_role.get(emoji.id)
        if emoji.name:
            return self.reaction_to_role.get(_strip_variation_selectors(emoji.name))
        return None


def _read_env(var: str) -> str:
    value = os.getenv(var)
    if value is None or not value.strip():
        raise ConfigValidationError(f"{var} is missing from environment")
    return value.strip()


def _read_snowflake(var: str) -> int:
    value = _read_env(var)
    if not is_snowflake(value):
        raise ConfigValidationError(f"{var} must be a numeric Discord ID")
    return int(value)


def load_reaction_role_config() -> ReactionRoleConfig:
    """
    Build the reaction role configuration from the environment.

    Raises:
        ConfigValidationError: If a variable is missing or malformed.
    """
    return ReactionRoleConfig(
        guild_id=_read_snowflake("GUILD_ID"),
        channel_id=_read_snowflake("CHANNEL_ID"),
        message_id=_read_snowflake("MESSAGE_ID"),
        reaction_to_role={
            parse_reaction_key(_read_env("REACTION_ID")): _read_snowflake("ROLE_ID"),
        },
    )


def validate_config() -> ConfigValidationResult:
    """
    Validate all environment variables at startup.

    Returns:
        ConfigValidationResult with validation status and any issues found.
    """
    result = ConfigValidationResult(valid=True)

    for var in REQUIRED_ENV_VARS:
        value = os.getenv(var)
        if not value or not value.strip():
            result.missing_required.append(var)
            result.valid = False

    for var in OPTIONAL_ENV_VARS:
        if not os.getenv(var):
            result.missing_optional.append(var)

    for var in SNOWFLAKE_ENV_VARS:
        value = os.getenv(var)
        if value and value.strip() and not is_snowflake(value.strip()):
            result.invalid_format.append((var, "Must be a numeric Discord ID"))
            result.valid = False

    return result


def validate_and_log_config() -> ReactionRoleConfig:
    """
    Validate configuration, log the results and return the loaded config.

    Raises:
        ConfigValidationError: If required configuration is missing or invalid.
    """
    result = validate_config()

    for var in result.missing_required:
        logger.error("Missing Required Configuration", [
            ("Variable", var),
            ("Action", f"Add {var}=<value> to your .env file"),
        ])

    for var, reason in result.invalid_format:
        logger.error("Invalid Configuration Format", [
            ("Variable", var),
            ("Reason", reason),
        ])

    if result.missing_optional:
        logger.debug("Optional Settings Using Defaults", [
            ("Variables", ", ".join(result.missing_optional)),
        ])

    if not result.valid:
        raise ConfigValidationError(
            f"Missing required config: {', '.join(result.missing_required) or 'none'}"
            + (f"; Invalid format: {', '.join(v for v, _ in result.invalid_format)}" if result.invalid_format else "")
        )

    config = load_reaction_role_config()

    (reaction, role_id), = config.reaction_to_role.items()
    logger.info("Configuration Validated Successfully", [
        ("Guild", str(config.guild_id)),
        ("Channel", str(config.channel_id)),
        ("Message", str(config.message_id)),
        ("Reaction", str(reaction)),
        ("Role", str(role_id)),
    ])

    return config


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "ConfigValidationError",
    "ConfigValidationResult",
    "ReactionKey",
    "ReactionRoleConfig",
    "REQUIRED_ENV_VARS",
    "OPTIONAL_ENV_VARS",
    "MESSAGE_CACHE_TIMEOUT",
    "SHUTDOWN_TIMEOUT",
    "is_snowflake",
    "parse_reaction_key",
    "load_reaction_role_config",
    "validate_config",
    "validate_and_log_config",
]
