"""
Reaction Role Bot - Main Entry Point
=====================================

Application entry point with configuration validation and graceful startup.

This module handles:
- Environment configuration loading (.env supported)
- Graceful error handling and logging
- Bot initialization and execution

Usage:
    python main.py

Environment Variables:
    DISCORD_TOKEN: Required. Discord bot authentication token.
    GUILD_ID, CHANNEL_ID, MESSAGE_ID: Required. The watched message.
    REACTION_ID: Required. Custom emoji ID, <:name:id> markup or unicode emoji.
    ROLE_ID: Required. Role granted for the reaction.
"""

import os
import sys
import signal
from typing import NoReturn, Tuple

# Load .env BEFORE importing local modules that read the environment at
# import time (the logger picks up LOG_DIR and LOG_TIMEZONE)
from dotenv import load_dotenv
load_dotenv()

from rolebot.core.logger import logger
from rolebot.core.config import ConfigValidationError, ReactionRoleConfig, validate_and_log_config
from rolebot.bot import RoleBot


# =============================================================================
# Configuration
# =============================================================================

def load_configuration() -> Tuple[str, ReactionRoleConfig]:
    """
    Load and validate environment configuration.

    Returns:
        Discord bot token and the reaction role configuration.

    Raises:
        SystemExit: If required configuration is missing.
    """
    try:
        config = validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Configuration Validation Failed", [
            ("Error", str(e)),
            ("Action", "Check your .env file"),
        ])
        sys.exit(1)

    return os.environ["DISCORD_TOKEN"].strip(), config


# =============================================================================
# Signal Handlers
# =============================================================================

def _setup_signal_handlers() -> None:
    """Exit cleanly on SIGTERM/SIGHUP (Ctrl+C is handled by discord.py)."""
    def handle_signal(signum: int, frame) -> None:
        logger.info("Signal Received", [
            ("Signal", signal.Signals(signum).name),
            ("Action", "Initiating shutdown"),
        ])
        sys.exit(0)

    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, handle_signal)

    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, handle_signal)


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> NoReturn:
    """
    Main entry point for the reaction role bot.

    Raises:
        SystemExit: On startup failure or clean shutdown.
    """
    token, config = load_configuration()

    _setup_signal_handlers()

    try:
        logger.tree(
            "Starting Reaction Role Bot",
            [
                ("Message ID", str(config.message_id)),
                ("PID", str(os.getpid())),
                ("Run ID", logger.run_id),
            ],
            emoji="🚀",
        )

        bot = RoleBot(config)
        bot.run(token)

    except KeyboardInterrupt:
        logger.info("Shutdown Requested", [
            ("By", "User (Ctrl+C)"),
        ])
        sys.exit(0)

    except Exception as e:
        logger.exception("Fatal Error During Bot Execution", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)),
        ])
        sys.exit(1)

    sys.exit(0)


# =============================================================================
# Script Execution
# =============================================================================

if __name__ == "__main__":
    main()
