"""
Reaction Role Bot - Handlers Package
=====================================

Event handlers for bot lifecycle and Discord events.
"""

from rolebot.handlers.ready import on_ready_handler
from rolebot.handlers.reactions import on_reaction_add_handler
from rolebot.handlers.shutdown import shutdown_handler

__all__ = [
    "on_ready_handler",
    "on_reaction_add_handler",
    "shutdown_handler",
]
