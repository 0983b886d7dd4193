"""
Reaction Role Bot - Discord Error Logging
==========================================

Status-aware logging for discord.py HTTP exceptions.
"""

from typing import Any, List, Optional, Tuple

import discord

from rolebot.core.logger import logger


# Statuses a role grant can realistically hit: (description, admin hint)
HTTP_STATUS_DESCRIPTIONS: dict[int, tuple[str, str]] = {
    403: ("Forbidden", "Grant Manage Roles and move the bot's role above the target role"),
    404: ("Not Found", "Check that the role, member and message still exist"),
    429: ("Rate Limited", "Discord will accept the request again after the retry window"),
}

# Recoverable without a code change; everything else is logged as an error
WARNING_STATUSES = frozenset(HTTP_STATUS_DESCRIPTIONS)


def log_http_error(
    e: discord.HTTPException,
    operation: str,
    context: Optional[List[Tuple[str, Any]]] = None,
) -> None:
    """
    Log a Discord HTTPException.

    403, 404 and 429 are logged as warnings with a hint for the server
    admin; any other status is logged as an error.

    Args:
        e: The HTTPException that occurred
        operation: What failed (e.g., "Add Role")
        context: Additional (key, value) rows
    """
    description, hint = HTTP_STATUS_DESCRIPTIONS.get(
        e.status,
        ("Server Error" if e.status >= 500 else "Unexpected Status", ""),
    )

    log_items: List[Tuple[str, Any]] = [
        ("Status", f"{e.status} ({description})"),
        ("Error", e.text or str(e)),
    ]

    retry_after = getattr(e, "retry_after", None)
    if retry_after:
        log_items.append(("Retry After", f"{retry_after:.1f}s"))

    if context:
        log_items.extend(context)

    if e.status in WARNING_STATUSES:
        log_items.append(("Action", hint))
        logger.warning(f"{operation} {description}", log_items)
    else:
        logger.error(f"{operation} Failed", log_items)


__all__ = ["HTTP_STATUS_DESCRIPTIONS", "WARNING_STATUSES", "log_http_error"]
