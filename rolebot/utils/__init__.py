"""
Reaction Role Bot - Utilities Package
======================================
"""

from .discord_errors import HTTP_STATUS_DESCRIPTIONS, log_http_error
from .helpers import resolve_member, safe_fetch_message

__all__ = [
    "HTTP_STATUS_DESCRIPTIONS",
    "log_http_error",
    "resolve_member",
    "safe_fetch_message",
]
