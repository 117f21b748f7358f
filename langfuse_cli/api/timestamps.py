"""
Timestamp Resolution - ISO 8601 passthrough and relative phrase parsing
"""

import re
from typing import Any

import dateparser

from langfuse_cli.observability import mainLogger

ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T")

_PARSER_SETTINGS = {
    "RETURN_AS_TIMEZONE_AWARE": True,
    "PREFER_DATES_FROM": "past",
}


def is_iso_timestamp(value: Any) -> bool:
    """Return True if value starts with an ISO 8601 date-time prefix"""
    return isinstance(value, str) and ISO_PREFIX.match(value) is not None


def resolve_timestamp(value: str) -> str:
    """
    Normalize a user-supplied timestamp

    ISO 8601 date-times are returned unchanged. Anything else goes through
    dateparser ("1 hour ago", "yesterday", "2024-01-01"); when that yields
    nothing the original string is returned as-is.

    Args:
        value: Timestamp string as typed by the user

    Returns:
        ISO 8601 string, or the input when it cannot be parsed
    """
    if not isinstance(value, str) or is_iso_timestamp(value):
        return value

    try:
        parsed = dateparser.parse(value, settings=_PARSER_SETTINGS)
    except (ValueError, TypeError, OverflowError) as e:
        mainLogger.debug("Timestamp parse failed", value=value, error=str(e))
        return value

    if parsed is None:
        mainLogger.debug("Timestamp not recognized, passing through", value=value)
        return value

    return parsed.isoformat()
