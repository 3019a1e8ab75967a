"""General-purpose helper utilities for keyword volumes, rounding, and timestamps."""

import math
import re
from datetime import datetime, timezone
from typing import Any

_LEADING_NUMBER = re.compile(r"\s*(\d+(?:\.\d+)?)")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's built-in ``round`` uses banker's rounding, which would turn
    an average of 2.5 into 2.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(2.49)
        2
    """
    return int(math.floor(value + 0.5))


def format_search_volume(volume: int) -> str:
    """Format a monthly search volume for display.

    Args:
        volume: Integer volume.

    Returns:
        ``"1.5k"`` style string for values >= 1000, else the bare integer.
        Ties round up, so 1250 gives ``"1.3k"``.

    Examples:
        >>> format_search_volume(1500)
        '1.5k'
        >>> format_search_volume(999)
        '999'
    """
    if volume >= 1000:
        return f"{round_half_up(volume / 100) / 10:.1f}k"
    return str(volume)


def parse_search_volume(value: Any) -> int:
    """Parse a display volume back into an integer.

    Commas are stripped and a trailing ``k`` multiplies by 1000.
    Anything that does not start with a number parses as 0.

    Examples:
        >>> parse_search_volume("1,200")
        1200
        >>> parse_search_volume("1.5k")
        1500
        >>> parse_search_volume("n/a")
        0
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    text = str(value).replace(",", "").strip().lower()
    multiplier = 1
    if text.endswith("k"):
        multiplier = 1000
        text = text[:-1]
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0
    number = float(match.group(1))
    if multiplier == 1:
        return int(number)
    return round_half_up(number * multiplier)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
