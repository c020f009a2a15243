"""
Text Utilities
String truncation, pluralisation and human readable durations
"""

import re
from typing import Any, List, Optional

ELLIPSIS = "..."

NUMBER_FORMAT = re.compile(r"\B(?=(\d{3})+(?!\d))")

MILLIS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


def strip_str(s: str, limit: int, ellipsis: bool = True) -> Optional[str]:
    """
    Cap a string at ``limit`` characters.

    With ``ellipsis`` a cut string ends in "..." and still fits the limit.
    Returns None when the limit is too small to hold any text plus the
    ellipsis (limit < 4).
    """
    if ellipsis:
        if limit < 4:
            return None
        if len(s) <= limit:
            return s
        return s[:limit - len(ELLIPSIS)] + ELLIPSIS

    return s[:limit]


def singular_or_plural(word: str, n: int) -> str:
    return word if n == 1 else f"{word}s"


def as_text(millis: int) -> str:
    """
    Format a duration in milliseconds as English text.

    Examples:
        0         -> "0 seconds"
        61000     -> "1 minute and 1 second"
        90061000  -> "1 day, 1 hour, 1 minute, and 1 second"
    """
    total_seconds = millis // MILLIS_PER_SECOND
    total_minutes = total_seconds // SECONDS_PER_MINUTE
    total_hours = total_minutes // MINUTES_PER_HOUR

    units = [
        ("day", total_hours // HOURS_PER_DAY),
        ("hour", total_hours % HOURS_PER_DAY),
        ("minute", total_minutes % MINUTES_PER_HOUR),
        ("second", total_seconds % SECONDS_PER_MINUTE),
    ]

    parts: List[str] = [
        f"{value} {singular_or_plural(unit, value)}"
        for unit, value in units
        if value > 0
    ]

    if not parts:
        return "0 seconds"
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return f"{', '.join(parts[:-1])}, and {parts[-1]}"


def format_number(num: Any) -> str:
    """
    Format number with commas.

    Args:
        num: Number to format

    Returns:
        Formatted number string
    """
    if not isinstance(num, (int, float)):
        return str(num)
    return NUMBER_FORMAT.sub(",", str(num))
