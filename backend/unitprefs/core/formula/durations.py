"""Duration formatters available to formulas as ``formatDurationXXX(value)``.

All take a number of seconds and return a display string.
"""

from __future__ import annotations

import math

from unitprefs.errors import InvalidInputError


def _check(total_seconds: float) -> float:
    if isinstance(total_seconds, bool) or not isinstance(total_seconds, (int, float)):
        raise InvalidInputError(f"Invalid duration value: {total_seconds!r}")
    if not math.isfinite(total_seconds) or total_seconds < 0:
        raise InvalidInputError(f"Invalid duration value: {total_seconds}")
    return float(total_seconds)


def _split(total_seconds: float) -> tuple[int, int, int, int]:
    """Break seconds into (days, hours, minutes, seconds), all floored."""
    whole = math.floor(total_seconds)
    days, rest = divmod(whole, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return days, hours, minutes, seconds


def _millis(total_seconds: float) -> int:
    # 999.6 ms rounds to 1000; clamp so the field stays three digits
    return min(round((total_seconds % 1) * 1000), 999)


def format_duration_dhms(total_seconds: float) -> str:
    """DD:HH:MM:SS"""
    days, hours, minutes, seconds = _split(_check(total_seconds))
    return f"{days:02d}:{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_duration_hms(total_seconds: float) -> str:
    """HH:MM:SS, hours are not wrapped at 24."""
    whole = math.floor(_check(total_seconds))
    hours, rest = divmod(whole, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_duration_hms_millis(total_seconds: float) -> str:
    """HH:MM:SS.mmm"""
    total = _check(total_seconds)
    return f"{format_duration_hms(total)}.{_millis(total):03d}"


def format_duration_ms(total_seconds: float) -> str:
    """MM:SS, minutes are not wrapped at 60."""
    whole = math.floor(_check(total_seconds))
    minutes, seconds = divmod(whole, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_duration_ms_millis(total_seconds: float) -> str:
    """MM:SS.mmm"""
    total = _check(total_seconds)
    return f"{format_duration_ms(total)}.{_millis(total):03d}"


def format_duration_verbose(total_seconds: float, delimiter: str = " ") -> str:
    """Non-zero units spelled out, e.g. ``2 days 3 hours 15 minutes``.

    Zero seconds gives an empty string.
    """
    parts = []
    for amount, unit in zip(_split(_check(total_seconds)), ("day", "hour", "minute", "second")):
        if amount:
            parts.append(f"{amount} {unit}" + ("" if amount == 1 else "s"))
    return delimiter.join(parts)


def format_duration_compact(total_seconds: float) -> str:
    """The two largest units, e.g. ``2d 3h``, ``1h 2m``, ``15m 45s`` or ``5s``."""
    days, hours, minutes, seconds = _split(_check(total_seconds))
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


DURATION_FUNCTIONS = {
    "formatDurationDHMS": format_duration_dhms,
    "formatDurationHMS": format_duration_hms,
    "formatDurationHMSMillis": format_duration_hms_millis,
    "formatDurationMS": format_duration_ms,
    "formatDurationMSMillis": format_duration_ms_millis,
    "formatDurationVerbose": format_duration_verbose,
    "formatDurationCompact": format_duration_compact,
}
