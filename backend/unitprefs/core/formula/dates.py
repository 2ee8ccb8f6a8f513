"""Instant parsing and pattern-based date rendering.

Patterns use date-fns style letters so stored date-format tables stay
portable between clients:

    yyyy yy y     year            MMMM MMM MM M   month
    dd d          day of month    EEEE EEE        weekday
    HH H          hour (0-23)     hh h            hour (1-12)
    mm m          minute          ss s            second
    SSS           fraction        a               AM/PM
    'text'        literal text    ''              a single quote

Names are always English; rendering never depends on the host locale.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from unitprefs.errors import DateFormatError

UTC = timezone.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_PATTERN_TOKEN_RE = re.compile(r"''|'(?:[^']|'')*'|([A-Za-z])\1*|[^A-Za-z']+|'")


# ── Parsing ──────────────────────────────────────────────────────────────────

def parse_instant(value: str | datetime | date) -> datetime:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Naive timestamps are taken to be UTC. Raises DateFormatError rather than
    falling back to the current time.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise DateFormatError("Empty date value")
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as exc:
            raise DateFormatError(f"Invalid ISO-8601 date value: {value!r}") from exc
    else:
        raise DateFormatError(f"Cannot interpret {type(value).__name__} as a date")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_epoch(value: float, millis: bool = False) -> datetime:
    """Convert a numeric epoch (seconds, or milliseconds) into a UTC datetime."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise DateFormatError(f"Invalid epoch value: {value!r}")
    try:
        return EPOCH + timedelta(milliseconds=value if millis else value * 1000)
    except OverflowError as exc:
        raise DateFormatError(f"Epoch value out of range: {value}") from exc


def to_iso_string(dt: datetime) -> str:
    """Render as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    dt = dt.astimezone(UTC)
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def epoch_seconds(value: str | datetime) -> int:
    """Whole seconds since the epoch, floored."""
    return (parse_instant(value) - EPOCH) // timedelta(seconds=1)


# ── Rendering ────────────────────────────────────────────────────────────────

def resolve_timezone(name: str | None) -> tzinfo | None:
    """Look up an IANA zone. ``None`` means the host's local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise DateFormatError(f"Unknown timezone: {name!r}") from exc


def _render_field(token: str, dt: datetime) -> str:
    letter, width = token[0], len(token)

    if letter == "y":
        if width == 2:
            return f"{dt.year % 100:02d}"
        return str(dt.year).zfill(width)
    if letter == "M":
        if width >= 4:
            return MONTHS[dt.month - 1]
        if width == 3:
            return MONTHS[dt.month - 1][:3]
        return str(dt.month).zfill(width)
    if letter == "d":
        return str(dt.day).zfill(width)
    if letter == "E":
        name = WEEKDAYS[dt.weekday()]
        return name if width >= 4 else name[:3]
    if letter == "H":
        return str(dt.hour).zfill(width)
    if letter == "h":
        return str(dt.hour % 12 or 12).zfill(width)
    if letter == "m":
        return str(dt.minute).zfill(width)
    if letter == "s":
        return str(dt.second).zfill(width)
    if letter == "S":
        return f"{dt.microsecond:06d}"[:width].ljust(width, "0")
    if letter == "a":
        return "AM" if dt.hour < 12 else "PM"

    raise DateFormatError(f"Unsupported date pattern token '{token}'")


def render_pattern(dt: datetime, pattern: str) -> str:
    out: list[str] = []
    for m in _PATTERN_TOKEN_RE.finditer(pattern):
        token = m.group(0)
        if token == "''":
            out.append("'")
        elif token == "'":
            raise DateFormatError(f"Unterminated quote in date pattern {pattern!r}")
        elif token.startswith("'"):
            out.append(token[1:-1].replace("''", "'"))
        elif token[0].isalpha():
            out.append(_render_field(token, dt))
        else:
            out.append(token)
    return "".join(out)


def format_instant(
    value: str | datetime,
    pattern: str,
    use_local_time: bool = False,
    tz_name: str | None = None,
) -> str:
    """Parse ``value`` and render it with ``pattern``.

    With ``use_local_time`` the instant is shifted into ``tz_name`` (or the
    host zone when unset); otherwise it is rendered in UTC.
    """
    dt = parse_instant(value)
    if use_local_time:
        dt = dt.astimezone(resolve_timezone(tz_name))
    return render_pattern(dt, pattern)
