"""Named date formats offered as conversions for timestamp base units."""

from __future__ import annotations

from dataclasses import dataclass

EPOCH_SECONDS = "epoch-seconds"
LOCAL_SUFFIX = "-local"


@dataclass(frozen=True)
class DateFormat:
    key: str
    pattern: str | None  # None = special-cased (epoch-seconds)
    description: str


DATE_FORMATS: dict[str, DateFormat] = {
    f.key: f
    for f in (
        DateFormat("short-date", "MMM d, yyyy", "Short date (Oct 8, 2025)"),
        DateFormat("long-date", "EEEE, MMMM d, yyyy", "Long date (Wednesday, October 8, 2025)"),
        DateFormat("dd/mm/yyyy", "dd/MM/yyyy", "Day/month/year"),
        DateFormat("mm/dd/yyyy", "MM/dd/yyyy", "Month/day/year"),
        DateFormat("mm/yyyy", "MM/yyyy", "Month/year"),
        DateFormat("time-24hrs", "HH:mm:ss", "Time, 24 hour clock"),
        DateFormat("time-am/pm", "hh:mm:ss a", "Time, 12 hour clock"),
        DateFormat("short-date-24hrs", "MMM d, yyyy HH:mm:ss", "Short date and 24 hour time"),
        DateFormat("short-date-am/pm", "MMM d, yyyy hh:mm:ss a", "Short date and 12 hour time"),
        DateFormat("long-date-24hrs", "EEEE, MMMM d, yyyy HH:mm:ss", "Long date and 24 hour time"),
        DateFormat("long-date-am/pm", "EEEE, MMMM d, yyyy hh:mm:ss a", "Long date and 12 hour time"),
        DateFormat("dd/mm/yyyy-24hrs", "dd/MM/yyyy HH:mm:ss", "Day/month/year and 24 hour time"),
        DateFormat("dd/mm/yyyy-am/pm", "dd/MM/yyyy hh:mm:ss a", "Day/month/year and 12 hour time"),
        DateFormat("mm/dd/yyyy-24hrs", "MM/dd/yyyy HH:mm:ss", "Month/day/year and 24 hour time"),
        DateFormat("mm/dd/yyyy-am/pm", "MM/dd/yyyy hh:mm:ss a", "Month/day/year and 12 hour time"),
        DateFormat("iso-8601", "yyyy-MM-dd'T'HH:mm:ss", "ISO-8601 without zone"),
        DateFormat(EPOCH_SECONDS, None, "Seconds since 1970-01-01"),
    )
}


def strip_local_suffix(target_unit: str) -> tuple[str, bool]:
    """``"short-date-local"`` -> ``("short-date", True)``."""
    if target_unit.endswith(LOCAL_SUFFIX):
        return target_unit[: -len(LOCAL_SUFFIX)], True
    return target_unit, False
