"""Classify a path's values as number, date, boolean, string or object."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from unitprefs.core.defaults import BOOLEAN_UNIT, EPOCH_MILLIS_UNIT, TIMESTAMP_BASE_UNITS
from unitprefs.models.units import ValueKind

RFC3339_RE = re.compile(
    r"^([0-9]+)-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])[Tt]"
    r"([01][0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9]|60)(\.[0-9]+)?"
    r"(([Zz])|([+-]([01][0-9]|2[0-3]):[0-5][0-9]))$"
)


def is_date_unit(units: str | None) -> bool:
    return units in TIMESTAMP_BASE_UNITS


def is_epoch_millis_unit(units: str | None) -> bool:
    """True when a numeric timestamp in ``units`` counts milliseconds, not seconds."""
    if not units:
        return False
    return units == EPOCH_MILLIS_UNIT or "millis" in units.lower()


def is_rfc3339(text: str) -> bool:
    return RFC3339_RE.match(text) is not None


def classify_value(units: str | None, sample: Any = None) -> ValueKind:
    """Decide a value kind from a unit string and an optional observed sample.

    Known date units win; then the sample's own type; a unit string with no
    sample means a number (``bool`` means a boolean); anything else is unknown.
    """
    if is_date_unit(units):
        return ValueKind.DATE

    if sample is not None:
        if isinstance(sample, bool):
            return ValueKind.BOOLEAN
        if isinstance(sample, (int, float)):
            return ValueKind.NUMBER
        if isinstance(sample, str):
            return ValueKind.DATE if is_rfc3339(sample) else ValueKind.STRING
        if isinstance(sample, (datetime, date)):
            return ValueKind.DATE
        return ValueKind.OBJECT

    if units == BOOLEAN_UNIT:
        return ValueKind.BOOLEAN
    if units:
        return ValueKind.NUMBER
    return ValueKind.UNKNOWN
