"""Run a selected conversion on one raw value, dispatched on its kind."""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, assert_never

from unitprefs.core.conversion.results import Executed
from unitprefs.core.conversion.selector import SelectedConversion
from unitprefs.core.date_formats import DATE_FORMATS, EPOCH_SECONDS, strip_local_suffix
from unitprefs.core.formula.dates import (
    epoch_seconds,
    format_instant,
    from_epoch,
    parse_instant,
    to_iso_string,
)
from unitprefs.core.formula.evaluator import check_value, evaluate_formula
from unitprefs.core.resolver.value_types import is_epoch_millis_unit
from unitprefs.errors import DateFormatError, InvalidInputError
from unitprefs.models.units import ValueKind
from unitprefs.utils.formatting import format_number, join_symbol

ISO_8601 = "ISO-8601"


def plain_text(value: Any) -> str:
    """Best-effort display string for a value nothing converts."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, default=str)
        except ValueError:
            # circular containers
            return repr(value)
    return str(value)


def _pass_through(raw_value: Any, kind: ValueKind, selection: SelectedConversion) -> Executed:
    formatted = plain_text(raw_value)
    if (
        kind is ValueKind.NUMBER
        and not isinstance(raw_value, bool)
        and isinstance(raw_value, (int, float))
        and math.isfinite(raw_value)
    ):
        formatted = format_number(raw_value, selection.display_format)
    return Executed(raw_value, formatted, kind, selection.display_format)


def _number(raw_value: Any, selection: SelectedConversion) -> Executed:
    value = check_value(raw_value)
    result = evaluate_formula(selection.formula, value)
    if isinstance(result, str):
        # duration formatters keep the numeric input as the converted value
        return Executed(raw_value, join_symbol(result, selection.symbol), ValueKind.STRING, selection.display_format)
    formatted = format_number(result, selection.display_format)
    return Executed(result, join_symbol(formatted, selection.symbol), ValueKind.NUMBER, selection.display_format)


def to_instant(raw_value: Any, base_unit: str | None) -> datetime:
    """Normalize an ISO string, a date object or a numeric epoch to a UTC datetime."""
    if isinstance(raw_value, bool):
        raise DateFormatError(f"Cannot interpret boolean {raw_value} as a date")
    if isinstance(raw_value, (int, float)):
        return from_epoch(raw_value, millis=is_epoch_millis_unit(base_unit))
    return parse_instant(raw_value)


def _date(
    raw_value: Any,
    selection: SelectedConversion,
    use_local_time: bool | None,
    tz_name: str | None,
) -> Executed:
    if selection.is_identity:
        return Executed(raw_value, plain_text(raw_value), ValueKind.DATE, selection.display_format)

    instant = to_instant(raw_value, selection.base_unit)
    target_key, local_suffix = strip_local_suffix(selection.target_unit.lower())
    format_key = (selection.conversion.date_format or target_key).lower()
    if use_local_time is None:
        use_local_time = bool(selection.conversion.use_local_time)
    use_local = local_suffix or use_local_time

    if format_key == EPOCH_SECONDS:
        seconds = epoch_seconds(instant)
        return Executed(seconds, str(seconds), ValueKind.DATE, EPOCH_SECONDS, EPOCH_SECONDS, False)

    date_format = DATE_FORMATS.get(format_key)
    if date_format is None or date_format.pattern is None:
        iso = to_iso_string(instant)
        return Executed(iso, iso, ValueKind.DATE, ISO_8601, ISO_8601, use_local)

    formatted = format_instant(instant, date_format.pattern, use_local, tz_name)
    return Executed(formatted, formatted, ValueKind.DATE, format_key, format_key, use_local)


def _boolean(raw_value: Any, selection: SelectedConversion) -> Executed:
    if not isinstance(raw_value, bool):
        raise InvalidInputError(f"Expected a boolean, got {raw_value!r}")
    return Executed(raw_value, plain_text(raw_value), ValueKind.BOOLEAN, selection.display_format)


def _string(raw_value: Any, selection: SelectedConversion) -> Executed:
    return Executed(raw_value, plain_text(raw_value), ValueKind.STRING, selection.display_format)


def _object(raw_value: Any, selection: SelectedConversion) -> Executed:
    try:
        formatted = json.dumps(raw_value, default=str)
    except ValueError as exc:
        raise InvalidInputError(f"Cannot serialize object value: {exc}") from exc
    return Executed(raw_value, formatted, ValueKind.OBJECT, selection.display_format)


def execute(
    kind: ValueKind,
    raw_value: Any,
    selection: SelectedConversion,
    *,
    use_local_time: bool | None = None,
    tz_name: str | None = None,
) -> Executed:
    """Convert ``raw_value`` as a value of ``kind``.

    Raises InvalidInputError, FormulaError subclasses or DateFormatError;
    callers decide whether to degrade or propagate.
    """
    if selection.pass_through:
        return _pass_through(raw_value, kind, selection)

    if kind is ValueKind.NUMBER:
        return _number(raw_value, selection)
    elif kind is ValueKind.DATE:
        return _date(raw_value, selection, use_local_time, tz_name)
    elif kind is ValueKind.BOOLEAN:
        return _boolean(raw_value, selection)
    elif kind is ValueKind.STRING:
        return _string(raw_value, selection)
    elif kind is ValueKind.OBJECT:
        return _object(raw_value, selection)
    elif kind is ValueKind.UNKNOWN:
        return Executed(raw_value, plain_text(raw_value), ValueKind.UNKNOWN, selection.display_format)
    else:
        assert_never(kind)
