"""Number formatting driven by display-format templates like ``"0.00"``."""

import math


def decimal_places(display_format: str | None) -> int:
    """Count decimals in a template: ``"0"`` -> 0, ``"0.0"`` -> 1, ``"0.00"`` -> 2."""
    if not display_format or "." not in display_format:
        return 0
    return len(display_format.split(".", 1)[1])


def format_number(value: float, display_format: str | None) -> str:
    """Fixed-point rendering of ``value`` with the template's decimal places."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite value {value}")
    text = f"{value:.{decimal_places(display_format)}f}"
    if text.startswith("-") and float(text) == 0:
        text = text[1:]  # "-0.0"
    return text


def join_symbol(text: str, symbol: str | None) -> str:
    """``"9.7" + "kn"`` -> ``"9.7 kn"``; no trailing space when there is no symbol."""
    return f"{text} {symbol or ''}".strip()
