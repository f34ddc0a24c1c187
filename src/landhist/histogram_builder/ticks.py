"""Axis tick spacing, tick labels and number formatting for histogram charts.

These helpers reproduce what the chart front end shows, so numbers are
rounded half-up and rendered the way a browser prints them (``2`` not
``2.0``, ``1e-7`` not ``1e-07``).
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any

MINUS_SIGN = "−"


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves towards +inf (browser Math.round)."""
    return math.floor(x + 0.5)


def format_number(value: float) -> str:
    """Shortest round-trip text for a number, as a browser prints it."""
    if isinstance(value, bool):
        value = int(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    text = repr(float(value))
    if "e" in text:
        if 1e-6 <= abs(value) < 1e21:
            return format(Decimal(text), "f")
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{int(exponent):+d}"
    return text


def to_fixed(value: float, digits: int = 2) -> str:
    """Fixed-point text with ``digits`` decimals, as a browser's toFixed.

    Ties on the exact binary value round away from zero (0.125 -> "0.13").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return format_number(value)
    sign = "-" if value < 0 else ""
    quantum = Decimal(1).scaleb(-digits)
    return sign + format(Decimal(abs(value)).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def tick_step_size(max: float, min: float) -> float:
    """Pick a tick step giving roughly five ticks between min and max.

    Args:
        max: The maximum value shown on the histogram.
        min: The minimum value shown on the histogram.
    """
    s = (max - min) / 4
    if s < 0.5:
        return 0.5
    if s < 1:
        return 1
    if s > 100:
        order_of_magnitude = 10 ** math.floor(math.log10(s))
        return round_half_up(s / order_of_magnitude) * order_of_magnitude
    return round_half_up(s)


def pretty_label(value: Any, with_sign: bool = False) -> Any:
    """Pretty-print a number for chart tick labels.

    Millions and thousands become 'M' and 'K', and negatives get a true
    minus sign instead of a hyphen. Non-numeric input is returned unchanged.

    Args:
        value: The number to pretty-print.
        with_sign: Prefix positive values with '+'.
    """
    if not isinstance(value, Real):
        return value
    plus = "+" if with_sign else ""
    if value == 0:
        return "0"
    if value >= 1_000_000:
        return f"{plus}{format_number(value / 1_000_000)}M"
    if value >= 1_000:
        return f"{plus}{format_number(value / 1_000)}K"
    if value <= -1_000_000:
        return f"{MINUS_SIGN}{format_number(abs(value / 1_000_000))}M"
    if value <= -1_000:
        return f"{MINUS_SIGN}{format_number(abs(value / 1_000))}K"
    if value >= 0:
        return f"{plus}{format_number(value)}"
    return f"{MINUS_SIGN}{format_number(abs(value))}"
