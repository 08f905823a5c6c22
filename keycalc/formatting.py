"""Number strings for keycalc: canonical operand form and display grouping.

Operands are stored as plain decimal strings. canonical() turns a float back
into that form after arithmetic; format_number() is display-only and never
feeds back into engine state.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from keycalc.models import ERROR_SENTINEL

# Digits with at most one point and an optional leading minus. Deliberately
# narrower than float(): no exponents, no inf/nan spellings, no whitespace.
_OPERAND_RE = re.compile(r"-?(\d+\.?\d*|\.\d+)")

# Enough significant digits to quantize any finite float without
# raising InvalidOperation (floats top out around 1e308).
_QUANTIZE_PREC = 400


def parse_operand(text: str) -> Optional[float]:
    """Parse an operand string, or None if it is not a complete number."""
    if not _OPERAND_RE.fullmatch(text):
        return None
    return float(text)


def canonical(value: float, precision: Optional[int] = None) -> str:
    """Minimal plain-decimal string for a finite float.

    With precision, the value is first rounded half away from zero to that
    many fractional digits. The float's shortest repr is what gets rounded,
    so 1.005 rounds to 1.01 rather than inheriting binary noise.

    Args:
        value: Finite float.
        precision: Fractional digits to keep, or None for no rounding.

    Returns:
        e.g. 10.0 -> "10", 0.1 + 0.2 -> "0.3" (precision 10), 1e-05 -> "0.00001".

    Raises:
        ValueError: for inf or nan, which have no operand form.
    """
    if not math.isfinite(value):
        raise ValueError(f"No canonical form for {value!r}")
    d = Decimal(repr(value))
    with localcontext() as ctx:
        ctx.prec = _QUANTIZE_PREC
        if precision is not None:
            d = d.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        if d.is_zero():
            return "0"
        text = format(d, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _group(digits: str, separator: str) -> str:
    """Group a run of digits in threes from the right."""
    head = len(digits) % 3 or 3
    parts = [digits[:head]]
    parts.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return separator.join(parts)


def format_number(text: str, separator: str = ",") -> str:
    """Format an operand string for display.

    The integer part is grouped with separator; the fractional part is kept
    exactly as typed (trailing zeros and a trailing point included).
    """
    if text == ERROR_SENTINEL:
        return text

    integer, point, fraction = text.partition(".")
    sign = ""
    if integer.startswith("-"):
        sign, integer = "-", integer[1:]
    integer_display = sign + _group(integer, separator) if integer else sign

    if point:
        return f"{integer_display}.{fraction}"
    return integer_display
