from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import Any

"""Value coercion helpers shared by the pipeline stages.

Spreadsheet cells arrive as text, numbers or None. Unit and section codes are
compared with coercing equality (text "1" equals number 1), and prices are
parsed leniently from the leading numeric part of a cell.
"""

__all__ = [
    "loosely_equals",
    "to_number",
    "as_decimal",
    "parse_leading_decimal",
]

_NUMERIC_TEXT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def to_number(value: Any) -> float | None:
    """Numeric view of a cell for coercing comparison.

    None and non-numeric text have no numeric view. Blank text counts as 0,
    booleans as 0/1.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Number):
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        if _NUMERIC_TEXT.match(text):
            return float(text)
        return None
    return None


def loosely_equals(value: Any, target: Any) -> bool:
    """Coercing equality: ``"1" == 1``, ``" 4 " == 4``, ``None != 0``."""
    if value is None or target is None:
        return value is None and target is None
    if isinstance(value, str) and isinstance(target, str):
        return value == target
    left = to_number(value)
    right = to_number(target)
    if left is None or right is None:
        return False
    # NaN never compares equal
    return left == right


def as_decimal(value: Any) -> Decimal:
    """Convert a number to Decimal through its shortest text form.

    ``as_decimal(200.3)`` is ``Decimal("200.3")``, not the binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(float(value)))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e


def parse_leading_decimal(value: Any) -> Decimal | None:
    """Parse the leading numeric part of a cell ("12.5 EGP" -> 12.5).

    Returns None when nothing numeric can be read or the value is not a
    finite double (text such as "1e5000" overflows and is rejected too).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Number):
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        return as_decimal(value if isinstance(value, (int, Decimal)) else number)
    if isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if m is None:
            return None
        parsed = Decimal(m.group(1))
        return parsed if math.isfinite(float(parsed)) else None
    return None
