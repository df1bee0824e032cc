from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .coercion import as_decimal

"""Display formatting for prices.

Formats whatever value it is given (rounded or manually entered) and never
applies the rounding policy itself:
- integers have no decimal point          160    -> "160"
- a single fractional 5 is padded         107.5  -> "107.50"
- a .95 ending is kept                    160.95 -> "160.95"
- anything else is shown with 2 decimals  42.3   -> "42.30"
"""

__all__ = [
    "format_price",
]

CENT = Decimal("0.01")


def _plain(value: Decimal) -> str:
    # normalize() drops trailing zeros; "f" avoids exponent notation
    return format(value.normalize(), "f")


def _is_integral(value: Decimal) -> bool:
    return value == value.to_integral_value()


def _integer_text(value: Decimal) -> str:
    # no int() round trip: very large values would hit the int-to-str digit limit
    return format(value.to_integral_value(), "f")


def format_price(price: Any) -> str:
    value = as_decimal(price)
    if _is_integral(value):
        return _integer_text(value)

    with localcontext() as ctx:
        # wide enough for every digit of the value and for two decimal places
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits), value.adjusted() + 4)
        text = _plain(value)
        fraction = text.split(".", 1)[1]
        if fraction == "5":
            return text + "0"
        if fraction == "95":
            return text
        cents = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if _is_integral(cents):
        return _integer_text(cents)
    return format(cents, "f")
