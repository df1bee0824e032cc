from __future__ import annotations

import math
import threading
from collections.abc import MutableSequence
from decimal import Decimal, InvalidOperation

from ..models.items import ProcessedItem
from .formatting import format_price

"""Manual price overrides.

An override replaces ``new_price`` of one item directly; neither the
markup nor the rounding policy is applied to it. Edits to the same index are
serialized; edits to different indexes do not wait on each other.
"""

__all__ = [
    "InvalidPriceError",
    "ItemIndexError",
    "PriceEditor",
    "parse_manual_price",
]


class InvalidPriceError(ValueError):
    """The entered price is not a finite positive number."""


class ItemIndexError(IndexError):
    """No item exists at the requested index."""


def parse_manual_price(raw_value: str) -> Decimal:
    text = str(raw_value).strip()
    try:
        price = Decimal(text)
    except InvalidOperation as e:
        raise InvalidPriceError(f"invalid price {raw_value!r}: not a number") from e
    # a double-precision view bounds the magnitude: "1e5000" overflows, "1e-5000" is 0
    if not price.is_finite() or not math.isfinite(float(price)):
        raise InvalidPriceError(f"invalid price {raw_value!r}: not a finite number")
    if float(price) <= 0:
        raise InvalidPriceError(f"invalid price {raw_value!r}: must be positive")
    return price


class PriceEditor:
    """Point-update interface over a processed item list."""

    def __init__(self, items: MutableSequence[ProcessedItem]) -> None:
        self._items = items
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, index: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(index)
            if lock is None:
                lock = self._locks[index] = threading.Lock()
            return lock

    def display_price(self, index: int) -> str:
        return format_price(self._item(index).new_price)

    def _item(self, index: int) -> ProcessedItem:
        if not 0 <= index < len(self._items):
            raise ItemIndexError(f"no item at index {index} (items: {len(self._items)})")
        return self._items[index]

    def set_item_price(self, index: int, raw_value: str) -> str:
        """Store ``raw_value`` as the new price of item ``index``.

        Returns:
            Display string of the stored price

        Raises:
            InvalidPriceError: value is not a finite positive number; the
                stored price is left unchanged
            ItemIndexError: index out of range
        """
        price = parse_manual_price(raw_value)
        item = self._item(index)
        display = format_price(price)
        with self._lock_for(index):
            item.new_price = price
        return display
