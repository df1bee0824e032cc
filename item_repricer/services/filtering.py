from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..models.items import CandidateItem
from .coercion import loosely_equals

"""Unit filter: only items whose unit code loosely equals an allowed unit pass."""

__all__ = [
    "DEFAULT_ALLOWED_UNITS",
    "UnitFilter",
    "keep_unit",
]

DEFAULT_ALLOWED_UNITS: tuple[Any, ...] = (1, 4)


def keep_unit(unit: Any, allowed_units: Iterable[Any] = DEFAULT_ALLOWED_UNITS) -> bool:
    return any(loosely_equals(unit, allowed) for allowed in allowed_units)


class UnitFilter:
    """Stateful unit filter counting the rows it rejects."""

    def __init__(self, allowed_units: Iterable[Any] = DEFAULT_ALLOWED_UNITS) -> None:
        self.allowed_units = tuple(allowed_units)
        self.removed_count = 0

    def keep(self, item: CandidateItem) -> bool:
        if keep_unit(item.unit, self.allowed_units):
            return True
        self.removed_count += 1
        return False
