from __future__ import annotations

from typing import Any

from ..models.items import CandidateItem, UniqueItem

"""Deduplication by item code.

The latest occurrence of a code wins on every field, while the code keeps
the output position of its first occurrence. A dict gives exactly this:
re-assigning an existing key replaces the value without moving the key.
"""

__all__ = [
    "Deduplicator",
]


class Deduplicator:
    """Ordered item-code map with last-write-wins values.

    Keys are the raw code cells (``CandidateItem.dedup_key``); rows without a
    code share the ``None`` key.

    ``duplicate_count`` counts overwrite events, so three rows with the same
    code add 2.
    """

    def __init__(self) -> None:
        self._items: dict[Any, UniqueItem] = {}
        self.duplicate_count = 0

    def add(self, candidate: CandidateItem) -> None:
        key = candidate.dedup_key
        if key in self._items:
            self.duplicate_count += 1
        self._items[key] = candidate

    def items(self) -> list[UniqueItem]:
        """Unique items in first-appearance order."""
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items
