from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

"""Item records for the re-pricing pipeline.

CandidateItem is what the row extractor produces for one data row.
The deduplicator stores the same shape (UniqueItem) per item code.
ProcessedItem is the final output unit; it stays mutable because the
manual-edit interface overwrites ``new_price`` in place.
"""

__all__ = [
    "CandidateItem",
    "UniqueItem",
    "ProcessedItem",
]


@dataclass(frozen=True)
class CandidateItem:
    """One extracted data row, before unit filtering and deduplication.

    ``unit`` and ``section`` keep the raw cell values; they are compared with
    coercing equality later, so text "1" and number 1 are treated alike.
    """
    item_code: Any  # column 0, "" when absent
    item_name: Any  # column 1, "" when absent
    original_price: Decimal  # column 2, unparsable -> 0
    unit: Any  # column 3 (raw)
    section: Any  # column 8 (raw), None when the row stops short of it
    source_row_number: int  # 1-based sheet row (header is row 1)
    code_missing: bool = False  # column 0 was empty; item_code holds the "" default

    @property
    def dedup_key(self) -> Any:
        """Raw code cell: an empty cell and an empty-text code stay apart."""
        return None if self.code_missing else self.item_code


# Stored per item code by the deduplicator; the shape is identical.
UniqueItem = CandidateItem


@dataclass
class ProcessedItem:
    """Final re-priced item.

    Invariant: ``price_increased`` is True iff ``percentage`` is non-zero.
    ``new_price`` is the rounded price, or a manual override set afterwards.
    """
    item_code: Any
    item_name: Any
    original_price: Decimal
    new_price: Decimal
    price_increased: bool
    section: Any
    percentage: Decimal  # 0, 7 or 7.5 with the default tiers
    output_index: int  # 0-based position in the final list
